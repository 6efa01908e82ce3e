"""
Tap-triggered resets for the skeleton.

Three gestures are recognised, each on its own tracker:

- quick reset: taps on the chest (or hip, or waist) reset tracker yaw
- full reset: taps on the left leg perform a full reset
- mounting reset: taps on the right leg perform a mounting reset

When a gesture's tap count is reached a cue is played; once no further tap has
arrived for the gesture's delay the reset fires and the detector starts over.
"""

import logging
import time
from enum import Enum
from typing import Callable, Optional, Sequence

from tap_reset.audio import CueSound
from tap_reset.config import TapDetectionSettings, TapDetectorConfig
from tap_reset.detection.tap_detection import TapDetector
from tap_reset.skeleton import BodySegment, HumanSkeleton, YawAligner

logger = logging.getLogger(__name__)

NS_CONVERTER = TapDetectorConfig.NS_CONVERTER


class GestureState(Enum):
    """
    Confirmation state of a tap gesture.
    """

    IDLE = "idle"
    " Fewer taps than required. "
    PENDING_CONFIRM = "pending_confirm"
    " Tap count reached, cue played, waiting for the delay to pass. "
    FIRED = "fired"
    " The reset ran on this tick and the detector was cleared. "


class TapGesture:
    """
    One tap detector bound to its tracker preferences, thresholds and reset action.
    """

    def __init__(self, name: str, detector: TapDetector, segments: Sequence[BodySegment],
                 cue: CueSound, action: Callable[[], None], required_taps: int, delay: float):
        self.name = name
        self.detector = detector
        self.segments = tuple(segments)
        self.cue = cue
        self.action = action
        self.required_taps = required_taps
        self.delay_ns = delay * NS_CONVERTER
        self.state = GestureState.IDLE

    def configure(self, enabled: bool, required_taps: int, delay: float) -> None:
        self.required_taps = required_taps
        self.delay_ns = delay * NS_CONVERTER
        self.detector.enabled = enabled
        self.detector.set_max_taps(required_taps)

    def __repr__(self) -> str:
        return f"TapGesture({self.name!r}, state={self.state.value})"


class TapDetectionManager:
    """
    Owns the quick, full and mounting reset tap detectors.

    update() must be called once per processing tick, after the trackers'
    acceleration has been refreshed for the frame.
    """

    def __init__(self, skeleton: Optional[HumanSkeleton], settings: Optional[TapDetectionSettings] = None,
                 yaw_aligner: Optional[YawAligner] = None, audio_worker=None):
        """
        Initialize the tap detection manager.

        Args:
            skeleton (HumanSkeleton): Skeleton whose trackers are watched and whose resets are triggered
            settings (TapDetectionSettings): User settings. Defaults to TapDetectionSettings().
            yaw_aligner (YawAligner): Notified before yaw and full resets, optional
            audio_worker (AudioWorker): Worker playing the gesture cues, optional
        """
        self.skeleton = skeleton
        self.settings = settings or TapDetectionSettings()
        self.yaw_aligner = yaw_aligner
        self.audio_worker = audio_worker

        self.quick_reset = TapGesture(
            "quick reset", TapDetector(skeleton),
            (BodySegment.CHEST, BodySegment.HIP, BodySegment.WAIST),
            CueSound.SINGLE, self._quick_reset,
            self.settings.quick_reset_taps, self.settings.quick_reset_delay,
        )
        self.full_reset = TapGesture(
            "full reset", TapDetector(skeleton),
            (BodySegment.LEFT_UPPER_LEG, BodySegment.LEFT_LOWER_LEG),
            CueSound.DOUBLE, self._full_reset,
            self.settings.full_reset_taps, self.settings.full_reset_delay,
        )
        self.mounting_reset = TapGesture(
            "mounting reset", TapDetector(skeleton),
            (BodySegment.RIGHT_UPPER_LEG, BodySegment.RIGHT_LOWER_LEG),
            CueSound.TRIPLE, self._mounting_reset,
            self.settings.mounting_reset_taps, self.settings.mounting_reset_delay,
        )
        self.gestures = (self.quick_reset, self.full_reset, self.mounting_reset)

        self.refresh_trackers()
        self.update_config()

    def refresh_trackers(self) -> None:
        """
        Bind each detector to the first available tracker of its preference list.
        Detectors without any candidate stay inert.
        """
        for gesture in self.gestures:
            tracker = None
            if self.skeleton is not None:
                tracker = self.skeleton.first_tracker(gesture.segments)
            gesture.detector.tracker = tracker
            if tracker is None:
                logger.info(f"No tracker available for {gesture.name} taps")

    def update_config(self) -> None:
        """Push the current settings into the detectors."""
        s = self.settings
        self.quick_reset.configure(s.quick_reset_enabled, s.quick_reset_taps, s.quick_reset_delay)
        self.full_reset.configure(s.full_reset_enabled, s.full_reset_taps, s.full_reset_delay)
        self.mounting_reset.configure(
            s.mounting_reset_enabled, s.mounting_reset_taps, s.mounting_reset_delay
        )
        for gesture in self.gestures:
            gesture.detector.set_static_body_threshold_count(s.number_trackers_over_threshold)

    def update(self, now_ns: Optional[float] = None) -> None:
        """
        Update all detectors and fire any confirmed gesture.

        Args:
            now_ns (float): Monotonic timestamp in nanoseconds. Defaults to time.monotonic_ns().
        """
        now = float(time.monotonic_ns() if now_ns is None else now_ns)

        for gesture in self.gestures:
            gesture.detector.update(now)

        for gesture in self.gestures:
            self._check_gesture(gesture, now)

    def _check_gesture(self, gesture: TapGesture, now: float) -> None:
        detector = gesture.detector
        # inert or disabled detectors keep their frozen state
        if self.skeleton is None or detector.tracker is None or not detector.enabled:
            return

        tapped = gesture.required_taps <= detector.taps

        if not tapped:
            if gesture.state is GestureState.PENDING_CONFIRM:
                logger.debug(f"Tap {gesture.name} dropped before confirmation")
            gesture.state = GestureState.IDLE
            return

        if gesture.state is not GestureState.PENDING_CONFIRM:
            self._play_cue(gesture.cue)
            gesture.state = GestureState.PENDING_CONFIRM

        if now - detector.detection_time > gesture.delay_ns:
            gesture.action()
            detector.reset_detector()
            gesture.state = GestureState.FIRED

    def _play_cue(self, cue: CueSound) -> None:
        if self.audio_worker is None:
            return
        self.audio_worker.play_cue(cue)

    def _yaw_align(self) -> None:
        if self.yaw_aligner is not None:
            self.yaw_aligner.yaw_align()

    def _quick_reset(self) -> None:
        self._yaw_align()
        logger.debug("Tap quick reset")
        self.skeleton.reset_trackers_yaw()

    def _full_reset(self) -> None:
        self._yaw_align()
        logger.debug("Tap full reset")
        self.skeleton.reset_trackers_full()

    def _mounting_reset(self) -> None:
        logger.debug("Tap mounting reset")
        self.skeleton.reset_trackers_mounting()
