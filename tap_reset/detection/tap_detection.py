"""
Acceleration tap detection for a single tracker.

A tap is a sharp rise and fall of acceleration magnitude inside a short clump
window. Taps are collected in a detection window whose length scales with the
number of taps the gesture expects, so a multi-tap gesture has to be completed
within 0.3 s per tap. Taps are only trusted while the rest of the body is still.
"""

import logging
import time
from typing import Optional

import numpy as np

from tap_reset.config import TapDetectorConfig
from tap_reset.skeleton import STATIC_CHECK_SEGMENTS, HumanSkeleton, Tracker
from tap_reset.utils import ArithmeticBuffer, TimedBuffer

logger = logging.getLogger(__name__)

NS_CONVERTER = TapDetectorConfig.NS_CONVERTER
CLUMP_TIME_NS = TapDetectorConfig.CLUMP_TIME * NS_CONVERTER


class TapDetector:
    """
    Counts clustered taps on one tracker.

    The detector is driven by update(), called once per processing tick after
    tracker acceleration has been refreshed. It never calls out to the
    skeleton other than to read tracker accelerations.
    """

    def __init__(self, skeleton: Optional[HumanSkeleton], tracker: Optional[Tracker] = None):
        """
        Initialize the tap detector.

        Args:
            skeleton (HumanSkeleton): Skeleton providing the trackers used for the static-body check
            tracker (Tracker): Tracker to detect taps on, may be None
        """
        self.skeleton = skeleton
        self._tracker = tracker
        self._enabled = False
        self.static_body_threshold_count = TapDetectorConfig.DEFAULT_STATIC_BODY_THRESHOLD_COUNT

        self.time_window_ns = (
            TapDetectorConfig.TIME_WINDOW_PER_TAP * TapDetectorConfig.DEFAULT_MAX_TAPS * NS_CONVERTER
        )
        self.accel_window = ArithmeticBuffer(max_life=CLUMP_TIME_NS)
        self.tap_window: TimedBuffer[float] = TimedBuffer(max_life=self.time_window_ns)

        # after a tap a return to rest is needed before the next one counts
        self.wait_for_low_accel = False

        self._taps = 0
        self._detection_time = -1.0

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, enabled: bool) -> None:
        self._enabled = bool(enabled)

    @property
    def tracker(self) -> Optional[Tracker]:
        """
        The tracker taps are detected on.
        """
        return self._tracker

    @tracker.setter
    def tracker(self, tracker: Optional[Tracker]) -> None:
        self._tracker = tracker

    @property
    def taps(self) -> int:
        """
        Highest tap count seen in the detection window since the last reset.
        """
        return self._taps

    @property
    def detection_time(self) -> float:
        """
        Timestamp (ns) of the last increase of `taps`, -1 if there was none.
        """
        return self._detection_time

    def set_max_taps(self, max_taps: int) -> None:
        """
        Size the detection window for a gesture of `max_taps` taps.
        """
        self.time_window_ns = TapDetectorConfig.TIME_WINDOW_PER_TAP * max_taps * NS_CONVERTER
        self.tap_window.max_life = self.time_window_ns

    def set_static_body_threshold_count(self, count: int) -> None:
        self.static_body_threshold_count = count

    def reset_detector(self) -> None:
        """Clear both windows and the tap count."""
        self.tap_window.clear()
        self.accel_window.clear()
        self._taps = 0

    def update(self, now_ns: Optional[float] = None) -> None:
        """
        Ingest one acceleration sample and update the tap count.

        Args:
            now_ns (float): Monotonic timestamp in nanoseconds. Defaults to time.monotonic_ns().
        """
        if self.skeleton is None or not self._enabled:
            return
        if self._tracker is None:
            return

        now = float(time.monotonic_ns() if now_ns is None else now_ns)

        magnitude = float(np.linalg.norm(self._tracker.get_acceleration()))
        self.accel_window.add(magnitude, now)
        self.accel_window.evict(now)

        # check for a tap
        if self.accel_window.spread() > TapDetectorConfig.NEEDED_ACCEL_DELTA and not self.wait_for_low_accel:
            self.tap_window.add(now, now)
            self.wait_for_low_accel = True

        if self.accel_window.max() < TapDetectorConfig.ALLOWED_BODY_ACCEL:
            self.wait_for_low_accel = False

        if self.tap_window.evict(now):
            return

        if not self._is_user_static():
            self.tap_window.clear()
            self.accel_window.clear()

        new_taps = len(self.tap_window)
        if new_taps > self._taps:
            self._taps = new_taps
            self._detection_time = now
            logger.debug(f"{new_taps} tap(s) on {self._tracker!r}")

    def _is_user_static(self) -> bool:
        """
        Check that fewer than `static_body_threshold_count` of the other torso,
        upper leg and foot trackers are accelerating above the rest threshold.
        With a single tracker on the body this check always passes.
        """
        moving = 0
        for segment in STATIC_CHECK_SEGMENTS:
            tracker = self.skeleton.get_tracker(segment)
            if tracker is None or tracker is self._tracker:
                continue
            accel = np.asarray(tracker.get_acceleration(), dtype=float)
            if float(np.dot(accel, accel)) > TapDetectorConfig.ALLOWED_BODY_ACCEL_SQUARED:
                moving += 1

        return moving < self.static_body_threshold_count
