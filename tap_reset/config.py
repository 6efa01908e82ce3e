"""
Configuration module for tap_reset.

This module contains the tuning constants of the tap detectors and the runtime
settings object the host application fills in from its own configuration.
Centralizing configuration makes it easier to tune parameters and understand system behavior.

TUNING:
- If normal walking triggers resets: raise NEEDED_ACCEL_DELTA
- If taps are missed on soft trackers: lower NEEDED_ACCEL_DELTA
- If one tracker is not enough to veto body motion, raise number_trackers_over_threshold
"""

import logging
import os
from typing import Any, Dict, Mapping

logger = logging.getLogger(__name__)


# ==================== Tap Detector Configuration ====================
class TapDetectorConfig:
    """Thresholds and windows of the acceleration tap detector."""

    # Nanoseconds per second
    NS_CONVERTER = 1.0e9

    # Minimum max-min acceleration swing inside the clump window to count a tap
    NEEDED_ACCEL_DELTA = 6.0

    # Acceleration below which a tracker is considered at rest
    ALLOWED_BODY_ACCEL = 2.5
    ALLOWED_BODY_ACCEL_SQUARED = ALLOWED_BODY_ACCEL * ALLOWED_BODY_ACCEL

    # Window over which a single tap's rise and fall is observed (seconds)
    CLUMP_TIME = 0.06

    # Detection window grows by this much per expected tap (seconds)
    TIME_WINDOW_PER_TAP = 0.3

    # Max taps assumed before set_max_taps() is called (0.6 s window)
    DEFAULT_MAX_TAPS = 2

    # Moving non-watched trackers needed to veto a tap sequence
    DEFAULT_STATIC_BODY_THRESHOLD_COUNT = 1


# ==================== Gesture Defaults ====================
class GestureDefaults:
    """Default tap counts and confirmation delays of the three reset gestures."""

    QUICK_RESET_TAPS = 2
    QUICK_RESET_DELAY = 0.20        # seconds

    FULL_RESET_TAPS = 3
    FULL_RESET_DELAY = 1.00         # seconds

    MOUNTING_RESET_TAPS = 3
    MOUNTING_RESET_DELAY = 1.00     # seconds


# ==================== Audio Configuration ====================
class AudioConfig:
    """Configuration for cue playback."""

    # Directory holding the bundled cue clips
    SOUND_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "audio", "sounds")

    # Cue name -> file name
    CUE_FILES = {
        "single": "beep.wav",
        "double": "double_beep.wav",
        "triple": "triple_beep.wav",
    }

    # Playback volume (0.0 - 1.0)
    CUE_VOLUME = 0.8


# ==================== Worker Thread Configuration ====================
class WorkerConfig:
    """Configuration for background worker threads."""

    # Pending audio commands before new ones are dropped
    AUDIO_QUEUE_MAXSIZE = 16

    # Queue timeout (seconds)
    QUEUE_GET_TIMEOUT = 0.1

    # Thread shutdown timeout (seconds)
    THREAD_SHUTDOWN_TIMEOUT = 2.0


class TapDetectionSettings:
    """
    User-facing tap detection settings.

    The host application owns loading and saving these values; the
    TapDetectionManager only reads them in update_config().
    """

    def __init__(self) -> None:
        self.quick_reset_enabled: bool = True
        "Enable the quick (yaw) reset gesture. Defaults to True."
        self.quick_reset_taps: int = GestureDefaults.QUICK_RESET_TAPS
        "Taps needed for a quick reset. Defaults to 2."
        self.quick_reset_delay: float = GestureDefaults.QUICK_RESET_DELAY
        "Seconds after the last tap before the quick reset fires. Defaults to 0.2."

        self.full_reset_enabled: bool = True
        "Enable the full reset gesture. Defaults to True."
        self.full_reset_taps: int = GestureDefaults.FULL_RESET_TAPS
        "Taps needed for a full reset. Defaults to 3."
        self.full_reset_delay: float = GestureDefaults.FULL_RESET_DELAY
        "Seconds after the last tap before the full reset fires. Defaults to 1.0."

        self.mounting_reset_enabled: bool = True
        "Enable the mounting reset gesture. Defaults to True."
        self.mounting_reset_taps: int = GestureDefaults.MOUNTING_RESET_TAPS
        "Taps needed for a mounting reset. Defaults to 3."
        self.mounting_reset_delay: float = GestureDefaults.MOUNTING_RESET_DELAY
        "Seconds after the last tap before the mounting reset fires. Defaults to 1.0."

        self.number_trackers_over_threshold: int = (
            TapDetectorConfig.DEFAULT_STATIC_BODY_THRESHOLD_COUNT
        )
        "How many other torso/leg trackers must move to cancel a tap sequence. Defaults to 1."

    def load_dict(self, values: Mapping[str, Any]) -> None:
        """
        Load settings from a mapping, e.g. a section of the host's config file.
        Unknown keys are ignored with a warning.
        """
        for key, value in values.items():
            if key.startswith("_") or not hasattr(self, key):
                logger.warning(f"Ignoring unknown tap detection setting: {key}")
                continue
            setattr(self, key, value)

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in vars(self).items() if not k.startswith("_")}
