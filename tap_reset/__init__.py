"""
tap_reset - Tap gesture resets for body-worn motion trackers

Detects repeated taps on a tracker from its acceleration and turns them into
skeleton resets with an audible confirmation cue.

Main components:
- config: Tuning constants and user settings
- skeleton: Interfaces to the host's skeleton and trackers
- detection: Tap detectors and the reset gesture manager
- audio: Cue clip playback
- core: Background audio worker
"""

from .config import TapDetectionSettings
from .detection import GestureState, TapDetectionManager, TapDetector
from .skeleton import BodySegment, HumanSkeleton, ImuTracker

__version__ = "1.0.0"

__all__ = [
    "TapDetectionSettings",
    "TapDetector",
    "TapDetectionManager",
    "GestureState",
    "BodySegment",
    "HumanSkeleton",
    "ImuTracker",
]
