"""
Detection Module - Acceleration tap detection and tap-triggered resets.

This module provides:
- Per-tracker tap counting (tap_detection.py)
- The three reset gestures and their confirmation logic (tap_detection_manager.py)
"""

from .tap_detection import TapDetector
from .tap_detection_manager import GestureState, TapDetectionManager, TapGesture

__all__ = [
    'TapDetector',
    'TapDetectionManager',
    'TapGesture',
    'GestureState',
]
