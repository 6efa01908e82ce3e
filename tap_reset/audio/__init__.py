"""
Audio Module - Cue playback for tap gestures.

This module provides:
- The cue clip names, one per reset gesture
- A cue player backed by pyglet or pygame
"""

from .audio import CueSound, CueSoundPlayer

__all__ = [
    'CueSound',
    'CueSoundPlayer',
]
