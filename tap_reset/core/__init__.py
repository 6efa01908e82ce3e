"""
Core Module - Background workers.

This module contains the audio worker thread that plays gesture cues
outside the tap detection tick.
"""

from .workers import AudioCommand, AudioWorker

__all__ = [
    'AudioCommand',
    'AudioWorker',
]
