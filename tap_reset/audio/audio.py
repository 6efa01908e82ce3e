"""
Audio cue playback for tap gestures.

Each reset gesture announces itself with a short beep pattern as soon as its
tap count is reached, so the user knows to hold still until the reset fires.

HEADLESS MODE SUPPORT:
pyglet is tried first. On systems without X11 (e.g. a Raspberry Pi running the
tracking server) the backend falls back to pygame, whose mixer doesn't require
a display. With neither available, cues are silently skipped.
"""

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

from tap_reset.config import AudioConfig

logger = logging.getLogger(__name__)

AUDIO_BACKEND: Optional[str] = None
_backend_initialized = False


class CueSound(Enum):
    """
    Cue clips, one per reset gesture.
    """

    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"

    def __str__(self) -> str:
        return self.value


def init_audio_backend() -> Optional[str]:
    """
    Select the audio backend on first use.

    Returns:
        str: 'pyglet', 'pygame' or None if no backend could be initialized
    """
    global AUDIO_BACKEND, _backend_initialized

    if _backend_initialized:
        return AUDIO_BACKEND
    _backend_initialized = True

    try:
        # Set DISPLAY if not present (some systems can play audio without actual display)
        if 'DISPLAY' not in os.environ:
            os.environ['DISPLAY'] = ':0'
            logger.info("Set DISPLAY=:0 for pyglet audio")

        import pyglet.media  # noqa: F401
        AUDIO_BACKEND = 'pyglet'
        logger.info("Audio backend: pyglet")
    except Exception as e:
        logger.warning(f"Failed to initialize pyglet: {e}")
        logger.info("Attempting to use pygame as audio backend...")

        try:
            import pygame
            pygame.mixer.pre_init(frequency=22050, size=-16, channels=2, buffer=512)
            pygame.mixer.init()
            AUDIO_BACKEND = 'pygame'
            logger.info("Audio backend: pygame (headless compatible)")
        except Exception as e2:
            logger.error(f"Failed to initialize pygame: {e2}")
            logger.warning("No audio backend available, tap cues will not play.")
            AUDIO_BACKEND = None

    return AUDIO_BACKEND


class CueSoundPlayer:
    """
    Loads the three cue clips and plays them on request.

    Playback is fire-and-forget: play() returns immediately and any failure
    is logged rather than raised.
    """

    def __init__(self, sound_dir: Optional[str] = None, volume: float = AudioConfig.CUE_VOLUME):
        """
        Initialize the cue player.

        Args:
            sound_dir (str): Directory containing the cue clips. Defaults to the bundled sounds.
            volume (float): Playback volume between 0.0 and 1.0
        """
        self.sound_dir = sound_dir or AudioConfig.SOUND_DIR
        self.volume = volume
        self.backend = init_audio_backend()
        self.sounds: Dict[CueSound, Any] = {}

        for cue in CueSound:
            self._load(cue)

        logger.info(f"Initialized cue player ({self.backend}) with {len(self.sounds)} clips")

    def _load(self, cue: CueSound) -> None:
        path = os.path.join(self.sound_dir, AudioConfig.CUE_FILES[cue.value])
        if not os.path.exists(path):
            logger.warning(f"Cue clip not found: {path}")
            return
        if self.backend is None:
            return

        try:
            if self.backend == 'pyglet':
                import pyglet.media
                self.sounds[cue] = pyglet.media.load(path, streaming=False)
            elif self.backend == 'pygame':
                import pygame
                sound = pygame.mixer.Sound(path)
                sound.set_volume(self.volume)
                self.sounds[cue] = sound
        except Exception as e:
            logger.error(f"Cannot load cue clip {path}: {e}")

    def set_volume(self, volume: float) -> None:
        """
        Set the playback volume.

        Args:
            volume (float): Volume level between 0.0 and 1.0
        """
        if not 0 <= volume <= 1:
            logger.warning(f"Invalid volume {volume}, must be between 0.0 and 1.0")
            return

        self.volume = volume
        if self.backend == 'pygame':
            for sound in self.sounds.values():
                sound.set_volume(volume)
        logger.debug(f"Set cue volume to {volume}")

    def play(self, cue: CueSound) -> None:
        """Start playing a cue clip without waiting for it to finish."""
        sound = self.sounds.get(cue)
        if sound is None:
            logger.debug(f"No clip loaded for cue '{cue}'")
            return

        try:
            if self.backend == 'pyglet':
                player = sound.play()
                player.volume = self.volume
            else:
                sound.play()
            logger.debug(f"Playing cue '{cue}'")
        except Exception as e:
            logger.error(f"Cannot play cue '{cue}': {e}", exc_info=True)
