"""Tests for CueSoundPlayer degradation when audio is unavailable."""

import logging
import os
from unittest.mock import Mock

import pytest

from tap_reset.audio import CueSound, CueSoundPlayer
from tap_reset.audio import audio
from tap_reset.config import AudioConfig


@pytest.fixture
def no_backend(monkeypatch):
    monkeypatch.setattr(audio, "init_audio_backend", lambda: None)


@pytest.fixture
def fake_pygame_backend(monkeypatch):
    monkeypatch.setattr(audio, "init_audio_backend", lambda: "pygame")


def test_bundled_clips_exist():
    for filename in AudioConfig.CUE_FILES.values():
        assert os.path.exists(os.path.join(AudioConfig.SOUND_DIR, filename))


def test_cue_names_match_clips():
    assert {cue.value for cue in CueSound} == set(AudioConfig.CUE_FILES)


def test_without_backend_play_is_noop(no_backend):
    player = CueSoundPlayer()

    player.play(CueSound.SINGLE)

    assert player.backend is None
    assert player.sounds == {}


def test_missing_clips_are_logged(fake_pygame_backend, tmp_path, caplog):
    caplog.set_level(logging.WARNING)

    player = CueSoundPlayer(sound_dir=str(tmp_path))
    player.play(CueSound.TRIPLE)

    assert player.sounds == {}
    assert "Cue clip not found" in caplog.text


def test_playback_error_is_swallowed(fake_pygame_backend, tmp_path, caplog):
    player = CueSoundPlayer(sound_dir=str(tmp_path))
    sound = Mock()
    sound.play.side_effect = RuntimeError("device busy")
    player.sounds[CueSound.DOUBLE] = sound

    player.play(CueSound.DOUBLE)

    sound.play.assert_called_once_with()
    assert "Cannot play cue 'double'" in caplog.text


def test_set_volume(fake_pygame_backend, tmp_path):
    player = CueSoundPlayer(sound_dir=str(tmp_path))
    sound = Mock()
    player.sounds[CueSound.SINGLE] = sound

    player.set_volume(0.25)
    player.set_volume(3.0)

    assert player.volume == 0.25
    sound.set_volume.assert_called_once_with(0.25)
