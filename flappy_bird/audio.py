"""Sound effects: wav clips when present, synthesised tones otherwise.

Playback is fire-and-forget on mixer channels. When the mixer is unavailable
every trigger degrades to the terminal alert character so gameplay is never
blocked on audio.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Iterable

import numpy as np
import pygame

from .config import SAMPLE_RATE, SOUND_DIR, SOUND_SPECS
from .state import SoundEvent

logger = logging.getLogger(__name__)

EVENT_SOUNDS = {
    SoundEvent.JUMP: "jump",
    SoundEvent.SCORE: "score",
    SoundEvent.COLLISION: "hit",
    SoundEvent.MENU_SELECT: "select",
    SoundEvent.TIER_UP: "speedup",
}


def tone_samples(
    frequency: float, duration_ms: int, volume: float, sample_rate: int = SAMPLE_RATE, channels: int = 1
) -> np.ndarray:
    """Sine wave as int16 samples, shaped (n,) for mono or (n, channels)."""
    n = int(sample_rate * duration_ms / 1000)
    t = np.arange(n, dtype=np.float64) / sample_rate
    wave = np.sin(2.0 * np.pi * frequency * t) * volume
    samples = (wave * 32767).astype(np.int16)
    if channels > 1:
        samples = np.column_stack([samples] * channels)
    return samples


def alert() -> None:
    """Basic alert signal used when no clip can be played."""
    sys.stdout.write("\a")
    sys.stdout.flush()


class SoundBoard:
    def __init__(self, sound_dir: str = SOUND_DIR) -> None:
        self.sound_dir = sound_dir
        self.sounds: dict[str, pygame.mixer.Sound] = {}
        self.available = False
        self._load()

    def _load(self) -> None:
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16)
            _, _, channels = pygame.mixer.get_init()
            for name, (filename, freq, duration, volume) in SOUND_SPECS.items():
                clip = self._load_clip(filename)
                if clip is None:
                    clip = pygame.sndarray.make_sound(tone_samples(freq, duration, volume, channels=channels))
                self.sounds[name] = clip
        except (pygame.error, ValueError) as exc:
            logger.warning("Error loading sounds: %s; falling back to alert signal", exc)
            self.sounds.clear()
            self.available = False
            return
        self.available = True
        logger.info("Sounds loaded successfully")

    def _load_clip(self, filename: str) -> pygame.mixer.Sound | None:
        path = os.path.join(self.sound_dir, filename)
        if not os.path.exists(path):
            logger.debug("Sound file not found: %s", path)
            return None
        try:
            return pygame.mixer.Sound(path)
        except pygame.error as exc:
            logger.warning("Error loading sound file %s: %s", path, exc)
            return None

    def play(self, name: str) -> None:
        sound = self.sounds.get(name)
        if not self.available or sound is None:
            alert()
            return
        try:
            sound.stop()
            sound.play()
        except pygame.error as exc:
            logger.warning("Error playing sound %s: %s", name, exc)
            alert()

    def play_events(self, events: Iterable[SoundEvent], enabled: bool = True) -> None:
        if not enabled:
            return
        for event in events:
            self.play(EVENT_SOUNDS[event])
