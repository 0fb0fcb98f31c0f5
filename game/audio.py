# game/audio.py
from typing import Dict, Optional, Protocol

import numpy as np
import pygame
import pygame.sndarray

from logger import get_logger

log = get_logger("Audio")

SAMPLE_RATE = 44100


class AudioSink(Protocol):
    """Fire-and-forget game sounds."""

    def shoot(self) -> None: ...

    def hit(self) -> None: ...

    def perfect_hit(self) -> None: ...

    def miss(self) -> None: ...

    def combo(self, level: int) -> None: ...

    def lock(self) -> None: ...


class NullAudio:
    def shoot(self) -> None:
        pass

    def hit(self) -> None:
        pass

    def perfect_hit(self) -> None:
        pass

    def miss(self) -> None:
        pass

    def combo(self, level: int) -> None:
        pass

    def lock(self) -> None:
        pass


def tone(freq: float, dur_ms: int, vol: float = 0.5, wave: str = "sine",
         freq_end: Optional[float] = None, decay: float = 4.0) -> np.ndarray:
    """Mono float32 samples; optional linear pitch sweep and exponential decay."""
    n = max(1, int(SAMPLE_RATE * dur_ms / 1000.0))
    f = np.linspace(freq, freq_end if freq_end is not None else freq, n)
    phase = 2 * np.pi * np.cumsum(f) / SAMPLE_RATE
    if wave == "square":
        w = np.sign(np.sin(phase))
    elif wave == "saw":
        w = 2.0 * (phase / (2 * np.pi) - np.floor(0.5 + phase / (2 * np.pi)))
    elif wave == "noise":
        w = np.random.uniform(-1.0, 1.0, size=n)
    else:
        w = np.sin(phase)
    env = np.exp(-np.linspace(0, decay, n)) if decay > 0 else np.ones(n)
    return (w * env * vol).astype(np.float32)


def mix(*parts: np.ndarray) -> np.ndarray:
    """Sum sample arrays, zero-padding the shorter ones."""
    out = np.zeros(max(len(p) for p in parts), dtype=np.float32)
    for p in parts:
        out[:len(p)] += p
    return out


def _to_sound(a: np.ndarray) -> "pygame.mixer.Sound":
    channels = pygame.mixer.get_init()[2]
    arr = np.stack([a] * channels, axis=1) if channels > 1 else a
    return pygame.sndarray.make_sound((np.clip(arr, -1.0, 1.0) * 32767).astype(np.int16))


class SoundBoard:
    """pygame mixer implementation of AudioSink; silent when the mixer can't start."""

    def __init__(self, volume: float = 0.8, muted: bool = False):
        self.volume = volume
        self.muted = muted
        self.enabled = False
        self.sounds: Dict[str, "pygame.mixer.Sound"] = {}
        self.combo_sounds: Dict[int, "pygame.mixer.Sound"] = {}
        self._init_audio()

    def _init_audio(self):
        if self.muted:
            return
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=2, buffer=512)
        except pygame.error as e:
            log.warning(f"Audio disabled: {e}")
            return
        self.enabled = True

        self.sounds = {
            # low thump plus a short click
            "shoot": _to_sound(mix(tone(150, 100, 0.5, freq_end=40),
                                   tone(1200, 40, 0.2, "square", decay=8),
                                   tone(0, 60, 0.15, "noise"))),
            "hit": _to_sound(tone(880, 180, 0.4, freq_end=1320)),
            "perfect_hit": _to_sound(np.concatenate([
                tone(880, 90, 0.35), tone(1108, 90, 0.35), tone(1320, 160, 0.4)])),
            "miss": _to_sound(tone(220, 200, 0.35, "saw", freq_end=110)),
            "lock": _to_sound(tone(1600, 50, 0.2, decay=2)),
        }
        for level in range(2, 11):
            self.combo_sounds[level] = _to_sound(tone(400 + level * 80, 120, 0.3, "square", decay=6))
        for s in list(self.sounds.values()) + list(self.combo_sounds.values()):
            s.set_volume(self.volume)

    def _play(self, sound):
        if self.enabled and sound is not None:
            sound.play()

    def shoot(self) -> None:
        self._play(self.sounds.get("shoot"))

    def hit(self) -> None:
        self._play(self.sounds.get("hit"))

    def perfect_hit(self) -> None:
        self._play(self.sounds.get("perfect_hit"))

    def miss(self) -> None:
        self._play(self.sounds.get("miss"))

    def combo(self, level: int) -> None:
        self._play(self.combo_sounds.get(min(level, 10)))

    def lock(self) -> None:
        self._play(self.sounds.get("lock"))
