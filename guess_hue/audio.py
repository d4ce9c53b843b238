from __future__ import annotations

import logging
import math
from array import array

import pygame

from .game_core import AlertKind
from .options import OptionsStore

logger = logging.getLogger(__name__)


class GameAudio:
    """Synthesized sound cues for picks and alerts.

    Nothing is loaded from disk; each cue is a short sine tone. When the mixer
    cannot start (no audio device) every call is a no-op.
    """

    _sample_rate = 22050
    _amp = 32767

    def __init__(self, options: OptionsStore) -> None:
        self._options = options
        self._available = False
        self._click: pygame.mixer.Sound | None = None
        self._alerts: dict[AlertKind, pygame.mixer.Sound] = {}
        self._channels = 1

        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=self._sample_rate, size=-16, channels=1, buffer=512)
            # The mixer may already be running with another format (pygame.init()).
            init = pygame.mixer.get_init()
            if init is not None:
                self._sample_rate = int(init[0])
                self._channels = max(1, int(init[2]))
            self._click = self._build_sound(((880.0, 0.045),), gain=0.35)
            self._alerts = {
                AlertKind.LEVEL_SUCCEEDED: self._build_sound(((523.0, 0.09), (784.0, 0.14)), gain=0.30),
                AlertKind.LEVEL_FAILED: self._build_sound(((330.0, 0.12), (262.0, 0.16)), gain=0.30),
                AlertKind.GAME_WON: self._build_sound(
                    ((523.0, 0.09), (659.0, 0.09), (784.0, 0.09), (1047.0, 0.22)), gain=0.30
                ),
                AlertKind.GAME_LOST: self._build_sound(((294.0, 0.16), (220.0, 0.16), (165.0, 0.30)), gain=0.30),
            }
            self._available = True
        except pygame.error as exc:
            logger.warning("Audio disabled: %s", exc)
            self._available = False

    @property
    def available(self) -> bool:
        return self._available

    def play_click(self) -> None:
        if self._click is not None:
            self._play(self._click)

    def play_alert(self, kind: AlertKind) -> None:
        sound = self._alerts.get(kind)
        if sound is not None:
            self._play(sound)

    def _play(self, sound: pygame.mixer.Sound) -> None:
        if not self._available or self._options.mute:
            return
        sound.play()

    def _build_sound(self, notes: tuple[tuple[float, float], ...], *, gain: float) -> pygame.mixer.Sound:
        pcm = array("h")
        for frequency_hz, duration_s in notes:
            pcm.extend(self._render_tone_pcm(frequency_hz, duration_s, gain=gain))
        return pygame.mixer.Sound(buffer=pcm.tobytes())

    def _render_tone_pcm(self, frequency_hz: float, duration_s: float, *, gain: float) -> array[int]:
        sample_count = max(1, int(self._sample_rate * duration_s))
        fade_n = max(1, int(self._sample_rate * 0.006))
        out = array("h")
        for idx in range(sample_count):
            envelope = 1.0
            if idx < fade_n:
                envelope = idx / float(fade_n)
            tail = sample_count - idx - 1
            if tail < fade_n:
                envelope = min(envelope, tail / float(fade_n))
            phase = (2.0 * math.pi * float(frequency_hz) * idx) / float(self._sample_rate)
            sample = math.sin(phase) * gain * max(0.0, envelope)
            value = int(max(-1.0, min(1.0, sample)) * self._amp)
            for _ in range(self._channels):
                out.append(value)
        return out
