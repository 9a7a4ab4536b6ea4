from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from .automation import Voice
from .output import AudioOutput

logger = logging.getLogger(__name__)

TONE_LEVEL = 0.1
ATTACK_SECONDS = 0.1
RELEASE_SECONDS = 0.1
DEFAULT_FREQUENCY_HZ = 400.0


@dataclass
class ToneState:
    is_playing: bool = False
    current_frequency: float = DEFAULT_FREQUENCY_HZ
    voice: Voice | None = None


class ToneEngine:
    """Single-voice sine player shared by every screen that makes sound.

    The engine owns at most one voice at a time. ``play`` while a tone is
    sounding retargets that voice; it never starts a second one. Every
    amplitude change is a short linear ramp scheduled on the output clock.
    """

    def __init__(
        self,
        output: AudioOutput,
        level: float = TONE_LEVEL,
        attack_seconds: float = ATTACK_SECONDS,
        release_seconds: float = RELEASE_SECONDS,
    ) -> None:
        self.output = output
        self.level = float(level)
        self.attack_seconds = float(attack_seconds)
        self.release_seconds = float(release_seconds)
        self.state = ToneState()
        self._init_attempted = False

    @property
    def is_playing(self) -> bool:
        return self.state.is_playing

    @property
    def current_frequency(self) -> float:
        return self.state.current_frequency

    def ensure_output_ready(self) -> bool:
        if not self._init_attempted:
            self._init_attempted = True
            if not self.output.init():
                logger.warning("No audio output available; playback is silent")
        if not self.output.available:
            return False
        if self.output.suspended:
            self.output.resume()
        return True

    def play(self, frequency_hz: float) -> None:
        self.state.current_frequency = float(frequency_hz)
        if not self.ensure_output_ready():
            return

        now = self.output.current_time
        voice = self.state.voice
        if voice is not None:
            voice.set_frequency(frequency_hz)
            self._reschedule(voice, self.level, now, self.attack_seconds)
            logger.debug("Retargeted tone to %.1f Hz", frequency_hz)
            return

        voice = self.output.create_voice(frequency_hz)
        voice.gain.set_value_at_time(0.0, now)
        voice.gain.linear_ramp_to_value_at_time(self.level, now + self.attack_seconds)
        self.state.voice = voice
        self.state.is_playing = True
        logger.debug("Started tone at %.1f Hz", frequency_hz)

    def stop(self) -> None:
        voice = self.state.voice
        if voice is None:
            return
        now = self.output.current_time
        self._reschedule(voice, 0.0, now, self.release_seconds)
        self.output.release_voice(voice, now + self.release_seconds)
        self.state.voice = None
        self.state.is_playing = False
        logger.debug("Stopped tone at %.1f Hz", self.state.current_frequency)

    def toggle(self, frequency_hz: float | None = None) -> bool:
        if self.state.is_playing:
            self.stop()
        else:
            self.play(self.state.current_frequency if frequency_hz is None else frequency_hz)
        return self.state.is_playing

    def shutdown(self) -> None:
        """Force the engine idle; safe to call from any teardown path."""
        try:
            self.stop()
        finally:
            self.state.voice = None
            self.state.is_playing = False

    @contextmanager
    def scoped(self) -> Iterator["ToneEngine"]:
        try:
            yield self
        finally:
            self.shutdown()

    @staticmethod
    def _reschedule(voice: Voice, target: float, now: float, ramp_seconds: float) -> None:
        # Drop stale ramps first so an earlier release cannot fire after this call.
        current = voice.gain.value_at(now)
        voice.gain.prune_before(now)
        voice.gain.cancel_scheduled_values(now)
        voice.gain.set_value_at_time(current, now)
        voice.gain.linear_ramp_to_value_at_time(target, now + ramp_seconds)
