"""Shared fixtures: a scriptable stand-in for the audio device."""

import pytest

from eq_trainer.audio import ToneEngine, Voice


class FakeOutput:
    """AudioOutput with a manual clock that records every voice it hands out."""

    def __init__(self, can_init=True, suspended=False):
        self._can_init = can_init
        self._ready = False
        self._suspended = suspended
        self.now = 0.0
        self.init_calls = 0
        self.resume_calls = 0
        self.acquired = []
        self.released = []

    @property
    def available(self):
        return self._ready

    @property
    def suspended(self):
        return self._suspended

    @property
    def current_time(self):
        return self.now

    @property
    def live_voices(self):
        return len(self.acquired) - len(self.released)

    def suspend(self):
        self._suspended = True

    def init(self):
        self.init_calls += 1
        self._ready = self._can_init
        return self._ready

    def resume(self):
        self.resume_calls += 1
        self._suspended = False

    def create_voice(self, frequency_hz):
        voice = Voice(frequency_hz, start_time=self.now)
        self.acquired.append(voice)
        return voice

    def release_voice(self, voice, when):
        voice.stop_at(when)
        self.released.append((voice, when))

    def teardown(self):
        self._ready = False


@pytest.fixture
def output():
    return FakeOutput()


@pytest.fixture
def engine(output):
    return ToneEngine(output)
