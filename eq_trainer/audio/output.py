"""Audio output port.

The tone engine only talks to this interface, so the real PortAudio device
and the fake used in tests are interchangeable.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .automation import Voice


@runtime_checkable
class AudioOutput(Protocol):
    @property
    def available(self) -> bool:
        """True once ``init()`` succeeded and until ``teardown()``."""
        ...

    @property
    def suspended(self) -> bool:
        """True when the host paused the output clock."""
        ...

    @property
    def current_time(self) -> float:
        """Output clock in seconds; scheduling is relative to it."""
        ...

    def init(self) -> bool:
        """Acquire the device. Idempotent; returns ``available``."""
        ...

    def resume(self) -> None:
        ...

    def create_voice(self, frequency_hz: float) -> Voice:
        """Start a new generator at ``current_time``."""
        ...

    def release_voice(self, voice: Voice, when: float) -> None:
        """Stop ``voice`` at ``when`` and drop it afterwards."""
        ...

    def teardown(self) -> None:
        ...
