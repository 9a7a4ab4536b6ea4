from __future__ import annotations

import math
import threading
from dataclasses import dataclass

import numpy as np

SET = "set"
RAMP = "ramp"


@dataclass(frozen=True)
class AutomationEvent:
    kind: str
    time: float
    value: float


class GainParam:
    """Scheduled amplitude timeline evaluated against the output clock.

    Mirrors the subset of Web Audio ``AudioParam`` automation the tone engine
    needs: step changes, linear ramps and cancellation of future events. The
    audio callback reads the timeline while the UI thread edits it, so every
    access goes through a lock.
    """

    def __init__(self, value: float = 0.0, origin: float = 0.0) -> None:
        self._default = float(value)
        self._origin = float(origin)
        self._events: list[AutomationEvent] = []
        self._lock = threading.Lock()

    @property
    def events(self) -> list[AutomationEvent]:
        with self._lock:
            return list(self._events)

    def set_value_at_time(self, value: float, when: float) -> None:
        self._insert(AutomationEvent(SET, float(when), float(value)))

    def linear_ramp_to_value_at_time(self, value: float, end_time: float) -> None:
        self._insert(AutomationEvent(RAMP, float(end_time), float(value)))

    def cancel_scheduled_values(self, start_time: float) -> None:
        with self._lock:
            self._events = [event for event in self._events if event.time < start_time]

    def prune_before(self, when: float) -> None:
        """Fold every event older than ``when`` into the starting point.

        The timeline keeps the same value from ``when`` on; only history the
        output clock has already passed is dropped.
        """
        if when <= self._origin:
            return
        value = self.value_at(when)
        with self._lock:
            self._events = [event for event in self._events if event.time >= when]
            self._default = value
            self._origin = float(when)

    def value_at(self, when: float) -> float:
        with self._lock:
            events = list(self._events)
            value = self._default
            prev_time = self._origin
        prev_value = value
        for event in events:
            if event.time > when:
                if event.kind == RAMP:
                    span = event.time - prev_time
                    if span <= 0:
                        return event.value
                    fraction = (when - prev_time) / span
                    return prev_value + (event.value - prev_value) * max(fraction, 0.0)
                return value
            value = event.value
            prev_time = event.time
            prev_value = event.value
        return value

    def render(self, times: np.ndarray) -> np.ndarray:
        """Vectorised ``value_at`` for a block of sample times."""
        xs, ys = self._breakpoints()
        return np.interp(times, xs, ys)

    def _breakpoints(self) -> tuple[np.ndarray, np.ndarray]:
        with self._lock:
            events = list(self._events)
            xs = [self._origin]
            ys = [self._default]
        for event in events:
            when = max(event.time, xs[-1])
            if event.kind == SET:
                # Hold the previous value right up to the step.
                hold = float(np.nextafter(when, -math.inf))
                if hold > xs[-1]:
                    xs.append(hold)
                    ys.append(ys[-1])
            xs.append(when)
            ys.append(event.value)
        return np.asarray(xs, dtype=float), np.asarray(ys, dtype=float)

    def _insert(self, event: AutomationEvent) -> None:
        with self._lock:
            index = len(self._events)
            while index > 0 and self._events[index - 1].time > event.time:
                index -= 1
            self._events.insert(index, event)


class Voice:
    """A single sine generator with its own gain envelope."""

    def __init__(self, frequency_hz: float, start_time: float = 0.0) -> None:
        self.frequency_hz = float(frequency_hz)
        self.gain = GainParam(0.0, origin=start_time)
        self.start_time = float(start_time)
        self.stop_time: float | None = None
        self._phase = 0.0

    def set_frequency(self, frequency_hz: float) -> None:
        self.frequency_hz = float(frequency_hz)

    def stop_at(self, when: float) -> None:
        self.stop_time = float(when)

    def finished(self, now: float) -> bool:
        return self.stop_time is not None and now >= self.stop_time

    def render(self, times: np.ndarray, sample_rate: float) -> np.ndarray:
        frames = len(times)
        increment = 2.0 * np.pi * self.frequency_hz / sample_rate
        phases = self._phase + np.arange(frames) * increment
        self._phase = float((self._phase + frames * increment) % (2.0 * np.pi))
        block = np.sin(phases) * self.gain.render(times)
        if self.stop_time is not None:
            block[times >= self.stop_time] = 0.0
        block[times < self.start_time] = 0.0
        return block
