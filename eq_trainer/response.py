from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Sequence

import numpy as np

MIN_FREQUENCY_HZ = 20.0
MAX_FREQUENCY_HZ = 20_000.0

BELL_WIDTH = 0.35
BELL_CUTOFF = 2.5
PASS_SLOPE_DB_PER_OCTAVE = 12.0

DEFAULT_SAMPLE_COUNT = 301
GRID_FREQUENCIES = (50.0, 100.0, 200.0, 500.0, 1_000.0, 2_000.0, 5_000.0, 10_000.0)


@dataclass(frozen=True)
class Band:
    center_hz: float
    gain_db: float

    def __post_init__(self) -> None:
        if not self.center_hz > 0:
            raise ValueError("Bell band requires a positive center frequency")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Band":
        center = _first_present(data, ("center_hz", "freq", "f0", "f"))
        if center is None:
            raise ValueError("Band definition must contain a 'center_hz' field")
        gain = _first_present(data, ("gain_db", "gain", "g"))
        return cls(center_hz=float(center), gain_db=float(gain or 0.0))


@dataclass(frozen=True)
class FilterSet:
    high_pass_hz: float = 0.0
    low_pass_hz: float = math.inf
    bands: tuple[Band, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any iterable of bands but always store an immutable tuple.
        object.__setattr__(self, "bands", tuple(self.bands))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FilterSet":
        if not isinstance(data, dict):
            raise ValueError("Filter set definition must be a JSON object")
        high_pass = _first_present(data, ("high_pass_hz", "hp"))
        low_pass = _first_present(data, ("low_pass_hz", "lp"))
        entries: list[Any] = []
        for key in ("bands", "boosts", "cuts"):
            value = data.get(key) or []
            if not isinstance(value, list):
                raise ValueError(f"'{key}' must be a list of band objects")
            entries.extend(value)
        bands = tuple(Band.from_dict(entry) for entry in entries)
        return cls(
            high_pass_hz=float(high_pass) if high_pass is not None else 0.0,
            low_pass_hz=float(low_pass) if low_pass is not None else math.inf,
            bands=bands,
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "bands": [{"center_hz": band.center_hz, "gain_db": band.gain_db} for band in self.bands]
        }
        if self.high_pass_hz > 0:
            payload["high_pass_hz"] = self.high_pass_hz
        if math.isfinite(self.low_pass_hz):
            payload["low_pass_hz"] = self.low_pass_hz
        return payload


def magnitude_db(filter_set: FilterSet, frequency_hz: float) -> float:
    """Summed response of ``filter_set`` at a single frequency, in dB."""
    return float(magnitude_db_array(filter_set, np.array([frequency_hz], dtype=float))[0])


def magnitude_db_array(filter_set: FilterSet, frequencies: Sequence[float] | np.ndarray) -> np.ndarray:
    freq = np.array(frequencies, dtype=float, ndmin=1)
    freq = np.where(np.isfinite(freq) & (freq > 0), freq, MIN_FREQUENCY_HZ)
    log_freq = np.log(freq)
    db = np.zeros_like(freq)

    for band in filter_set.bands:
        diff = np.abs(log_freq - math.log(band.center_hz))
        bell = band.gain_db * np.exp(-(diff**2) / (2.0 * BELL_WIDTH**2))
        db += np.where(diff < BELL_CUTOFF, bell, 0.0)

    if filter_set.high_pass_hz > 0:
        below = freq < filter_set.high_pass_hz
        octaves = np.log2(filter_set.high_pass_hz / freq)
        db -= np.where(below, PASS_SLOPE_DB_PER_OCTAVE * octaves, 0.0)

    if math.isfinite(filter_set.low_pass_hz):
        above = freq > filter_set.low_pass_hz
        octaves = np.log2(freq / filter_set.low_pass_hz)
        db -= np.where(above, PASS_SLOPE_DB_PER_OCTAVE * octaves, 0.0)

    return db


@dataclass(frozen=True)
class FrequencyAxis:
    """Logarithmic mapping between frequency and a linear plotting position."""

    width: float
    offset: float = 0.0
    min_hz: float = MIN_FREQUENCY_HZ
    max_hz: float = MAX_FREQUENCY_HZ

    @property
    def _log_span(self) -> float:
        if self.min_hz <= 0 or self.max_hz <= self.min_hz:
            return 0.0
        return math.log(self.max_hz) - math.log(self.min_hz)

    def clamp(self, frequency_hz: float) -> float:
        if not frequency_hz > self.min_hz:
            return self.min_hz
        return min(frequency_hz, max(self.max_hz, self.min_hz))

    def position(self, frequency_hz: float) -> float:
        span = self._log_span
        if span == 0.0:
            return self.offset
        normalized = (math.log(self.clamp(frequency_hz)) - math.log(self.min_hz)) / span
        return self.offset + normalized * self.width

    def frequency(self, position: float) -> float:
        span = self._log_span
        if span == 0.0 or self.width == 0:
            return self.min_hz
        normalized = (position - self.offset) / self.width
        return math.exp(math.log(self.min_hz) + normalized * span)


@dataclass(frozen=True)
class PlotGeometry:
    width: float = 600.0
    height: float = 200.0
    padding: float = 20.0
    edge_margin: float = 5.0
    range_db: float = 18.0

    @property
    def axis(self) -> FrequencyAxis:
        return FrequencyAxis(width=self.width - 2 * self.padding, offset=self.padding)

    @property
    def baseline(self) -> float:
        return self.height - self.padding

    @property
    def center(self) -> float:
        return self.height / 2

    def y_for_db(self, db: float) -> float:
        half_span = (self.height - 2 * self.padding) / 2
        y = self.center - (db / self.range_db) * half_span
        return max(self.edge_margin, min(self.height - self.edge_margin, y))


@dataclass(frozen=True)
class Curve:
    points: tuple[tuple[float, float], ...]
    area: tuple[tuple[float, float], ...]

    def line_path(self) -> str:
        return " ".join(
            f"{'M' if index == 0 else 'L'} {x:.1f} {y:.1f}" for index, (x, y) in enumerate(self.points)
        )

    def area_path(self) -> str:
        closing = " ".join(f"L {x:.1f} {y:.1f}" for x, y in self.area[len(self.points):])
        return f"{self.line_path()} {closing} Z"


def render_curve(
    filter_set: FilterSet,
    sample_count: int = DEFAULT_SAMPLE_COUNT,
    geometry: PlotGeometry | None = None,
) -> Curve:
    geometry = geometry or PlotGeometry()
    axis = geometry.axis
    count = max(int(sample_count), 1)
    if count == 1:
        positions = [axis.offset]
    else:
        positions = [axis.offset + (index / (count - 1)) * axis.width for index in range(count)]

    frequencies = np.array([axis.frequency(x) for x in positions], dtype=float)
    response = magnitude_db_array(filter_set, frequencies)
    points = tuple((float(x), geometry.y_for_db(float(db))) for x, db in zip(positions, response))

    area = points + (
        (axis.offset + axis.width, geometry.baseline),
        (axis.offset, geometry.baseline),
    )
    return Curve(points=points, area=area)


def grid_positions(geometry: PlotGeometry | None = None) -> list[tuple[float, float]]:
    """(frequency, x) pairs for the vertical grid lines of a rendered curve."""
    axis = (geometry or PlotGeometry()).axis
    return [(freq, axis.position(freq)) for freq in GRID_FREQUENCIES]


def format_frequency(frequency_hz: float) -> str:
    if frequency_hz >= 1_000:
        return f"{frequency_hz / 1_000:g}k"
    return f"{frequency_hz:g}"


def _first_present(data: dict[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None
