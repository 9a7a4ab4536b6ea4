"""Series transfer-function response of a filter set, for comparison only.

The teaching curve sums independent contributions. This module evaluates the
same filter set as real biquads in series (2nd-order Butterworth pass filters
and RBJ peaking bands) so a plot can show where the two disagree.
"""

from __future__ import annotations

import math

import numpy as np
from scipy import signal

from .response import FilterSet

DEFAULT_SAMPLE_RATE = 48_000.0
DEFAULT_BAND_Q = 1.4


def series_response_db(
    filter_set: FilterSet,
    freq_hz: np.ndarray,
    sample_rate: float = DEFAULT_SAMPLE_RATE,
    q: float = DEFAULT_BAND_Q,
) -> np.ndarray:
    freq_hz = np.asarray(freq_hz, dtype=float)
    nyquist = sample_rate / 2.0
    if freq_hz.size and freq_hz.max() >= nyquist:
        raise ValueError(
            f"Frequency grid ({freq_hz.max():.1f} Hz max) exceeds Nyquist ({nyquist:.1f} Hz). "
            "Increase the reference sample rate."
        )

    h = np.ones(freq_hz.shape, dtype=np.complex128)
    if 0 < filter_set.high_pass_hz < nyquist:
        b, a = signal.butter(2, filter_set.high_pass_hz / nyquist, btype="highpass", output="ba")
        h *= _freq_response(b, a, freq_hz, sample_rate)
    if math.isfinite(filter_set.low_pass_hz) and 0 < filter_set.low_pass_hz < nyquist:
        b, a = signal.butter(2, filter_set.low_pass_hz / nyquist, btype="lowpass", output="ba")
        h *= _freq_response(b, a, freq_hz, sample_rate)
    for band in filter_set.bands:
        if band.center_hz >= nyquist or band.gain_db == 0.0:
            continue
        b, a = _biquad_peq(band.center_hz, q, band.gain_db, sample_rate)
        h *= _freq_response(b, a, freq_hz, sample_rate)

    return 20.0 * np.log10(np.maximum(np.abs(h), 1e-12))


def _freq_response(b: np.ndarray, a: np.ndarray, freq_hz: np.ndarray, sample_rate: float) -> np.ndarray:
    w = 2.0 * np.pi * freq_hz / sample_rate
    _, h = signal.freqz(b, a, worN=w)
    return h


def _biquad_peq(f0: float, q: float, gain_db: float, sample_rate: float) -> tuple[np.ndarray, np.ndarray]:
    w0 = 2.0 * np.pi * f0 / sample_rate
    alpha = np.sin(w0) / (2.0 * q)
    a = 10 ** (gain_db / 40.0)
    b0 = 1 + alpha * a
    b1 = -2 * np.cos(w0)
    b2 = 1 - alpha * a
    a0 = 1 + alpha / a
    a1 = -2 * np.cos(w0)
    a2 = 1 - alpha / a
    b = np.array([b0, b1, b2]) / a0
    a = np.array([1.0, a1 / a0, a2 / a0])
    return b, a
