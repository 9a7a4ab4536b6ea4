"""Unit tests for the summed magnitude response and the frequency axis."""

import math

import numpy as np
import pytest

from eq_trainer.response import (
    BELL_CUTOFF,
    Band,
    FilterSet,
    FrequencyAxis,
    magnitude_db,
    magnitude_db_array,
)


@pytest.mark.parametrize("freq", [20.0, 63.0, 440.0, 1_000.0, 7_777.7, 20_000.0])
def test_axis_round_trip(freq):
    "Mapping a frequency to a position and back returns the same frequency"
    axis = FrequencyAxis(width=560.0, offset=20.0)
    assert axis.frequency(axis.position(freq)) == pytest.approx(freq, rel=1e-12)


def test_axis_is_logarithmic_and_clamped():
    "Equal ratios map to equal distances; out-of-range input sticks to the edges"
    axis = FrequencyAxis(width=300.0)
    assert axis.position(20.0) == pytest.approx(0.0)
    assert axis.position(20_000.0) == pytest.approx(300.0)
    assert axis.position(200.0) - axis.position(20.0) == pytest.approx(axis.position(2_000.0) - axis.position(200.0))
    assert axis.position(5.0) == pytest.approx(0.0)
    assert axis.position(-10.0) == pytest.approx(0.0)
    assert axis.position(96_000.0) == pytest.approx(300.0)


def test_axis_zero_width_range_degrades():
    "A collapsed range maps everything to the offset instead of dividing by zero"
    axis = FrequencyAxis(width=100.0, offset=7.0, min_hz=1_000.0, max_hz=1_000.0)
    assert axis.position(50.0) == 7.0
    assert axis.frequency(42.0) == 1_000.0


@pytest.mark.parametrize("freq", [1.0, 20.0, 440.0, 20_000.0, 1e6])
def test_empty_filter_set_is_flat(freq):
    "No corners and no bands means 0 dB everywhere"
    assert magnitude_db(FilterSet(high_pass_hz=0.0, low_pass_hz=math.inf), freq) == 0.0


def test_high_pass_slope():
    "12 dB per octave below the corner, nothing above it"
    filters = FilterSet(high_pass_hz=200.0)
    assert magnitude_db(filters, 100.0) == pytest.approx(-12.0)
    assert magnitude_db(filters, 50.0) == pytest.approx(-24.0)
    assert magnitude_db(filters, 200.0) == 0.0
    assert magnitude_db(filters, 5_000.0) == 0.0


def test_low_pass_slope_is_symmetric():
    filters = FilterSet(low_pass_hz=5_000.0)
    assert magnitude_db(filters, 10_000.0) == pytest.approx(-12.0)
    assert magnitude_db(filters, 20_000.0) == pytest.approx(-24.0)
    assert magnitude_db(filters, 1_000.0) == 0.0


def test_bell_peak_and_cutoff():
    "The bell hits its full gain at the center and vanishes past the cutoff"
    filters = FilterSet(bands=(Band(center_hz=1_000.0, gain_db=6.0),))
    assert magnitude_db(filters, 1_000.0) == 6.0
    beyond = 1_000.0 * math.exp(BELL_CUTOFF + 0.1)
    assert magnitude_db(filters, beyond) == 0.0
    assert magnitude_db(filters, 1_000.0 / math.exp(BELL_CUTOFF + 0.1)) == 0.0
    # Half an octave away the bell has decayed but is still present.
    assert 0.0 < magnitude_db(filters, 1_414.0) < 6.0


def test_bell_is_symmetric_in_log_frequency():
    filters = FilterSet(bands=(Band(center_hz=1_000.0, gain_db=-4.0),))
    assert magnitude_db(filters, 500.0) == pytest.approx(magnitude_db(filters, 2_000.0))


def test_contributions_are_summed():
    "Two far-apart bands add up to the sum of each band on its own"
    low = Band(center_hz=100.0, gain_db=5.0)
    high = Band(center_hz=8_000.0, gain_db=-3.0)
    both = FilterSet(bands=(low, high))
    for freq in (60.0, 100.0, 300.0, 900.0, 3_000.0, 8_000.0, 15_000.0):
        separate = magnitude_db(FilterSet(bands=(low,)), freq) + magnitude_db(FilterSet(bands=(high,)), freq)
        assert magnitude_db(both, freq) == pytest.approx(separate)


def test_band_order_does_not_matter():
    bands = (Band(300.0, -2.0), Band(720.0, 4.0), Band(4_000.0, -3.0))
    forward = FilterSet(high_pass_hz=100.0, low_pass_hz=12_000.0, bands=bands)
    backward = FilterSet(high_pass_hz=100.0, low_pass_hz=12_000.0, bands=bands[::-1])
    freqs = np.geomspace(20.0, 20_000.0, 50)
    assert np.allclose(magnitude_db_array(forward, freqs), magnitude_db_array(backward, freqs))


def test_overlapping_gain_is_not_clamped():
    "Stacked boosts keep adding up; the dB value itself is never limited"
    filters = FilterSet(bands=(Band(1_000.0, 15.0), Band(1_000.0, 15.0)))
    assert magnitude_db(filters, 1_000.0) == 30.0


def test_non_positive_frequency_is_clamped():
    filters = FilterSet(high_pass_hz=200.0)
    assert magnitude_db(filters, 0.0) == pytest.approx(magnitude_db(filters, 20.0))
    assert magnitude_db(filters, -5.0) == pytest.approx(magnitude_db(filters, 20.0))
    assert magnitude_db(filters, float("nan")) == pytest.approx(magnitude_db(filters, 20.0))


def test_array_matches_scalar():
    filters = FilterSet(high_pass_hz=80.0, low_pass_hz=11_000.0, bands=(Band(6_000.0, 3.0), Band(800.0, -4.0)))
    freqs = [25.0, 80.0, 800.0, 6_000.0, 18_000.0]
    expected = [magnitude_db(filters, f) for f in freqs]
    assert magnitude_db_array(filters, freqs).tolist() == pytest.approx(expected)


def test_band_requires_positive_center():
    with pytest.raises(ValueError):
        Band(center_hz=0.0, gain_db=3.0)


def test_filter_set_from_dict_accepts_recipe_shape():
    filters = FilterSet.from_dict(
        {"hp": 100, "lp": 12000, "boosts": [{"f": 1000, "g": 5}], "cuts": [{"freq": 300, "gain_db": -2}]}
    )
    assert filters.high_pass_hz == 100.0
    assert filters.low_pass_hz == 12_000.0
    assert filters.bands == (Band(1_000.0, 5.0), Band(300.0, -2.0))


def test_filter_set_from_dict_defaults_to_flat():
    filters = FilterSet.from_dict({})
    assert filters == FilterSet()
    assert filters.to_dict() == {"bands": []}


def test_filter_set_from_dict_rejects_bad_bands():
    with pytest.raises(ValueError):
        FilterSet.from_dict({"bands": {"f": 100}})
    with pytest.raises(ValueError):
        FilterSet.from_dict({"bands": [{"gain_db": 3}]})


def test_filter_set_stores_bands_as_tuple():
    filters = FilterSet(bands=[Band(500.0, 1.0)])
    assert isinstance(filters.bands, tuple)
    assert hash(filters) == hash(FilterSet(bands=(Band(500.0, 1.0),)))
