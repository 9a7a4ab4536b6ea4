import numpy as np
import pytest

from eq_trainer.reference import series_response_db
from eq_trainer.response import Band, FilterSet, magnitude_db


def test_flat_filter_set_is_zero():
    freqs = np.geomspace(20.0, 20_000.0, 40)
    assert np.allclose(series_response_db(FilterSet(), freqs), 0.0)


def test_peaking_band_reaches_gain_at_center():
    filters = FilterSet(bands=(Band(1_000.0, 6.0),))
    response = series_response_db(filters, np.array([1_000.0]))
    assert response[0] == pytest.approx(6.0, abs=1e-6)


def test_butterworth_corner_is_three_db_down():
    response = series_response_db(FilterSet(high_pass_hz=200.0), np.array([200.0, 5_000.0]))
    assert response[0] == pytest.approx(-3.01, abs=0.05)
    assert response[1] == pytest.approx(0.0, abs=0.05)


def test_agrees_with_summed_model_at_band_center():
    filters = FilterSet(bands=(Band(500.0, -4.0),))
    freqs = np.array([500.0])
    assert series_response_db(filters, freqs)[0] == pytest.approx(magnitude_db(filters, 500.0), abs=1e-6)


def test_rejects_grid_above_nyquist():
    with pytest.raises(ValueError, match="Nyquist"):
        series_response_db(FilterSet(), np.array([100.0, 30_000.0]))
