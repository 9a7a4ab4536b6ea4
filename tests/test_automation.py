"""Unit tests for the gain timeline and the sine voice."""

import numpy as np
import pytest

from eq_trainer.audio.automation import RAMP, SET, GainParam, Voice


def test_default_value_before_any_event():
    gain = GainParam(0.25)
    assert gain.value_at(0.0) == 0.25
    assert gain.value_at(100.0) == 0.25


def test_linear_ramp_interpolates_from_previous_event():
    gain = GainParam()
    gain.set_value_at_time(0.0, 1.0)
    gain.linear_ramp_to_value_at_time(0.2, 1.1)
    assert gain.value_at(0.5) == 0.0
    assert gain.value_at(1.05) == pytest.approx(0.1)
    assert gain.value_at(1.1) == pytest.approx(0.2)
    assert gain.value_at(5.0) == pytest.approx(0.2)


def test_set_value_is_a_step():
    gain = GainParam(0.0)
    gain.set_value_at_time(0.5, 2.0)
    assert gain.value_at(1.999) == 0.0
    assert gain.value_at(2.0) == 0.5


def test_events_are_kept_in_time_order():
    gain = GainParam()
    gain.linear_ramp_to_value_at_time(1.0, 3.0)
    gain.set_value_at_time(0.0, 1.0)
    gain.set_value_at_time(0.5, 2.0)
    assert [event.time for event in gain.events] == [1.0, 2.0, 3.0]
    assert [event.kind for event in gain.events] == [SET, SET, RAMP]


def test_cancel_drops_events_at_or_after_start():
    gain = GainParam()
    gain.set_value_at_time(0.0, 0.0)
    gain.linear_ramp_to_value_at_time(0.1, 0.1)
    gain.linear_ramp_to_value_at_time(0.0, 0.5)
    gain.cancel_scheduled_values(0.1)
    assert [event.time for event in gain.events] == [0.0]
    assert gain.value_at(1.0) == 0.0


def test_render_matches_value_at():
    gain = GainParam(0.0, origin=0.0)
    gain.set_value_at_time(0.0, 0.0)
    gain.linear_ramp_to_value_at_time(0.1, 0.1)
    gain.set_value_at_time(0.08, 0.15)
    gain.linear_ramp_to_value_at_time(0.0, 0.25)
    times = np.linspace(0.0, 0.4, 97)
    expected = [gain.value_at(t) for t in times]
    assert gain.render(times) == pytest.approx(expected, abs=1e-9)


def test_render_handles_step_inside_block():
    gain = GainParam(0.0)
    gain.set_value_at_time(1.0, 0.5)
    rendered = gain.render(np.array([0.25, 0.4999, 0.5, 0.75]))
    assert rendered.tolist() == pytest.approx([0.0, 0.0, 1.0, 1.0])


def test_voice_is_phase_continuous_across_blocks():
    sample_rate = 48_000
    times = np.arange(512) / sample_rate
    whole = Voice(1_000.0)
    whole.gain.set_value_at_time(1.0, 0.0)
    split = Voice(1_000.0)
    split.gain.set_value_at_time(1.0, 0.0)

    expected = whole.render(times, sample_rate)
    joined = np.concatenate([split.render(times[:200], sample_rate), split.render(times[200:], sample_rate)])
    assert np.allclose(joined, expected, atol=1e-9)


def test_voice_is_silent_after_stop_and_before_start():
    sample_rate = 1_000
    voice = Voice(50.0, start_time=0.1)
    voice.gain.set_value_at_time(1.0, 0.1)
    voice.stop_at(0.2)
    times = np.arange(300) / sample_rate
    block = voice.render(times, sample_rate)
    assert not block[:100].any()
    assert not block[200:].any()
    assert np.abs(block[100:200]).max() > 0.5


def test_voice_finished():
    voice = Voice(440.0)
    assert not voice.finished(10.0)
    voice.stop_at(1.0)
    assert not voice.finished(0.5)
    assert voice.finished(1.0)


def test_prune_before_keeps_future_values():
    gain = GainParam(0.0)
    gain.set_value_at_time(0.0, 0.0)
    gain.linear_ramp_to_value_at_time(0.1, 0.1)
    gain.set_value_at_time(0.1, 0.2)
    gain.linear_ramp_to_value_at_time(0.0, 0.3)
    times = [0.25, 0.27, 0.3, 0.5]
    before = [gain.value_at(t) for t in times]

    gain.prune_before(0.25)
    assert [event.time for event in gain.events] == [0.3]
    assert [gain.value_at(t) for t in times] == pytest.approx(before)
    assert gain.render(np.array(times)).tolist() == pytest.approx(before)


def test_prune_before_origin_is_ignored():
    gain = GainParam(0.0, origin=1.0)
    gain.linear_ramp_to_value_at_time(1.0, 2.0)
    gain.prune_before(0.5)
    assert gain.value_at(1.5) == pytest.approx(0.5)
    assert len(gain.events) == 1
