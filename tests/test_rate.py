from __future__ import annotations

import sys

sys.path.insert(0, "src")

import pytest

from termplot.core.rate import CounterLimits, RateTransformer, counter_delta
from termplot.core.series import Series


def _rates(readings, interval_s: float = 1.0):
    s = Series("c")
    for r in readings:
        s.ingest(float(r), 100)
        s.apply_rate(interval_s)
    return s, list(s.history)


def test_increasing_counter_gives_constant_rate() -> None:
    _s, rates = _rates([100, 200, 300, 400])
    assert rates == [0.0, 100.0, 100.0, 100.0]


def test_rate_divides_by_interval() -> None:
    _s, rates = _rates([100, 200, 300, 400], interval_s=2.0)
    assert rates == [0.0, 50.0, 50.0, 50.0]


def test_zero_interval_counts_as_one_second() -> None:
    _s, rates = _rates([10, 30], interval_s=0.0)
    assert rates == [0.0, 20.0]


def test_previous_raw_keeps_untransformed_reading() -> None:
    s, _rates_ = _rates([100, 250])
    assert s.previous_raw == 250.0


def test_32bit_wrap_is_not_a_large_negative_rate() -> None:
    _s, rates = _rates([0xFFFFFFF0, 0x00000005])
    assert rates[1] > 0
    assert rates[1] == 5 + (0xFFFFFFF0 - CounterLimits.U32_WRAP_FLOOR)


def test_31bit_wrap() -> None:
    assert counter_delta(0x7FFFFFF0, 3) == 3 + (0x7FFFFFF0 - CounterLimits.U31_WRAP_FLOOR)


def test_plain_decrease_stays_negative() -> None:
    assert counter_delta(500.0, 300.0) == -200.0


def test_large_reading_after_near_max_is_not_a_wrap() -> None:
    assert counter_delta(0xFFFFFFF0, 1000.0) == 1000.0 - 0xFFFFFFF0


def test_pad_entry_is_left_alone() -> None:
    s = Series("c")
    s.ingest(10.0, 100)
    s.apply_rate(1.0)
    s.ingest(None, 100)
    s.apply_rate(1.0)
    assert list(s.history) == [0.0, None]
    assert s.previous_raw == 10.0


def test_transformer_measures_interval_from_clock() -> None:
    ticks = iter([0.0, 0.0, 500.0, 1500.0])
    rt = RateTransformer(clock=lambda: next(ticks))
    assert rt.tick() == 1.0
    assert rt.tick() == pytest.approx(0.5)
    assert rt.tick() == pytest.approx(1.0)
    assert rt.interval_s == pytest.approx(1.0)


def test_transformer_applies_to_every_series() -> None:
    ticks = iter([0.0, 1000.0, 3000.0])
    rt = RateTransformer(clock=lambda: next(ticks))
    a, b = Series("a"), Series("b")
    for va, vb in [(10.0, 0.0), (20.0, 40.0)]:
        a.ingest(va, 10)
        b.ingest(vb, 10)
        rt.apply([a, b])
    assert list(a.history) == [0.0, 5.0]
    assert list(b.history) == [0.0, 20.0]
