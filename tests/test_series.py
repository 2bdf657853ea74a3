from __future__ import annotations

import sys

sys.path.insert(0, "src")

import pytest

from termplot.core.series import Series


def _series(values, width: int = 100, name: str = "cpu") -> Series:
    s = Series(name)
    for v in values:
        s.ingest(v, width)
    s.update()
    return s


def test_history_never_exceeds_plot_width() -> None:
    s = Series("cpu")
    widths = [5, 5, 3, 3, 8, 1, 4, 0, 6]
    for i, w in enumerate(widths * 3):
        s.ingest(float(i), w)
        assert len(s.history) <= w


def test_eviction_drops_oldest_first() -> None:
    s = _series([1.0, 2.0, 3.0, 4.0, 5.0], width=3)
    assert list(s.history) == [3.0, 4.0, 5.0]


def test_only_pads_gives_zero_statistics() -> None:
    s = Series("mem")
    s.pad(4)
    s.update()
    assert len(s.history) == 4
    assert (s.min, s.max, s.avg, s.median) == (0.0, 0.0, 0.0, 0.0)
    assert s.last_value() == 0.0


def test_statistics_skip_pads() -> None:
    s = _series([4.0, None, 1.0, 3.0, None, 2.0])
    assert s.min == 1.0
    assert s.max == 4.0
    assert s.avg == pytest.approx(2.5)
    # lower middle of [1, 2, 3, 4]
    assert s.median == 2.0


def test_median_odd_count() -> None:
    s = _series([5.0, 1.0, 3.0])
    assert s.median == 3.0


def test_negative_values() -> None:
    s = _series([-5.0, -1.0])
    assert s.min == -5.0
    assert s.max == -1.0
    assert s.median == -5.0


def test_last_value_skips_trailing_pads() -> None:
    s = _series([1.0, 2.0, None, None])
    assert s.last_value() == 2.0


def test_pad_only_grows() -> None:
    s = _series([1.0, 2.0, 3.0])
    assert s.pad(2) == 0
    assert s.pad(5) == 2
    assert list(s.history) == [1.0, 2.0, 3.0, None, None]


def test_glyph_and_bars_flag() -> None:
    s = Series("load")
    assert s.glyph == "l"
    s.ingest(1.0, 10, bars=True)
    assert s.is_bars
    s.ingest(2.0, 10)
    assert not s.is_bars


def test_empty_name_rejected() -> None:
    with pytest.raises(ValueError):
        Series("")


def test_non_finite_samples_stay_out_of_statistics() -> None:
    s = _series([4.0, float("inf"), float("-inf"), float("nan"), 2.0])
    assert (s.min, s.max) == (2.0, 4.0)
    assert s.avg == pytest.approx(3.0)
    assert s.median == 2.0
    assert len(s.history) == 5

    only_inf = _series([float("inf")])
    assert (only_inf.min, only_inf.max, only_inf.avg) == (0.0, 0.0, 0.0)
