from __future__ import annotations

import sys

sys.path.insert(0, "src")

import math

from termplot.core.scale import Bounds, PlotWindow, ScaleMapper, map_row
from termplot.core.series import Series


def _series(*values: float) -> Series:
    s = Series("s")
    for v in values:
        s.ingest(v, 100)
    s.update()
    return s


def test_soft_max_raises_window() -> None:
    mapper = ScaleMapper(Bounds(soft_max=10.0))
    window = mapper.compute_window([_series(1.0, 5.0)])
    assert window.maximum == 10.0


def test_data_may_exceed_soft_max() -> None:
    mapper = ScaleMapper(Bounds(soft_max=10.0))
    window = mapper.compute_window([_series(1.0, 42.0)])
    assert window.maximum == 42.0


def test_hard_max_pins_window() -> None:
    mapper = ScaleMapper(Bounds(soft_max=10.0, hard_max=3.0))
    assert mapper.compute_window([_series(5.0)]).maximum == 3.0
    assert mapper.compute_window([_series(500.0)]).maximum == 3.0


def test_window_only_widens() -> None:
    mapper = ScaleMapper()
    assert mapper.compute_window([_series(50.0)]).maximum == 50.0
    assert mapper.compute_window([_series(5.0)]).maximum == 50.0
    assert mapper.compute_window([_series(-7.0)]).minimum == -7.0
    assert mapper.compute_window([_series(3.0)]).minimum == -7.0


def test_window_spans_all_series() -> None:
    mapper = ScaleMapper()
    window = mapper.compute_window([_series(-3.0, 1.0), _series(8.0)])
    assert (window.minimum, window.maximum) == (-3.0, 8.0)


def test_soft_and_hard_min() -> None:
    assert ScaleMapper(Bounds(soft_min=-10.0)).compute_window([_series(5.0)]).minimum == -10.0
    assert ScaleMapper(Bounds(hard_min=2.0)).compute_window([_series(-50.0, 5.0)]).minimum == 2.0


def test_empty_window_is_never_flat() -> None:
    window = ScaleMapper().compute_window([])
    assert window.maximum > window.minimum


def test_reset_forgets_running_extrema() -> None:
    mapper = ScaleMapper()
    mapper.compute_window([_series(99.0)])
    mapper.reset()
    assert mapper.compute_window([_series(4.0)]).maximum == 4.0


def test_bounds_normalisation() -> None:
    assert Bounds(hard_min=5.0).normalized().soft_max == 6.0
    assert Bounds(hard_min=5.0, soft_max=3.0).normalized().soft_max == 6.0
    assert Bounds(hard_min=5.0, soft_max=30.0).normalized().soft_max == 30.0
    assert Bounds(hard_min=5.0, hard_max=4.0).normalized().hard_max is None
    assert Bounds(soft_max=-2.0).normalized().soft_max == -2.0


def test_at_or_above_hard_max_is_top_row_error() -> None:
    for value in (100.0, 100.5, 1e9):
        m = map_row(value, 20, 100.0, 0.0, hard_max=100.0)
        assert m.row == 0
        assert m.error_high
        assert not m.error_low


def test_at_or_below_floor_is_bottom_row_error() -> None:
    for value in (0.0, -1.0, -1e9):
        m = map_row(value, 20, 100.0, 0.0)
        assert m.row == 19
        assert m.error_low
        assert not m.error_high


def test_inside_window_rows() -> None:
    assert map_row(50.0, 20, 100.0, 0.0).row == 9
    assert map_row(99.9, 20, 100.0, 0.0).row == 0
    assert map_row(0.1, 20, 100.0, 0.0).row == 19
    m = map_row(100.0, 20, 100.0, 0.0)
    assert m.row == 0
    assert not m.is_error


def test_non_finite_values() -> None:
    nan = map_row(math.nan, 20, 100.0, 0.0)
    assert nan.row == 19 and nan.error_low
    inf = map_row(math.inf, 20, 100.0, 0.0)
    assert inf.row == 0 and not inf.is_error


def test_label_values() -> None:
    assert PlotWindow(maximum=100.0, minimum=0.0).label_values() == (100.0, 75.0, 50.0, 25.0, 0.0)


def test_negative_infinity_and_hard_max() -> None:
    low = map_row(-math.inf, 20, 100.0, 0.0)
    assert low.row == 19 and low.error_low
    high = map_row(math.inf, 20, 100.0, 0.0, hard_max=90.0)
    assert high.row == 0 and high.error_high


def test_infinite_sample_does_not_stretch_window() -> None:
    window = ScaleMapper().compute_window([_series(10.0, math.inf, 50.0)])
    assert (window.minimum, window.maximum) == (0.0, 50.0)
