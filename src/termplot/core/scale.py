"""Shared vertical scale and value-to-row mapping.

All series of a cycle are drawn against one ``[minimum, maximum]`` window.
The window is built from running extrema (it only widens), soft bounds
(which the data may exceed) and hard bounds (which pin it exactly).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Optional

from .series import Series

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bounds:
    """Configured plot bounds; ``None`` means unset."""

    soft_max: Optional[float] = None
    soft_min: Optional[float] = None
    hard_max: Optional[float] = None
    hard_min: Optional[float] = None

    def normalized(self) -> "Bounds":
        """Apply the start-up consistency rules.

        A soft max that does not exceed the hard min is moved to
        ``hard_min + 1``; a hard max that does not exceed the hard min is
        dropped.
        """
        soft_max = self.soft_max
        hard_max = self.hard_max
        if self.hard_min is not None:
            if soft_max is None or soft_max <= self.hard_min:
                soft_max = self.hard_min + 1.0
            if hard_max is not None and hard_max <= self.hard_min:
                logger.warning(
                    "hard max %r <= hard min %r, ignoring hard max", hard_max, self.hard_min
                )
                hard_max = None
        return Bounds(
            soft_max=soft_max,
            soft_min=self.soft_min,
            hard_max=hard_max,
            hard_min=self.hard_min,
        )


@dataclass(frozen=True)
class PlotWindow:
    maximum: float
    minimum: float

    @property
    def span(self) -> float:
        return self.maximum - self.minimum

    def label_values(self):
        """Axis label values from top to bottom: max, 3/4, 1/2, 1/4, min."""
        mx, mn = self.maximum, self.minimum
        return (
            mx,
            mn / 4.0 + mx * 3.0 / 4.0,
            mn / 2.0 + mx / 2.0,
            mn * 3.0 / 4.0 + mx / 4.0,
            mn,
        )


@dataclass(frozen=True)
class RowMapping:
    row: int
    error_high: bool = False
    error_low: bool = False

    @property
    def is_error(self) -> bool:
        return self.error_high or self.error_low


def map_row(
    value: float,
    plot_height: int,
    global_max: float,
    global_min: float,
    hard_max: Optional[float] = None,
) -> RowMapping:
    """Map ``value`` onto rows ``0`` (top) .. ``plot_height - 1`` (bottom).

    Reaching the hard max pins the value to the top row as a high error;
    touching the window floor pins it to the bottom row as a low error.
    NaN and ``-inf`` are reported as low errors, ``+inf`` goes to the top row.
    """
    bottom = max(0, plot_height - 1)
    if math.isnan(value):
        return RowMapping(bottom, error_low=True)
    if hard_max is not None and value >= hard_max:
        return RowMapping(0, error_high=True)
    if value <= global_min:
        return RowMapping(bottom, error_low=True)
    if math.isinf(value):
        return RowMapping(0)

    span = global_max - global_min
    if span <= 0.0 or not math.isfinite(span):
        span = 1.0
    fraction = (value - global_min) / span
    if not math.isfinite(fraction):
        return RowMapping(0)

    row = plot_height - int(math.floor(fraction * plot_height)) - 1
    return RowMapping(max(row, 0))


class ScaleMapper:
    """Keeps the running window across cycles.

    Parameters
    ----------
    bounds : Bounds
        Soft/hard limits, normalised on construction.
    """

    def __init__(self, bounds: Optional[Bounds] = None) -> None:
        self.bounds = (bounds or Bounds()).normalized()
        self.global_max = 0.0
        self.global_min = 0.0

    def reset(self) -> None:
        self.global_max = 0.0
        self.global_min = 0.0

    def compute_window(self, series: Iterable[Series]) -> PlotWindow:
        b = self.bounds
        for s in series:
            if s.max > self.global_max:
                self.global_max = s.max
            if s.min < self.global_min:
                self.global_min = s.min

        if b.soft_max is not None and self.global_max < b.soft_max:
            self.global_max = b.soft_max
        if b.hard_max is not None:
            self.global_max = b.hard_max
        if b.soft_min is not None and self.global_min > b.soft_min:
            self.global_min = b.soft_min
        if b.hard_min is not None:
            self.global_min = b.hard_min

        maximum = self.global_max
        minimum = self.global_min
        if maximum <= minimum:
            # flat window (no data yet or hard max below the data floor)
            maximum = minimum + 1.0
        return PlotWindow(maximum=maximum, minimum=minimum)

    def map_row(self, value: float, plot_height: int, window: PlotWindow) -> RowMapping:
        return map_row(value, plot_height, window.maximum, window.minimum, self.bounds.hard_max)
