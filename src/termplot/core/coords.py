"""Turn a series history into vertical cell runs for the drawing layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .scale import PlotWindow, ScaleMapper
from .series import Series


@dataclass(frozen=True)
class Segment:
    """A vertical run of one character in one plot column.

    Rows are plot rows (``0`` is the top of the plot); ``top <= bottom``.
    A single point has ``top == bottom``.
    """

    column: int
    top: int
    bottom: int
    char: str
    error_high: bool = False
    error_low: bool = False

    @property
    def is_error(self) -> bool:
        return self.error_high or self.error_low


def series_segments(
    series: Series,
    scale: ScaleMapper,
    window: PlotWindow,
    plot_height: int,
    glyph: str,
    error_high_char: str = "e",
    error_low_char: str = "v",
) -> List[Segment]:
    """Build the drawable runs of ``series``, one per stored sample.

    Pad slots are skipped; in line mode a pad also breaks the line so the
    next value starts a fresh run. Bars always reach down to the bottom row.
    """
    segments: List[Segment] = []
    bottom_row = max(0, plot_height - 1)
    prev_row: Optional[int] = None

    for x, value in enumerate(series.history):
        if value is None:
            prev_row = None
            continue

        mapping = scale.map_row(value, plot_height, window)
        if mapping.error_high:
            char = error_high_char
        elif mapping.error_low:
            char = error_low_char
        else:
            char = glyph

        row = mapping.row
        if series.is_bars:
            top, bottom = row, bottom_row
        elif prev_row is None:
            top = bottom = row
        else:
            top, bottom = min(prev_row, row), max(prev_row, row)

        segments.append(
            Segment(
                column=x,
                top=top,
                bottom=bottom,
                char=char,
                error_high=mapping.error_high,
                error_low=mapping.error_low,
            )
        )
        prev_row = row
    return segments
