"""Screen composition on top of a :class:`~termplot.canvas.Canvas`.

Layout (narrow screen, three series)::

    row 0        interval=1.000s      title           Sat Oct 18 10:00:00 2026
    rows 1..ph   ^ 120.0 cm
                 |   ....plot area, columns 3 .. width-2 ....
                 | 0.0 cm
    ph+1..       a alpha last=.. min=.. max=.. avg=.. med=.. cm
                 b beta  ...

Wide screens add a horizontal axis under the plot and put two series on
each detail line.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from .canvas import Canvas
from .core.engine import Frame, SeriesFrame
from .core.layout import Layout

if TYPE_CHECKING:  # pragma: no cover
    from .config.models import PlotConfig
    from .core.engine import PlotEngine

WAITING_MESSAGE = "waiting for data from stdin"
TOO_SMALL_MESSAGE = "terminal too small"

MIN_HEIGHT = 5
MIN_WIDTH = 12

AXIS_COL = 2
LABEL_COL = 4


def _fmt_value(x: float, unit: str = "") -> str:
    txt = f"{x:.1f}"
    return f"{txt} {unit}" if unit else txt


def _centered(canvas: Canvas, row: int, width: int, text: str) -> None:
    col = max(0, (width - len(text)) // 2)
    canvas.put(row, col, text[:width])


def detail_text(sf: SeriesFrame, unit: str = "") -> str:
    s = sf.series
    parts = [
        s.name,
        f"last={s.last_value():.1f}",
        f"min={s.min:.1f}",
        f"max={s.max:.1f}",
        f"avg={s.avg:.1f}",
        f"med={s.median:.1f}",
    ]
    if unit:
        parts.append(unit)
    return " ".join(parts)


class ScreenRenderer:
    """Draws one frame per cycle.

    Parameters
    ----------
    config : PlotConfig
        Supplies title, unit and error glyphs.
    clock : callable, optional
        Wall clock in seconds for the timestamp; ``time.time`` by default.
    """

    def __init__(self, config: "PlotConfig", clock=None) -> None:
        self.config = config
        self.clock = clock or time.time

    def too_small(self, height: int, width: int) -> bool:
        return height < MIN_HEIGHT or width < MIN_WIDTH

    def render(self, canvas: Canvas, engine: "PlotEngine") -> bool:
        """Draw the current state. Returns ``False`` if the plot was skipped."""
        height, width = canvas.size()
        canvas.erase()
        if self.too_small(height, width):
            _centered(canvas, height // 2, width, TOO_SMALL_MESSAGE)
            canvas.refresh()
            return False
        if not engine.has_data:
            _centered(canvas, height // 2, width, WAITING_MESSAGE)
            canvas.refresh()
            return True

        frame = engine.frame(height, width)
        self._draw_header(canvas, frame)
        self._draw_axes(canvas, frame)
        for sf in frame.series:
            self._draw_series(canvas, frame.layout, sf)
        self._draw_details(canvas, frame)
        canvas.refresh()
        return True

    def render_waiting(self, canvas: Canvas) -> None:
        height, width = canvas.size()
        canvas.erase()
        _centered(canvas, height // 2, width, WAITING_MESSAGE)
        canvas.refresh()

    def _draw_header(self, canvas: Canvas, frame: Frame) -> None:
        width = frame.layout.width
        title = self.config.title
        _centered(canvas, 0, width, title)
        title_end = max(0, (width - len(title)) // 2) + len(title)

        stamp = time.strftime("%a %b %d %H:%M:%S %Y", time.localtime(self.clock()))
        stamp_col = width - len(stamp) - 1
        # narrow screens: the title wins
        if stamp_col > title_end:
            canvas.put(0, stamp_col, stamp)

        if frame.interval_s is not None:
            canvas.put(0, 0, f"interval={frame.interval_s:.3f}s")

    def _draw_axes(self, canvas: Canvas, frame: Frame) -> None:
        lay = frame.layout
        unit = self.config.unit
        canvas.vline(AXIS_COL, lay.plot_top, lay.plot_bottom, "|")
        canvas.put(lay.plot_top, AXIS_COL, "^")

        ph = lay.plot_height
        rows = (0, ph // 4, ph // 2, ph * 3 // 4, ph - 1)
        for row, value in zip(rows, frame.window.label_values()):
            canvas.put(lay.plot_top + row, LABEL_COL, _fmt_value(value, unit))

        if lay.axis_row is not None:
            canvas.put(lay.axis_row, AXIS_COL, "+" + "-" * lay.plot_width)
            canvas.put(lay.axis_row, AXIS_COL + lay.plot_width + 1, ">")

    def _draw_series(self, canvas: Canvas, lay: Layout, sf: SeriesFrame) -> None:
        style = sf.style
        canvas.set_style(style.color, style.attribute)
        for seg in sf.segments:
            if seg.column >= lay.plot_width:
                continue
            col = lay.plot_left + seg.column
            top = lay.plot_top + seg.top
            bottom = lay.plot_top + seg.bottom
            canvas.vline(col, top, bottom, seg.char)
            if style.inverse and not seg.is_error:
                for row in range(top, bottom + 1):
                    canvas.reverse(row, col, 1)
        canvas.clear_style()

    def _draw_details(self, canvas: Canvas, frame: Frame) -> None:
        unit = self.config.unit
        for sf, slot in zip(frame.series, frame.layout.details):
            style = sf.style
            canvas.set_style(style.color, style.attribute)
            canvas.put(slot.row, slot.col, style.glyph)
            if style.inverse:
                canvas.reverse(slot.row, slot.col, 1)
            canvas.clear_style()
            text = detail_text(sf, unit)
            canvas.put(slot.row, slot.col + 2, text[: max(0, slot.width - 2)])


def snapshot(engine: "PlotEngine", config: "PlotConfig", height: int, width: int, clock=None) -> str:
    """Render the engine into a text grid and return it."""
    from .canvas import BufferCanvas

    canvas = BufferCanvas(height, width)
    ScreenRenderer(config, clock=clock).render(canvas, engine)
    return canvas.text()
