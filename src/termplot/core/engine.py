"""Update cycle of the plotter.

UI-agnostic: the engine owns the series store, the running scale and the
rate state, and turns one :class:`~termplot.reader.Reading` into updated
series. :meth:`PlotEngine.frame` then produces everything the screen layer
needs to draw (layout, styles, segments, window).

    engine = PlotEngine(config)
    for reading in SampleReader(sys.stdin, config.mode):
        if engine.ingest(reading, plot_width):
            frame = engine.frame(height, width)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, TYPE_CHECKING

from .coords import Segment, series_segments
from .layout import Layout, LayoutPolicy, SeriesStyle
from .rate import RateTransformer
from .scale import PlotWindow, ScaleMapper
from .series import Series
from .store import SeriesStore

if TYPE_CHECKING:  # pragma: no cover
    from ..config.models import PlotConfig
    from ..reader import Reading

logger = logging.getLogger(__name__)


@dataclass
class SeriesFrame:
    series: Series
    style: SeriesStyle
    segments: List[Segment] = field(default_factory=list)


@dataclass
class Frame:
    layout: Layout
    window: PlotWindow
    series: List[SeriesFrame]
    interval_s: Optional[float] = None


class PlotEngine:
    """Per-cycle state machine: read, mutate, compute window.

    Parameters
    ----------
    config : PlotConfig
        Validated plot configuration.
    clock : callable, optional
        Monotonic milliseconds, used in rate mode only.
    """

    def __init__(self, config: "PlotConfig", clock: Optional[Callable[[], float]] = None) -> None:
        self.config = config
        self.store = SeriesStore()
        self.scale = ScaleMapper(config.bounds())
        self.rate = RateTransformer(clock) if config.rate else None
        self.layout_policy = LayoutPolicy(glyphs=config.glyphs, colors=config.colors)
        self.window = PlotWindow(maximum=1.0, minimum=0.0)
        self.cycles = 0
        self._positional: Optional[bool] = None

    @property
    def has_data(self) -> bool:
        return self.cycles > 0 and len(self.store) > 0

    @property
    def interval_s(self) -> Optional[float]:
        return self.rate.interval_s if self.rate is not None else None

    def ingest(self, reading: "Reading", plot_width: int) -> bool:
        """Apply one reading. Returns ``False`` when nothing changed."""
        if reading.malformed or not reading.samples:
            return False

        keyvalue = self.config.mode == "keyvalue"
        if keyvalue:
            self._check_mode_switch(reading.positional)

        store = self.store
        store.begin_cycle()
        for name, value in reading.samples:
            store.ingest_named(name, value, plot_width, self.config.bars)
        if keyvalue:
            store.end_cycle(plot_width)

        if self.rate is not None:
            self.rate.apply(store.touched)

        store.update()
        self.window = self.scale.compute_window(store)
        self.cycles += 1
        return True

    def _check_mode_switch(self, positional: bool) -> None:
        if self._positional is not None and positional != self._positional:
            logger.info(
                "input switched to %s values, clearing plot",
                "positional" if positional else "named",
            )
            self.store.clear()
            self.scale.reset()
        self._positional = positional

    def resize(self, plot_width: int) -> None:
        self.store.enforce_capacity(plot_width)
        self.store.update()
        self.window = self.scale.compute_window(self.store)

    def frame(self, screen_height: int, screen_width: int) -> Frame:
        series = self.store.series()
        layout = self.layout_policy.compute(screen_height, screen_width, len(series))
        styles = self.layout_policy.styles(series)
        frames = []
        for s, style in zip(series, styles):
            segments = series_segments(
                s,
                self.scale,
                self.window,
                layout.plot_height,
                style.glyph,
                self.config.error_high_char,
                self.config.error_low_char,
            )
            frames.append(SeriesFrame(series=s, style=style, segments=segments))
        return Frame(layout=layout, window=self.window, series=frames, interval_s=self.interval_s)
