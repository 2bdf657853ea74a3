"""Series buffering, statistics and scale mapping."""

from .coords import Segment, series_segments
from .engine import Frame, PlotEngine, SeriesFrame
from .layout import ATTRIBUTE_CYCLE, INVERSE_GLYPH, Attribute, Layout, LayoutPolicy, SeriesStyle
from .rate import CounterLimits, RateTransformer, counter_delta
from .scale import Bounds, PlotWindow, RowMapping, ScaleMapper, map_row
from .series import Series
from .store import SeriesStore

__all__ = [
    "ATTRIBUTE_CYCLE",
    "Attribute",
    "Bounds",
    "CounterLimits",
    "Frame",
    "INVERSE_GLYPH",
    "Layout",
    "LayoutPolicy",
    "PlotEngine",
    "PlotWindow",
    "RateTransformer",
    "RowMapping",
    "ScaleMapper",
    "Segment",
    "Series",
    "SeriesFrame",
    "SeriesStore",
    "SeriesStyle",
    "counter_delta",
    "map_row",
    "series_segments",
]
