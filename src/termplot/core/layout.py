"""Screen geometry and per-series glyph / attribute assignment."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .series import Series


class Attribute(enum.Enum):
    BOLD = "bold"
    STANDOUT = "standout"
    DIM = "dim"
    REVERSE = "reverse"


ATTRIBUTE_CYCLE: Tuple[Attribute, ...] = (
    Attribute.BOLD,
    Attribute.STANDOUT,
    Attribute.DIM,
    Attribute.REVERSE,
)

# A glyph of a single blank is drawn as a highlighted (reverse video) cell.
INVERSE_GLYPH = " "


@dataclass(frozen=True)
class SeriesStyle:
    glyph: str
    color: Optional[str] = None
    attribute: Optional[Attribute] = None

    @property
    def inverse(self) -> bool:
        return self.glyph == INVERSE_GLYPH


@dataclass(frozen=True)
class DetailSlot:
    row: int
    col: int
    width: int


@dataclass(frozen=True)
class Layout:
    height: int
    width: int
    plot_top: int
    plot_left: int
    plot_height: int
    plot_width: int
    dual_column: bool
    axis_row: Optional[int]
    details: List[DetailSlot] = field(default_factory=list)

    @property
    def plot_bottom(self) -> int:
        return self.plot_top + self.plot_height - 1


class LayoutPolicy:
    """Decides plot area, detail line placement and series styles.

    Parameters
    ----------
    glyphs : sequence of str
        Per-series glyph overrides in display order.
    colors : sequence of str
        Optional color palette; an empty palette disables colors.
    dual_column_min_width : int
        Screens at least this wide put two series on each detail line.
    """

    PLOT_TOP = 1
    PLOT_LEFT = 3
    DUAL_COLUMN_MIN_WIDTH = 120

    def __init__(
        self,
        glyphs: Sequence[str] = (),
        colors: Sequence[str] = (),
        dual_column_min_width: int = DUAL_COLUMN_MIN_WIDTH,
    ) -> None:
        self.glyphs = list(glyphs)
        self.colors = list(colors)
        self.dual_column_min_width = int(dual_column_min_width)

    def is_dual_column(self, screen_width: int) -> bool:
        return screen_width >= self.dual_column_min_width

    def plot_height(self, screen_height: int, screen_width: int, n_series: int) -> int:
        if self.is_dual_column(screen_width):
            ph = screen_height - int(math.ceil(n_series / 2.0)) - 2
        else:
            ph = screen_height - n_series - 1
        return max(ph, screen_height // 2)

    @staticmethod
    def plot_width(screen_width: int) -> int:
        return max(0, screen_width - 4)

    def compute(self, screen_height: int, screen_width: int, n_series: int) -> Layout:
        dual = self.is_dual_column(screen_width)
        ph = self.plot_height(screen_height, screen_width, n_series)
        pw = self.plot_width(screen_width)
        top = self.PLOT_TOP

        details: List[DetailSlot] = []
        if dual:
            axis_row: Optional[int] = top + ph
            first = axis_row + 1
            half = screen_width // 2
            for i in range(n_series):
                col = 1 if i % 2 == 0 else half
                details.append(DetailSlot(row=first + i // 2, col=col, width=half - 2))
        else:
            axis_row = None
            first = top + ph
            for i in range(n_series):
                details.append(DetailSlot(row=first + i, col=1, width=screen_width - 2))

        return Layout(
            height=screen_height,
            width=screen_width,
            plot_top=top,
            plot_left=self.PLOT_LEFT,
            plot_height=ph,
            plot_width=pw,
            dual_column=dual,
            axis_row=axis_row,
            details=details,
        )

    def glyph_for(self, index: int, series: Series) -> str:
        if index < len(self.glyphs) and self.glyphs[index]:
            return self.glyphs[index][0]
        return series.glyph

    def styles(self, series: Sequence[Series]) -> List[SeriesStyle]:
        """Assign glyph, color and attribute to each series in display order.

        With a palette, colors cycle and an attribute tier is added once the
        palette is used up. Without one, a series repeating the glyph of the
        previous series gets an attribute keyed by its index.
        """
        out: List[SeriesStyle] = []
        n_colors = len(self.colors)
        prev_glyph: Optional[str] = None
        for i, s in enumerate(series):
            glyph = self.glyph_for(i, s)
            color: Optional[str] = None
            attribute: Optional[Attribute] = None
            if n_colors:
                color = self.colors[i % n_colors]
                if i >= n_colors:
                    attribute = ATTRIBUTE_CYCLE[(i // n_colors) % len(ATTRIBUTE_CYCLE)]
            elif prev_glyph is not None and glyph == prev_glyph:
                attribute = ATTRIBUTE_CYCLE[i % len(ATTRIBUTE_CYCLE)]
            out.append(SeriesStyle(glyph=glyph, color=color, attribute=attribute))
            prev_glyph = glyph
        return out
