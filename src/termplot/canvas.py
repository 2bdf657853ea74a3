"""Drawing surface contract and an in-memory implementation.

The screen layer only talks to a :class:`Canvas`. The curses backed canvas
lives in :mod:`termplot.terminal_monitor`; :class:`BufferCanvas` keeps a
character grid and is used for tests and text snapshots.

Every write clips silently at the screen edge.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, Set, Tuple

from .core.layout import Attribute


class Canvas(Protocol):
    def size(self) -> Tuple[int, int]: ...

    def erase(self) -> None: ...

    def put(self, row: int, col: int, text: str) -> None: ...

    def vline(self, col: int, row0: int, row1: int, char: str) -> None: ...

    def reverse(self, row: int, col: int, length: int = 1) -> None: ...

    def set_style(self, color: Optional[str] = None, attribute: Optional[Attribute] = None) -> None: ...

    def clear_style(self) -> None: ...

    def refresh(self) -> None: ...


@dataclass(frozen=True)
class CellStyle:
    color: Optional[str] = None
    attribute: Optional[Attribute] = None


class BufferCanvas:
    """Character grid canvas.

    >>> c = BufferCanvas(3, 10)
    >>> c.put(1, 2, "hi")
    >>> c.lines()[1]
    '  hi'
    """

    def __init__(self, height: int, width: int) -> None:
        self.height = int(height)
        self.width = int(width)
        self.refresh_count = 0
        self.erase()

    def size(self) -> Tuple[int, int]:
        return self.height, self.width

    def resize(self, height: int, width: int) -> None:
        self.height = int(height)
        self.width = int(width)
        self.erase()

    def erase(self) -> None:
        self.cells: List[List[str]] = [[" "] * self.width for _ in range(self.height)]
        self.styles: List[List[Optional[CellStyle]]] = [
            [None] * self.width for _ in range(self.height)
        ]
        self.reversed: Set[Tuple[int, int]] = set()
        self._style: Optional[CellStyle] = None

    def _inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def _set(self, row: int, col: int, ch: str) -> None:
        if self._inside(row, col):
            self.cells[row][col] = ch
            self.styles[row][col] = self._style

    def put(self, row: int, col: int, text: str) -> None:
        for i, ch in enumerate(str(text)):
            self._set(row, col + i, ch)

    def vline(self, col: int, row0: int, row1: int, char: str) -> None:
        lo, hi = min(row0, row1), max(row0, row1)
        for row in range(lo, hi + 1):
            self._set(row, col, char)

    def reverse(self, row: int, col: int, length: int = 1) -> None:
        for c in range(col, col + max(0, length)):
            if self._inside(row, c):
                self.reversed.add((row, c))

    def set_style(self, color: Optional[str] = None, attribute: Optional[Attribute] = None) -> None:
        if color is None and attribute is None:
            self._style = None
        else:
            self._style = CellStyle(color=color, attribute=attribute)

    def clear_style(self) -> None:
        self._style = None

    def refresh(self) -> None:
        self.refresh_count += 1

    def char_at(self, row: int, col: int) -> str:
        return self.cells[row][col]

    def style_at(self, row: int, col: int) -> Optional[CellStyle]:
        return self.styles[row][col]

    def lines(self) -> List[str]:
        return ["".join(r).rstrip() for r in self.cells]

    def text(self) -> str:
        return "\n".join(self.lines()) + "\n"

    def find(self, needle: str) -> Optional[Tuple[int, int]]:
        for row, line in enumerate(self.lines()):
            col = line.find(needle)
            if col >= 0:
                return row, col
        return None
