"""Named, bounded value history with derived statistics.

A slot holding ``None`` means "no sample this cycle" (a pad entry that keeps
a series column-aligned with its siblings). Pads never take part in the
statistics and are skipped when drawing.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional

import numpy as np

from .rate import counter_delta

logger = logging.getLogger(__name__)

Sample = Optional[float]


class Series:
    """One named rolling history of samples.

    Parameters
    ----------
    name : str
        Series identifier. Its first character is the default plot glyph.

    Notes
    -----
    ``history`` is never longer than the plot width passed to the most
    recent :meth:`ingest` / :meth:`trim` call; the oldest entries are
    evicted first.
    """

    def __init__(self, name: str) -> None:
        if not name:
            raise ValueError("series name must not be empty")
        self.name = name
        self.history: Deque[Sample] = deque()
        self.previous_raw: Optional[float] = None
        self.is_bars = False

        self.min = 0.0
        self.max = 0.0
        self.avg = 0.0
        self.median = 0.0

    def __repr__(self) -> str:
        return f"Series(name={self.name!r}, len={len(self.history)})"

    def __len__(self) -> int:
        return len(self.history)

    @property
    def glyph(self) -> str:
        return self.name[0]

    def ingest(self, value: Sample, plot_width: int, bars: bool = False) -> None:
        """Append ``value`` and evict from the front to honour ``plot_width``."""
        self.is_bars = bool(bars)
        self.history.append(value)
        self.trim(plot_width)

    def pad(self, length: int) -> int:
        """Append pad entries until the history is ``length`` long.

        Returns the number of pads added.
        """
        added = 0
        while len(self.history) < length:
            self.history.append(None)
            added += 1
        return added

    def trim(self, plot_width: int) -> None:
        cap = max(0, int(plot_width))
        while len(self.history) > cap:
            self.history.popleft()

    def apply_rate(self, interval_s: float) -> None:
        """Turn the newest entry from an absolute counter reading into a rate.

        The first reading has no predecessor and is shown as ``0``. Counter
        wraparound is corrected by :func:`counter_delta`. ``previous_raw``
        always ends up holding the untransformed reading.
        """
        if not self.history:
            return
        raw = self.history[-1]
        if raw is None:
            return

        if interval_s == 0:
            interval_s = 1.0

        if self.previous_raw is None or len(self.history) == 1:
            rate = 0.0
        else:
            rate = counter_delta(self.previous_raw, raw) / interval_s

        self.history[-1] = rate
        self.previous_raw = raw

    def values(self) -> List[float]:
        """Return the non-pad entries, oldest first."""
        return [v for v in self.history if v is not None]

    def update(self) -> None:
        """Recompute min / max / avg / median over the finite non-pad entries.

        The median is the lower middle element of the sorted values; no
        interpolation. Everything is ``0`` while no finite sample is stored.
        NaN and infinities are drawn but kept out of the statistics, so one
        of them cannot blow up the shared window.
        """
        vals = np.asarray(self.values(), dtype=float)
        vals = vals[np.isfinite(vals)]
        if vals.size == 0:
            self.min = self.max = self.avg = self.median = 0.0
            return

        ordered = np.sort(vals)
        self.min = float(np.min(vals))
        self.max = float(np.max(vals))
        self.avg = float(np.mean(vals))
        self.median = float(ordered[(ordered.size - 1) // 2])

    def last_value(self) -> float:
        for v in reversed(self.history):
            if v is not None:
                return float(v)
        return 0.0
