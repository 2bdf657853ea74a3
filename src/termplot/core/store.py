"""Ordered collection of series kept column-aligned."""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Set

from .series import Sample, Series

logger = logging.getLogger(__name__)


class SeriesStore:
    """Series keyed by name, iterated in sorted name order.

    Sorted order (not insertion order) is the display order, so the same set
    of names always lays out the same way.

    A cycle is bracketed by :meth:`begin_cycle` and :meth:`end_cycle`. In
    key/value mode :meth:`end_cycle` appends one pad entry to every series
    that got no sample, so each series advances by one column per cycle.
    """

    def __init__(self) -> None:
        self._series: Dict[str, Series] = {}
        self._touched: Set[str] = set()

    def __len__(self) -> int:
        return len(self._series)

    def __contains__(self, name: object) -> bool:
        return name in self._series

    def __iter__(self) -> Iterator[Series]:
        for name in sorted(self._series):
            yield self._series[name]

    def __getitem__(self, name: str) -> Series:
        return self._series[name]

    def get(self, name: str) -> Optional[Series]:
        return self._series.get(name)

    def names(self) -> List[str]:
        return sorted(self._series)

    def series(self) -> List[Series]:
        return list(self)

    @property
    def max_history_length(self) -> int:
        if not self._series:
            return 0
        return max(len(s.history) for s in self._series.values())

    @property
    def touched(self) -> List[Series]:
        """Series that received a sample in the current cycle, sorted by name."""
        return [self._series[n] for n in sorted(self._touched)]

    def begin_cycle(self) -> None:
        self._touched.clear()

    def ingest_named(
        self,
        name: str,
        value: Sample,
        plot_width: int,
        bars: bool = False,
    ) -> Optional[Series]:
        """Append ``value`` to the series ``name``, creating it when unseen.

        A series lagging more than one column behind the longest history is
        padded up to ``max_history_length - 1`` first, so the new value lands
        in the column its siblings are about to fill.
        """
        if not name:
            return None

        series = self._series.get(name)
        if series is None:
            series = Series(name)
            self._series[name] = series
            logger.debug("new series %r", name)

        target = self.max_history_length - 1
        if len(series.history) < target:
            added = series.pad(target)
            logger.debug("padded %r with %d empty slot(s)", name, added)

        series.ingest(value, plot_width, bars)
        self._touched.add(name)
        return series

    def end_cycle(self, plot_width: int) -> List[Series]:
        """Pad every series that received nothing this cycle.

        Returns the padded series.
        """
        padded = []
        for series in self:
            if series.name in self._touched:
                continue
            series.ingest(None, plot_width, series.is_bars)
            padded.append(series)
        return padded

    def update(self) -> None:
        for series in self._series.values():
            series.update()

    def enforce_capacity(self, plot_width: int) -> None:
        for series in self._series.values():
            series.trim(plot_width)

    def clear(self) -> None:
        if self._series:
            logger.info("discarding %d series", len(self._series))
        self._series.clear()
        self._touched.clear()
