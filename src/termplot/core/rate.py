"""Counter to rate conversion.

Inputs in rate mode are absolute counter readings (bytes sent, packets
seen, ...). Each cycle the newest reading of every series that received a
sample is replaced by ``(current - previous) / interval``.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, Optional, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .series import Series

logger = logging.getLogger(__name__)


class CounterLimits:
    """Wraparound thresholds for 32-bit and 31-bit counters."""

    U32_WRAP_FLOOR = 0xFFFFFF00
    U31_WRAP_FLOOR = 0x7FFFFF00
    U31_MAX = 0x7FFFFFFF
    # A reading below this right after a near-max reading is a rollover.
    SMALL_READING = 0x100


def monotonic_ms() -> float:
    """Default clock: monotonic milliseconds."""
    return time.monotonic() * 1000.0


def counter_delta(previous: float, current: float) -> float:
    """Difference between two counter readings, corrected for rollover.

    A previous reading in the top 256 values of the 32-bit (or 31-bit)
    range followed by a small non-negative reading is treated as a wrap;
    the delta is rebuilt as ``current + (previous - floor)``. Any other
    pair gives the plain difference, negative values included.
    """
    small = 0 <= current < CounterLimits.SMALL_READING
    if small and previous > CounterLimits.U32_WRAP_FLOOR:
        delta = current + (previous - CounterLimits.U32_WRAP_FLOOR)
        logger.debug("32-bit counter wrap: %r -> %r (delta %r)", previous, current, delta)
        return delta
    if small and CounterLimits.U31_WRAP_FLOOR < previous <= CounterLimits.U31_MAX:
        delta = current + (previous - CounterLimits.U31_WRAP_FLOOR)
        logger.debug("31-bit counter wrap: %r -> %r (delta %r)", previous, current, delta)
        return delta
    return current - previous


class RateTransformer:
    """Measures the inter-sample interval and applies it to series.

    Parameters
    ----------
    clock : callable, optional
        Returns monotonic milliseconds. Defaults to :func:`monotonic_ms`.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self.clock = clock or monotonic_ms
        self._last_ms = float(self.clock())
        self.interval_s = 1.0

    def tick(self) -> float:
        """Measure seconds since the previous tick; a zero gap counts as 1 s."""
        now_ms = float(self.clock())
        interval_s = (now_ms - self._last_ms) / 1000.0
        self._last_ms = now_ms
        if interval_s <= 0.0:
            interval_s = 1.0
        self.interval_s = interval_s
        return interval_s

    def apply(self, series: Iterable["Series"]) -> float:
        interval_s = self.tick()
        for s in series:
            s.apply_rate(interval_s)
        return interval_s
