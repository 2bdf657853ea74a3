"""Terminal live plot.

Curses based full screen plot fed from a text stream (normally stdin).
Each cycle is strictly: read one sample set, update the series, compute the
window, render. The SIGWINCH handler only raises a flag; the loop picks it
up at the top of the next cycle and redoes the layout itself.
"""

from __future__ import annotations

import logging
import signal
import time
from typing import Callable, Dict, Optional, Sequence, TextIO, Tuple

try:
    import curses  # type: ignore
except Exception:  # pragma: no cover
    curses = None  # type: ignore

from .core.engine import PlotEngine
from .core.layout import Attribute, LayoutPolicy
from .reader import SampleReader
from .screen import ScreenRenderer

logger = logging.getLogger(__name__)


def _safe_addstr(stdscr, y: int, x: int, s: str, attr: int = 0) -> None:
    """Add string to curses window without raising on small terminals."""
    try:
        h, w = stdscr.getmaxyx()
        if y < 0 or y >= h or x >= w:
            return
        if x < 0:
            s = str(s)[-x:]
            x = 0
        else:
            s = str(s)
        if not s:
            return
        # the bottom-right cell cannot be written without scrolling
        limit = w - x - 1 if y == h - 1 else w - x
        s = s[: max(0, limit)]
        if not s:
            return
        try:
            stdscr.addstr(y, x, s, attr)
        except Exception:
            stdscr.addstr(y, x, s)
    except Exception:
        return


def _attribute_bits(attribute: Optional[Attribute]) -> int:
    if curses is None or attribute is None:
        return 0
    return {
        Attribute.BOLD: curses.A_BOLD,
        Attribute.STANDOUT: curses.A_STANDOUT,
        Attribute.DIM: curses.A_DIM,
        Attribute.REVERSE: curses.A_REVERSE,
    }[attribute]


class CursesCanvas:
    """:class:`~termplot.canvas.Canvas` on a curses window."""

    def __init__(self, stdscr, palette: Sequence[str] = ()) -> None:
        self.stdscr = stdscr
        self._attr = 0
        self._pairs: Dict[str, int] = {}
        self._init_colors(palette)

    def _init_colors(self, palette: Sequence[str]) -> None:
        if curses is None or not palette:
            return
        try:
            if not curses.has_colors():
                return
            curses.start_color()
            try:
                curses.use_default_colors()
                background = -1
            except Exception:
                background = curses.COLOR_BLACK
            for name in palette:
                if name in self._pairs:
                    continue
                pair = len(self._pairs) + 1
                code = getattr(curses, f"COLOR_{name.upper()}")
                curses.init_pair(pair, code, background)
                self._pairs[name] = pair
        except Exception:
            logger.warning("could not set up color pairs, drawing without colors")
            self._pairs.clear()

    def size(self) -> Tuple[int, int]:
        return self.stdscr.getmaxyx()

    def erase(self) -> None:
        self.stdscr.erase()

    def put(self, row: int, col: int, text: str) -> None:
        _safe_addstr(self.stdscr, row, col, text, self._attr)

    def vline(self, col: int, row0: int, row1: int, char: str) -> None:
        for row in range(min(row0, row1), max(row0, row1) + 1):
            _safe_addstr(self.stdscr, row, col, char, self._attr)

    def reverse(self, row: int, col: int, length: int = 1) -> None:
        if curses is None:
            return
        try:
            h, w = self.stdscr.getmaxyx()
            if 0 <= row < h and 0 <= col < w:
                self.stdscr.chgat(row, col, max(1, min(length, w - col)), self._attr | curses.A_REVERSE)
        except Exception:
            return

    def set_style(self, color: Optional[str] = None, attribute: Optional[Attribute] = None) -> None:
        attr = _attribute_bits(attribute)
        if color is not None and color in self._pairs:
            attr |= curses.color_pair(self._pairs[color])
        self._attr = attr

    def clear_style(self) -> None:
        self._attr = 0

    def refresh(self) -> None:
        try:
            self.stdscr.move(0, 0)
        except Exception:
            pass
        self.stdscr.refresh()


class ResizeFlag:
    """Set from the SIGWINCH handler, consumed by the main loop."""

    def __init__(self) -> None:
        self.pending = False

    def __call__(self, signum, frame) -> None:
        self.pending = True

    def consume(self) -> bool:
        pending = self.pending
        self.pending = False
        return pending


class TerminalMonitor:
    """Full screen live plot.

    Parameters
    ----------
    config : PlotConfig
        Validated configuration.
    stream : TextIO
        Sample source.
    clock : callable, optional
        Monotonic milliseconds for rate mode.
    """

    def __init__(self, config, stream: TextIO, clock: Optional[Callable[[], float]] = None) -> None:
        self.config = config
        self.reader = SampleReader(stream, config.mode)
        self.engine = PlotEngine(config, clock=clock)
        self.renderer = ScreenRenderer(config)
        self.resize_flag = ResizeFlag()
        self.t0_wall = time.perf_counter()

    def run(self) -> None:
        if curses is None:
            raise RuntimeError("curses is not available on this platform")
        curses.wrapper(self._loop)

    def _install_signal_handlers(self):
        """Route SIGWINCH to the resize flag. Returns the previous handler."""
        sigwinch = getattr(signal, "SIGWINCH", None)
        if sigwinch is None:
            return None
        return signal.signal(sigwinch, self.resize_flag)

    def _restore_signal_handlers(self, previous) -> None:
        sigwinch = getattr(signal, "SIGWINCH", None)
        if sigwinch is not None and previous is not None:
            signal.signal(sigwinch, previous)

    def _handle_resize(self, stdscr, canvas: CursesCanvas) -> None:
        try:
            curses.endwin()
            stdscr.refresh()
            curses.update_lines_cols()
        except Exception:
            pass
        h, w = canvas.size()
        logger.debug("terminal resized to %dx%d", w, h)
        self.engine.resize(LayoutPolicy.plot_width(w))
        self.renderer.render(canvas, self.engine)

    def _loop(self, stdscr) -> None:
        try:
            curses.curs_set(0)
        except Exception:
            pass

        canvas = CursesCanvas(stdscr, self.config.colors)
        previous = self._install_signal_handlers()
        self.renderer.render_waiting(canvas)
        logger.info("monitor started (mode %s)", self.config.mode)

        try:
            while True:
                if self.resize_flag.consume():
                    self._handle_resize(stdscr, canvas)

                reading = self.reader.read()
                if reading is None:
                    break

                _h, w = canvas.size()
                if not self.engine.ingest(reading, LayoutPolicy.plot_width(w)):
                    continue
                self.renderer.render(canvas, self.engine)
        finally:
            self._restore_signal_handlers(previous)

        logger.info(
            "end of input after %d cycle(s), %.1f s",
            self.engine.cycles,
            time.perf_counter() - self.t0_wall,
        )


def run_terminal_monitor(config, stream: TextIO, clock: Optional[Callable[[], float]] = None) -> PlotEngine:
    """Run the full screen plot until the stream ends. Returns the engine."""
    mon = TerminalMonitor(config, stream, clock=clock)
    mon.run()
    return mon.engine
