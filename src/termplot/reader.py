"""Sample input parsing.

Three input shapes are supported:

- ``single``: a whitespace separated stream of numbers, one per read
- ``pair``: the same stream, two numbers per read
- ``keyvalue``: one line per read holding ``name value`` pairs

For ``single`` and ``pair`` line breaks carry no meaning. A token that is
not a number throws away the rest of its line and the read is reported as
malformed. In ``keyvalue`` mode a line holding only numbers is taken as
positional values named ``"1"``, ``"2"``, ...
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional, TextIO, Tuple

logger = logging.getLogger(__name__)

MODES = ("single", "pair", "keyvalue")


@dataclass(frozen=True)
class Reading:
    """Result of one read.

    ``malformed`` readings and readings without samples leave the plot
    state untouched.
    """

    samples: List[Tuple[str, float]] = field(default_factory=list)
    positional: bool = True
    malformed: bool = False

    def __bool__(self) -> bool:
        return bool(self.samples) and not self.malformed


def parse_float(token: str) -> Optional[float]:
    try:
        return float(token)
    except ValueError:
        return None


def parse_keyvalue_line(line: str) -> Reading:
    tokens = line.split()
    if not tokens:
        return Reading(samples=[], positional=False)

    numbers = [parse_float(t) for t in tokens]
    if all(v is not None for v in numbers):
        samples = [(str(i + 1), v) for i, v in enumerate(numbers)]
        return Reading(samples=samples, positional=True)

    # a name repeated on one line keeps its last value
    latest: Dict[str, float] = {}
    skipped = 0
    for i in range(0, len(tokens) - 1, 2):
        value = parse_float(tokens[i + 1])
        if value is None:
            skipped += 1
            continue
        latest[tokens[i]] = value
    if len(tokens) % 2:
        skipped += 1
    if skipped:
        logger.warning("skipped %d malformed pair(s) in %r", skipped, line.rstrip())
    return Reading(samples=list(latest.items()), positional=False)


class SampleReader:
    """Blocking reader over a text stream.

    Parameters
    ----------
    stream : TextIO
        Usually ``sys.stdin``.
    mode : str
        One of ``single``, ``pair``, ``keyvalue``.
    """

    def __init__(self, stream: TextIO, mode: str = "single") -> None:
        if mode not in MODES:
            raise ValueError(f"unknown input mode {mode!r}; expected one of {MODES}")
        self.stream = stream
        self.mode = mode
        self._pending: Deque[str] = deque()
        self.malformed_count = 0

    def __iter__(self):
        while True:
            reading = self.read()
            if reading is None:
                return
            yield reading

    def read(self) -> Optional[Reading]:
        """Return the next reading, or ``None`` at end of input."""
        if self.mode == "keyvalue":
            line = self.stream.readline()
            if line == "":
                return None
            return parse_keyvalue_line(line)

        names = ("1",) if self.mode == "single" else ("1", "2")
        samples: List[Tuple[str, float]] = []
        for name in names:
            token = self._next_token()
            if token is None:
                return None
            value = parse_float(token)
            if value is None:
                self.malformed_count += 1
                logger.warning("discarding malformed input near %r", token)
                self._pending.clear()
                return Reading(samples=[], malformed=True)
            samples.append((name, value))
        return Reading(samples=samples, positional=True)

    def _next_token(self) -> Optional[str]:
        while not self._pending:
            line = self.stream.readline()
            if line == "":
                return None
            self._pending.extend(line.split())
        return self._pending.popleft()
