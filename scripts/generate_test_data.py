"""Endless test streams for termplot.

    python scripts/generate_test_data.py | termplot
    python scripts/generate_test_data.py --mode pair | termplot -2 -c AB -t "test title" -u cm
    python scripts/generate_test_data.py --mode keyvalue | termplot -k
"""

from __future__ import annotations

import argparse
import math
import sys
import time
from typing import Iterator


def single_stream(step: float = 0.2) -> Iterator[str]:
    x = 0.0
    while True:
        x += step
        yield f"{math.sin(x) * 100.0} "


def pair_stream(step: float = 0.2) -> Iterator[str]:
    x = 0.0
    while True:
        x += step
        yield f"{math.sin(x) * 100.0} {math.cos(x * 0.9) * 80.0} "


def keyvalue_stream(step: float = 0.2) -> Iterator[str]:
    x = 0.0
    while True:
        x += step
        yield (
            f"sin {math.sin(x) * 100.0} cos {math.cos(x * 0.9) * 80.0} "
            f"misc {math.cos(x * 0.13 + 2) * 50.0} a 20 b -30 ca 3 cb 5 cc 6 f 7 g 9\n"
        )


STREAMS = {
    "single": single_stream,
    "pair": pair_stream,
    "keyvalue": keyvalue_stream,
}


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate test data for termplot.")
    parser.add_argument("--mode", choices=sorted(STREAMS), default="single", help="Stream shape.")
    parser.add_argument("--interval", type=float, default=0.05, help="Seconds between samples.")
    parser.add_argument("--count", type=int, default=0, help="Stop after this many samples (0: never).")
    args = parser.parse_args()

    n = 0
    try:
        for chunk in STREAMS[args.mode]():
            sys.stdout.write(chunk)
            sys.stdout.flush()
            n += 1
            if args.count and n >= args.count:
                break
            time.sleep(args.interval)
    except (BrokenPipeError, KeyboardInterrupt):
        pass


if __name__ == "__main__":
    main()
