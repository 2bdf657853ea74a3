# src/termplot/cli.py

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer

from . import __version__
from .config import ConfigError, PlotConfig, build_plot_config, load_plot_config

app = typer.Typer(
    add_completion=False,
    help=(
        "Realtime plotting of numeric streams in the terminal\n\n"
        "Reads numbers from stdin and draws them as a scrolling chart.\n"
        "Use -2 for two values per sample or -k for 'name value' lines."
    ),
)

LOGGER_NAME = "termplot"


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------


def _setup_logger(log_file: Optional[Path]) -> logging.Logger:
    """
    Set up the package logger writing to ``log_file``.

    The terminal belongs to curses while plotting, so there is no console
    handler; without a log file the logger stays silent.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    if log_file is None:
        logger.addHandler(logging.NullHandler())
        return logger

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.setLevel(logging.DEBUG)
    handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger


def _parse_colors(text: Optional[str]) -> Optional[List[str]]:
    """Parse "red,green blue" into a list of color names."""
    if text is None:
        return None
    return [c for c in text.replace(",", " ").split() if c]


def _resolve_mode(two: bool, keyvalue: bool) -> Optional[str]:
    if two and keyvalue:
        raise typer.BadParameter("-2/--two and -k/--keyvalue are mutually exclusive.")
    if two:
        return "pair"
    if keyvalue:
        return "keyvalue"
    return None


def _collect_overrides(**options: Any) -> Dict[str, Any]:
    """Map command line options onto config keys; unset flags stay ``None``."""
    overrides: Dict[str, Any] = {
        "mode": _resolve_mode(options.pop("two"), options.pop("keyvalue")),
        "rate": options.pop("rate") or None,
        "bars": options.pop("bars") or None,
        "colors": _parse_colors(options.pop("colors")),
    }
    chars = options.pop("chars")
    overrides["glyphs"] = list(chars) if chars else None
    overrides.update(options)
    return overrides


def _build_config(config_path: Optional[Path], overrides: Dict[str, Any]) -> PlotConfig:
    try:
        if config_path is not None:
            return load_plot_config(config_path, overrides)
        return build_plot_config({}, overrides)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"termplot {__version__}")
        raise typer.Exit()


# ----------------------------------------------------------------------
# Commands
# ----------------------------------------------------------------------


@app.command()
def plot(
    two: bool = typer.Option(False, "--two", "-2", help="Read two values per sample and draw two plots."),
    keyvalue: bool = typer.Option(
        False, "--keyvalue", "-k", help="Read lines of 'name value' pairs, one plot per name."
    ),
    rate: bool = typer.Option(
        False, "--rate", "-r", help="Plot the rate of a counter (delta divided by the measured interval)."
    ),
    bars: bool = typer.Option(False, "--bars", "-b", help="Draw bars instead of lines."),
    chars: Optional[str] = typer.Option(
        None, "--chars", "-c", help="Plot characters, one per series in display order, e.g. '@#'."
    ),
    error_high_char: Optional[str] = typer.Option(
        None, "--error-high", "-e", help="Character drawn when a value reaches the hard max (default: e)."
    ),
    error_low_char: Optional[str] = typer.Option(
        None, "--error-low", "-E", help="Character drawn when a value touches the plot floor (default: v)."
    ),
    soft_max: Optional[float] = typer.Option(
        None, "--soft-max", "-s", help="Initial top of the scale; data may grow above it."
    ),
    soft_min: Optional[float] = typer.Option(
        None, "--soft-min", "-S", help="Initial bottom of the scale; data may go below it."
    ),
    hard_max: Optional[float] = typer.Option(
        None, "--hard-max", "-m", help="Fixed top of the scale; values at or above it draw the error character."
    ),
    hard_min: Optional[float] = typer.Option(
        None, "--hard-min", "-M", help="Fixed bottom of the scale."
    ),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Title of the plot."),
    unit: Optional[str] = typer.Option(None, "--unit", "-u", help="Unit shown beside the values."),
    colors: Optional[str] = typer.Option(
        None, "--colors", "-C", help="Comma separated color palette, e.g. 'red,green,cyan'."
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        exists=True,
        readable=True,
        help="YAML/JSON configuration file; command line options take precedence.",
    ),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Write a debug log to this file."),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."
    ),
) -> None:
    """
    Plot numbers read from stdin.

    Examples
    --------
    One value per sample:

        vmstat -n 1 | awk '{print $15; fflush()}' | termplot -t "idle" -u "%" -s 100

    Network counter as a rate:

        while true; do cat /sys/class/net/eth0/statistics/rx_bytes; sleep 1; done \\
          | termplot -r -u "B/s"

    Several named series:

        python scripts/ping_hosts.py example.org example.net | termplot -k -u ms
    """
    overrides = _collect_overrides(
        two=two,
        keyvalue=keyvalue,
        rate=rate,
        bars=bars,
        chars=chars,
        colors=colors,
        error_high_char=error_high_char,
        error_low_char=error_low_char,
        soft_max=soft_max,
        soft_min=soft_min,
        hard_max=hard_max,
        hard_min=hard_min,
        title=title,
        unit=unit,
        log_file=log_file,
    )
    cfg = _build_config(config, overrides)

    logger = _setup_logger(cfg.log_file)
    logger.info("termplot %s, config %s", __version__, cfg.model_dump(exclude_none=True))

    from .terminal_monitor import run_terminal_monitor

    try:
        engine = run_terminal_monitor(cfg, sys.stdin)
    except KeyboardInterrupt:
        logger.info("interrupted")
        raise typer.Exit(0)
    except RuntimeError as exc:
        logger.error("%s", exc)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    logger.info("done: %d series, %d cycle(s)", len(engine.store), engine.cycles)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
