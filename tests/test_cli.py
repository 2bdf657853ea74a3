from __future__ import annotations

import logging
from pathlib import Path
import sys

sys.path.insert(0, "src")

import pytest
import typer
import yaml
from typer.testing import CliRunner

from termplot import cli, terminal_monitor
from termplot.core.engine import PlotEngine

runner = CliRunner()


@pytest.fixture
def captured(monkeypatch):
    seen = {}

    def fake_run(cfg, stream, clock=None):
        seen["cfg"] = cfg
        return PlotEngine(cfg)

    monkeypatch.setattr(terminal_monitor, "run_terminal_monitor", fake_run)
    return seen


def test_collect_overrides_leaves_unset_flags_out() -> None:
    overrides = cli._collect_overrides(
        two=False, keyvalue=True, rate=False, bars=True, chars="@#", colors="red, green",
        unit=None,
    )
    assert overrides == {
        "mode": "keyvalue",
        "rate": None,
        "bars": True,
        "colors": ["red", "green"],
        "glyphs": ["@", "#"],
        "unit": None,
    }


def test_two_and_keyvalue_are_exclusive() -> None:
    with pytest.raises(typer.BadParameter):
        cli._resolve_mode(True, True)
    assert cli._resolve_mode(True, False) == "pair"
    assert cli._resolve_mode(False, False) is None


def test_version_flag() -> None:
    result = runner.invoke(cli.app, ["--version"])
    assert result.exit_code == 0
    assert result.output.startswith("termplot ")


def test_conflicting_modes_exit_with_usage_error(captured) -> None:
    result = runner.invoke(cli.app, ["-2", "-k"])
    assert result.exit_code == 2
    assert "cfg" not in captured


def test_options_reach_config(captured) -> None:
    result = runner.invoke(
        cli.app,
        ["-2", "-r", "-c", "@#", "-m", "50", "-t", "load", "-u", "%", "-C", "red,cyan"],
        input="",
    )
    assert result.exit_code == 0, result.output
    cfg = captured["cfg"]
    assert cfg.mode == "pair"
    assert cfg.rate
    assert cfg.glyphs == ["@", "#"]
    assert cfg.hard_max == 50.0
    assert (cfg.title, cfg.unit) == ("load", "%")
    assert cfg.colors == ["red", "cyan"]


def test_config_file_with_command_line_precedence(tmp_path: Path, captured) -> None:
    cfg_path = tmp_path / "plot.yml"
    cfg_path.write_text(yaml.safe_dump({"title": "from file", "unit": "ms", "bars": True}), encoding="utf-8")
    result = runner.invoke(cli.app, ["--config", str(cfg_path), "-u", "s"], input="")
    assert result.exit_code == 0, result.output
    cfg = captured["cfg"]
    assert cfg.title == "from file"
    assert cfg.unit == "s"
    assert cfg.bars


def test_invalid_value_is_a_usage_error(captured) -> None:
    result = runner.invoke(cli.app, ["-e", "xx"])
    assert result.exit_code == 2
    assert "cfg" not in captured


def test_missing_curses_exits_with_error(monkeypatch) -> None:
    def broken(cfg, stream, clock=None):
        raise RuntimeError("curses is not available on this platform")

    monkeypatch.setattr(terminal_monitor, "run_terminal_monitor", broken)
    result = runner.invoke(cli.app, [], input="")
    assert result.exit_code == 1
    assert "curses is not available" in result.output


def test_setup_logger_writes_to_file(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "termplot.log"
    logger = cli._setup_logger(log_path)
    try:
        logger.info("hello %s", "log")
        for handler in logger.handlers:
            handler.flush()
        assert "[INFO] hello log" in log_path.read_text(encoding="utf-8")
    finally:
        for handler in list(logger.handlers):
            handler.close()
        cli._setup_logger(None)


def test_setup_logger_without_file_is_silent() -> None:
    logger = cli._setup_logger(None)
    assert all(isinstance(h, logging.NullHandler) for h in logger.handlers)


def test_interrupt_exits_cleanly(monkeypatch) -> None:
    def interrupted(cfg, stream, clock=None):
        raise KeyboardInterrupt

    monkeypatch.setattr(terminal_monitor, "run_terminal_monitor", interrupted)
    result = runner.invoke(cli.app, [], input="")
    assert result.exit_code == 0
