from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from .models import PlotConfig, format_validation_error


class ConfigError(ValueError):
    pass


def load_plot_config(path: Path, overrides: Optional[Mapping[str, Any]] = None) -> PlotConfig:
    raw = _load_raw_config(path)
    return build_plot_config(raw, overrides, filename=path.name)


def _load_raw_config(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        data = yaml.safe_load(text)
    elif suffix == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"{path.name}: {exc}") from exc
    else:
        raise ConfigError(f"Unsupported config extension '{path.suffix}'. Use .yml, .yaml or .json.")
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path.name}: configuration must be a mapping")
    return data


def merge_overrides(config: Mapping[str, Any], overrides: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Overlay command line values on file values; ``None`` means "not given"."""
    merged = deepcopy(dict(config))
    for key, value in (overrides or {}).items():
        if value is None:
            continue
        merged[key] = value
    return merged


def build_plot_config(
    config: Mapping[str, Any],
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    filename: str = "<command line>",
) -> PlotConfig:
    raw = merge_overrides(config, overrides)
    try:
        return PlotConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(format_validation_error(exc, filename=filename)) from exc
