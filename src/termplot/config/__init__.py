"""Configuration loading and validation utilities."""

from .loader import ConfigError, build_plot_config, load_plot_config, merge_overrides
from .models import COLOR_NAMES, PlotConfig

__all__ = [
    "COLOR_NAMES",
    "ConfigError",
    "PlotConfig",
    "build_plot_config",
    "load_plot_config",
    "merge_overrides",
]
