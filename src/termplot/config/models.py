from __future__ import annotations

from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from ..core.scale import Bounds

COLOR_NAMES = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")


class ConfigBase(BaseModel):
    model_config = {"extra": "forbid"}


def _single_char(value: str, field_name: str) -> str:
    if len(value) != 1:
        raise ValueError(f"{field_name} must be exactly one character")
    return value


class PlotConfig(ConfigBase):
    title: str = ".: termplot :."
    unit: str = ""
    mode: Literal["single", "pair", "keyvalue"] = "single"
    rate: bool = False
    bars: bool = False

    soft_max: Optional[float] = None
    soft_min: Optional[float] = None
    hard_max: Optional[float] = None
    hard_min: Optional[float] = None

    error_high_char: str = "e"
    error_low_char: str = "v"
    glyphs: List[str] = []
    colors: List[str] = []

    log_file: Optional[Path] = None

    @field_validator("error_high_char")
    @classmethod
    def _error_high_single(cls, value: str) -> str:
        return _single_char(value, "error_high_char")

    @field_validator("error_low_char")
    @classmethod
    def _error_low_single(cls, value: str) -> str:
        return _single_char(value, "error_low_char")

    @field_validator("glyphs")
    @classmethod
    def _glyphs_single(cls, value: List[str]) -> List[str]:
        for glyph in value:
            _single_char(glyph, "glyphs entries")
        return value

    @field_validator("colors")
    @classmethod
    def _colors_known(cls, value: List[str]) -> List[str]:
        names = [c.strip().lower() for c in value if c.strip()]
        invalid = [c for c in names if c not in COLOR_NAMES]
        if invalid:
            raise ValueError(f"unknown colors {invalid}; choose from {list(COLOR_NAMES)}")
        return names

    @model_validator(mode="after")
    def _normalize_bounds(self) -> "PlotConfig":
        bounds = self.bounds()
        self.soft_max = bounds.soft_max
        self.hard_max = bounds.hard_max
        return self

    def bounds(self) -> Bounds:
        return Bounds(
            soft_max=self.soft_max,
            soft_min=self.soft_min,
            hard_max=self.hard_max,
            hard_min=self.hard_min,
        ).normalized()


def format_validation_error(exc: ValidationError, *, filename: str) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(item) for item in error.get("loc", []))
        msg = error.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    details = "; ".join(parts) if parts else str(exc)
    return f"{filename}: invalid configuration: {details}"
