from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
import logging
import tomllib
from typing import Any, Mapping

LOGGER = logging.getLogger(__name__)

# Shortest year; every year keeps at least one drawn sample.
MAX_DOWNSAMPLE = 365


@dataclass(frozen=True)
class RenderConfig:
    width: int = 1600
    height: int = 600
    debug: bool = False
    downsample: int = 1
    smooth: bool = True
    tick_count: int = 5

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be > 0")
        if self.downsample < 1:
            raise ValueError("downsample must be >= 1")
        if self.downsample > MAX_DOWNSAMPLE:
            raise ValueError(f"downsample must be <= {MAX_DOWNSAMPLE}")
        if self.tick_count < 2:
            raise ValueError("tick_count must be >= 2")

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "RenderConfig":
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(raw) - set(known))
        if unknown:
            raise ValueError(f"unknown render option(s): {', '.join(unknown)}")
        values: dict[str, Any] = {}
        for name, value in raw.items():
            default = known[name].default
            if isinstance(default, bool):
                values[name] = _coerce_bool(value, name)
            else:
                values[name] = _coerce_int(value, name)
        return cls(**values)


def load_render_config(path: str | Path) -> RenderConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"render config not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    table = raw.get("render", raw)
    if not isinstance(table, dict):
        raise ValueError("render must be a table")
    config = RenderConfig.from_mapping(table)
    LOGGER.debug("loaded render config from %s: %s", config_path, config)
    return config


def _coerce_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{field_name} must be a boolean")
    return value


def _coerce_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer")
    return value
