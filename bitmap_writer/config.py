# bitmap_writer/config.py
from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .bmp_format import (
    DEFAULT_FILL,
    DEFAULT_RESOLUTION,
    INT32_MAX,
    RowLayout,
    is_integer,
    parse_row_layout,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    x: int = DEFAULT_RESOLUTION
    y: int = DEFAULT_RESOLUTION

    def __post_init__(self) -> None:
        if not (is_integer(self.x) and is_integer(self.y)):
            raise ValueError(
                f"Resolution must be integers, got ({self.x!r},{self.y!r})"
            )
        if not (0 <= self.x <= INT32_MAX and 0 <= self.y <= INT32_MAX):
            raise ValueError(
                f"Resolution must be within 0-{INT32_MAX}, got ({self.x},{self.y})"
            )


@dataclass(frozen=True)
class BitmapConfig:
    layout: RowLayout = RowLayout.LEGACY
    fill: int = DEFAULT_FILL
    resolution: Resolution = field(default_factory=Resolution)

    def __post_init__(self) -> None:
        if not isinstance(self.layout, RowLayout):
            raise ValueError(f"layout must be a RowLayout, got {self.layout!r}")
        if not is_integer(self.fill):
            raise ValueError(f"fill must be an integer byte value, got {self.fill!r}")
        if not (0 <= self.fill <= 0xFF):
            raise ValueError(f"fill must be a byte value 0-255, got {self.fill}")


def load_from_toml(config_path: str | Path) -> BitmapConfig:
    """
    Load a BitmapConfig from a TOML file.

    Expected TOML structure (every key optional):

    [bitmap]
    layout = "legacy"  # legacy|standard
    fill = 255

    [resolution]
    x = 72
    y = 72
    """
    p = Path(config_path)
    if not p.exists():
        raise FileNotFoundError(f"Configuration file not found: {p}")

    with p.open("rb") as f:
        data = tomllib.load(f)

    bitmap = data.get("bitmap") or {}
    resolution = data.get("resolution") or {}

    cfg = BitmapConfig(
        layout=parse_row_layout(bitmap.get("layout", RowLayout.LEGACY.value)),
        fill=bitmap.get("fill", DEFAULT_FILL),
        resolution=Resolution(
            x=resolution.get("x", DEFAULT_RESOLUTION),
            y=resolution.get("y", DEFAULT_RESOLUTION),
        ),
    )

    logger.info(
        "Loaded BitmapConfig: layout=%s, fill=0x%02X, resolution=%dx%d",
        cfg.layout,
        cfg.fill,
        cfg.resolution.x,
        cfg.resolution.y,
    )
    return cfg


def default_config() -> BitmapConfig:
    """Byte-compatible defaults: legacy row layout, white fill, 72 in both axes."""
    return BitmapConfig()
