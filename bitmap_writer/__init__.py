"""
Bitmap writer package.

This package provides:
- RasterBuffer: an in-memory 24-bit pixel buffer in BMP row order
- BitmapEncoder: BMP header construction and output to any binary sink
- Configuration for row layout, fill color and header resolution
"""

from .bmp_format import BLACK, WHITE, Color, RowLayout
from .config import BitmapConfig, Resolution, default_config, load_from_toml
from .encoder import BitmapEncoder, BitmapWriteError, save_bitmap, write_bitmap
from .raster import RasterBuffer
from .validation import (
    ColorValidationError,
    DimensionError,
    PixelBoundsError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "BLACK",
    "WHITE",
    "BitmapConfig",
    "BitmapEncoder",
    "BitmapWriteError",
    "Color",
    "ColorValidationError",
    "DimensionError",
    "PixelBoundsError",
    "RasterBuffer",
    "Resolution",
    "RowLayout",
    "ValidationError",
    "default_config",
    "load_from_toml",
    "save_bitmap",
    "write_bitmap",
]
