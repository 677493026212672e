"""
Input validation for raster buffers.

Error taxonomy:
- ValidationError: base for all caller contract violations
- DimensionError: width/height unusable for a BMP raster
- PixelBoundsError: coordinates outside the raster
- ColorValidationError: color not an (r, g, b) triple of bytes
"""

from typing import Any, TYPE_CHECKING

from .bmp_format import (
    BYTES_PER_PIXEL,
    INT32_MAX,
    UINT32_MAX,
    RowLayout,
    file_size_for,
    is_integer,
)

if TYPE_CHECKING:
    import numpy as np


class ValidationError(ValueError):
    """Base exception for validation errors."""
    pass


class DimensionError(ValidationError):
    """Raised when raster dimensions are invalid."""
    pass


class PixelBoundsError(ValidationError, IndexError):
    """Raised when pixel coordinates fall outside the raster."""
    pass


class ColorValidationError(ValidationError):
    """Raised when a color is not three channels in 0-255."""
    pass


def validate_dimensions(width: int, height: int, layout: RowLayout) -> None:
    """
    Validate raster dimensions for the given row layout.

    Width and height are written as signed 32-bit header fields, and the total
    file size as an unsigned 32-bit field, so both limits are checked here.

    Args:
        width: Raster width in pixels
        height: Raster height in pixels
        layout: Row layout used to size the pixel array

    Raises:
        DimensionError: If the dimensions are not positive integers or are too large
    """
    if not (is_integer(width) and is_integer(height)):
        raise DimensionError(
            f"Dimensions must be integers, got {type(width).__name__}x{type(height).__name__}"
        )
    width, height = int(width), int(height)

    if width <= 0 or height <= 0:
        raise DimensionError(f"Dimensions must be positive, got {width}x{height}")

    if width > INT32_MAX or height > INT32_MAX:
        raise DimensionError(f"Dimensions exceed 32-bit header fields: {width}x{height}")

    file_size = file_size_for(layout.image_size(width, height))
    if file_size > UINT32_MAX:
        raise DimensionError(
            f"{width}x{height} raster needs a {file_size} byte file, "
            f"over the {UINT32_MAX} byte BMP limit"
        )


def validate_pixel_coordinates(x: int, y: int, width: int, height: int) -> None:
    """
    Validate that (x, y) addresses a pixel inside a width x height raster.

    Raises:
        PixelBoundsError: If either coordinate is out of range
    """
    if not (is_integer(x) and is_integer(y)):
        raise PixelBoundsError(f"Pixel coordinates must be integers, got ({x!r},{y!r})")

    if not (0 <= x < width and 0 <= y < height):
        raise PixelBoundsError(
            f"Pixel ({x},{y}) out of bounds for {width}x{height} raster"
        )


def validate_color(color: Any) -> None:
    """
    Validate an (r, g, b) color.

    Raises:
        ColorValidationError: If color is not three integer channels in 0-255
    """
    try:
        channels = tuple(color)
    except TypeError:
        raise ColorValidationError(f"Color must be an (r, g, b) triple, got {color!r}") from None

    if len(channels) != 3:
        raise ColorValidationError(
            f"Color must have 3 channels (r, g, b), got {len(channels)}"
        )

    for name, value in zip("rgb", channels):
        if not is_integer(value) or not (0 <= value <= 0xFF):
            raise ColorValidationError(
                f"Color channel {name} must be an integer in 0-255, got {value!r}"
            )


def validate_pixel_array(array: "np.ndarray") -> None:
    """
    Validate an RGB pixel array of shape (height, width, 3).

    Raises:
        DimensionError: If the array does not have shape (H, W, 3) with H, W > 0
        ColorValidationError: If values are not integers in 0-255
    """
    if array.ndim != 3 or array.shape[2] != BYTES_PER_PIXEL:
        raise DimensionError(
            f"Pixel array must have shape (height, width, 3), got {array.shape}"
        )

    if array.shape[0] == 0 or array.shape[1] == 0:
        raise DimensionError(f"Pixel array must be non-empty, got {array.shape}")

    if array.dtype.kind not in "iu":
        raise ColorValidationError(
            f"Pixel array must hold integers, got dtype {array.dtype}"
        )

    if array.min() < 0 or array.max() > 0xFF:
        raise ColorValidationError(
            f"Pixel values must be in 0-255, got range [{array.min()}, {array.max()}]"
        )
