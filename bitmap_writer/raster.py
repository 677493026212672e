from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np

from .bmp_format import BYTES_PER_PIXEL, Color, RowLayout
from .config import BitmapConfig, default_config
from .validation import (
    validate_color,
    validate_dimensions,
    validate_pixel_array,
    validate_pixel_coordinates,
)

logger = logging.getLogger(__name__)


class RasterBuffer:
    """
    A RasterBuffer is an in-memory 24-bit image laid out exactly as the pixel array
    of a BMP file: rows stored bottom-to-top, each pixel as (blue, green, red).
    The buffer is created white (or with the configured fill byte) and mutated one
    pixel at a time, then handed to a BitmapEncoder.

    Coordinates are (x, y) with (0, 0) the top left pixel as seen in a viewer.

    Args:
        - width (int): width in pixels, > 0
        - height (int): height in pixels, > 0
        - config (BitmapConfig): row layout and fill byte. Defaults to default_config()
    """

    def __init__(self, width: int, height: int, config: Optional[BitmapConfig] = None):
        self.config = config or default_config()
        validate_dimensions(width, height, self.config.layout)

        width, height = int(width), int(height)
        self._width = width
        self._height = height
        self._row_stride = self.config.layout.row_stride(width)
        self._addr_stride = self.config.layout.addressing_stride(width)
        self._pixels = bytearray([self.config.fill]) * (height * self._row_stride)

        logger.debug(
            "Allocated %dx%d raster: %d bytes, layout=%s",
            width,
            height,
            len(self._pixels),
            self.config.layout,
        )

    def __repr__(self) -> str:
        return f"RasterBuffer({self._width}x{self._height}, layout={self.layout})"

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def layout(self) -> RowLayout:
        return self.config.layout

    @property
    def row_stride(self) -> int:
        """Bytes allocated per row, padding included."""
        return self._row_stride

    @property
    def image_size(self) -> int:
        """Length of the pixel array in bytes."""
        return len(self._pixels)

    @property
    def pixel_data(self) -> memoryview:
        """Read-only view of the pixel array, in file order."""
        return memoryview(self._pixels).toreadonly()

    def _offset(self, x: int, y: int) -> int:
        # BMP rows are stored bottom-up
        return (self._height - y - 1) * self._addr_stride + x * BYTES_PER_PIXEL

    def set_pixel(self, x: int, y: int, color: Tuple[int, int, int]) -> None:
        """
        Set the pixel at (x, y) to color.

        Args:
            - x (int): column, 0 <= x < width
            - y (int): row, 0 <= y < height
            - color (Tuple[int, int, int]): (r, g, b), each 0-255

        Raises:
            PixelBoundsError: if (x, y) is outside the raster
            ColorValidationError: if color is not three bytes
        """
        validate_pixel_coordinates(x, y, self._width, self._height)
        validate_color(color)

        i = self._offset(int(x), int(y))
        r, g, b = (int(c) for c in color)
        # Pixel order for bitmaps is (blue, green, red)
        self._pixels[i] = b
        self._pixels[i + 1] = g
        self._pixels[i + 2] = r

    def get_pixel(self, x: int, y: int) -> Color:
        """Read back the (r, g, b) color at (x, y)."""
        validate_pixel_coordinates(x, y, self._width, self._height)

        i = self._offset(int(x), int(y))
        b, g, r = self._pixels[i:i + BYTES_PER_PIXEL]
        return Color(r, g, b)

    def _pixel_rows(self, pixels) -> np.ndarray:
        """(height, addressing stride) view over the addressed part of pixels."""
        used = self._height * self._addr_stride
        return np.frombuffer(pixels, dtype=np.uint8)[:used].reshape(
            self._height, self._addr_stride
        )

    def to_array(self) -> np.ndarray:
        """
        Copy the raster out as an RGB array of shape (height, width, 3), dtype uint8,
        with row 0 at the top.
        """
        rows = self._pixel_rows(self._pixels)[:, : self._width * BYTES_PER_PIXEL]
        bgr = rows.reshape(self._height, self._width, BYTES_PER_PIXEL)
        return bgr[::-1, :, ::-1].copy()

    @classmethod
    def from_array(cls, img: np.ndarray, config: Optional[BitmapConfig] = None) -> RasterBuffer:
        """
        Create a raster from an RGB array of shape (height, width, 3), row 0 at the top.

        Args:
            - img (np.ndarray): integer array with values 0-255
            - config (BitmapConfig): row layout and fill byte for the padding
        """
        img = np.asarray(img)
        validate_pixel_array(img)

        height, width = int(img.shape[0]), int(img.shape[1])
        raster = cls(width, height, config)

        bgr_rows = img[::-1, :, ::-1].astype(np.uint8).reshape(height, width * BYTES_PER_PIXEL)
        raster._pixel_rows(raster._pixels)[:, : width * BYTES_PER_PIXEL] = bgr_rows
        return raster
