"""
Windows Bitmap (BMP) format definitions.

Only the uncompressed 24-bit truecolor variant with a 40-byte BITMAPINFOHEADER
is described here.
File layout: BITMAPFILEHEADER (14) + BITMAPINFOHEADER (40) + bottom-up BGR rows
"""

import numbers
from enum import Enum
from typing import NamedTuple


# Header sizes and fixed field values
FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
TOTAL_HEADER_SIZE = FILE_HEADER_SIZE + INFO_HEADER_SIZE  # also the pixel data offset

MAGIC = b"BM"
PLANES = 1
BITS_PER_PIXEL = 24
BYTES_PER_PIXEL = BITS_PER_PIXEL // 8
COMPRESSION_NONE = 0  # BI_RGB
DEFAULT_RESOLUTION = 72
DEFAULT_FILL = 0xFF  # white

# < little-endian; 2s I H H I
FILE_HEADER_FORMAT = "<2sIHHI"
# < little-endian; I i i H H I I i i I I
INFO_HEADER_FORMAT = "<IiiHHIIiiII"

# Field limits
INT32_MAX = 0x7FFFFFFF
UINT32_MAX = 0xFFFFFFFF


class Color(NamedTuple):
    """An (r, g, b) color, each channel 0-255."""

    r: int
    g: int
    b: int


WHITE = Color(0xFF, 0xFF, 0xFF)
BLACK = Color(0, 0, 0)


class RowLayout(Enum):
    """How pixel rows are sized and addressed in the pixel array."""

    LEGACY = "legacy"      # width*3 + width%4 allocated, width*3 addressed
    STANDARD = "standard"  # rows padded up to a 4-byte boundary

    def __str__(self) -> str:
        return self.value

    def row_stride(self, width: int) -> int:
        """Bytes allocated per row."""
        if self is RowLayout.LEGACY:
            return width * BYTES_PER_PIXEL + width % 4
        return (width * BYTES_PER_PIXEL + 3) & ~3

    def addressing_stride(self, width: int) -> int:
        """Bytes between the starts of two consecutive rows when addressing pixels.

        For LEGACY this differs from row_stride() unless width % 4 == 0; the
        trailing per-row padding then collects at the end of the array instead.
        """
        if self is RowLayout.LEGACY:
            return width * BYTES_PER_PIXEL
        return self.row_stride(width)

    def image_size(self, width: int, height: int) -> int:
        """Length in bytes of the pixel array for the given dimensions."""
        return height * self.row_stride(width)


def parse_row_layout(value: "str | RowLayout") -> RowLayout:
    """Get a RowLayout from its name.

    Raises:
        ValueError: If the name is not a known layout
    """
    if isinstance(value, RowLayout):
        return value
    name = str(value).strip().lower()
    try:
        return RowLayout(name)
    except ValueError:
        raise ValueError(
            f"Unsupported row layout '{value}'. "
            f"Supported layouts: {', '.join(m.value for m in RowLayout)}"
        ) from None


def is_integer(value) -> bool:
    """True for Python and numpy integers, False for bool."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def file_size_for(image_size: int) -> int:
    """Total file size for a pixel array of image_size bytes."""
    return TOTAL_HEADER_SIZE + image_size
