"""
BMP Encoding and Output

This module contains the BitmapEncoder class, which turns a RasterBuffer into the
bytes of an uncompressed 24-bit BMP file and writes them to a byte sink.

Header building is pure; write() is the only method that touches the sink, and
issues exactly three writes in order: file header, info header, pixel data.

File format: ['B', 'M', file_size, 0, 0, 54] + BITMAPINFOHEADER + pixel rows
"""

from __future__ import annotations

import logging
import struct
from pathlib import Path
from typing import Optional, Protocol, TYPE_CHECKING, Union

from .bmp_format import (
    BITS_PER_PIXEL,
    COMPRESSION_NONE,
    FILE_HEADER_FORMAT,
    INFO_HEADER_FORMAT,
    INFO_HEADER_SIZE,
    MAGIC,
    PLANES,
    TOTAL_HEADER_SIZE,
    file_size_for,
)
from .config import BitmapConfig, default_config

if TYPE_CHECKING:
    from .raster import RasterBuffer

logger = logging.getLogger(__name__)


class BitmapWriteError(Exception):
    """Raised when the destination rejects header or pixel bytes."""

    def __init__(self, message: str, section: str):
        super().__init__(message)
        self.section = section


class ByteSink(Protocol):
    """Anything with a binary write(): open files, io.BytesIO, socket files."""

    def write(self, data: Union[bytes, memoryview]) -> Optional[int]: ...


class BitmapEncoder:
    """
    Encoder for 24-bit uncompressed BMP files.

    The resolution written into the info header comes from the config; the row
    layout always comes from the raster being encoded.
    """

    def __init__(self, config: Optional[BitmapConfig] = None):
        self.config = config or default_config()

    def encode_file_header(self, image_size: int) -> bytes:
        """
        Encode the 14-byte BITMAPFILEHEADER.

        Layout: 'BM', file size (u32), reserved (u16), reserved (u16), pixel offset (u32)
        """
        return struct.pack(
            FILE_HEADER_FORMAT,
            MAGIC,
            file_size_for(image_size),
            0,  # reserved
            0,  # reserved
            TOTAL_HEADER_SIZE,
        )

    def encode_info_header(self, width: int, height: int, image_size: int) -> bytes:
        """
        Encode the 40-byte BITMAPINFOHEADER.

        Args:
            width: Image width in pixels
            height: Image height in pixels (positive, rows stored bottom-up)
            image_size: Length of the pixel array in bytes

        Returns:
            bytes: header size, width, height, planes, bpp, compression, image size,
            horizontal/vertical resolution, colors used, important colors
        """
        res = self.config.resolution
        return struct.pack(
            INFO_HEADER_FORMAT,
            INFO_HEADER_SIZE,
            width,
            height,
            PLANES,
            BITS_PER_PIXEL,
            COMPRESSION_NONE,
            image_size,
            res.x,
            res.y,
            0,  # colors used
            0,  # important colors
        )

    def encode_headers(self, raster: RasterBuffer) -> tuple[bytes, bytes]:
        image_size = raster.image_size
        return (
            self.encode_file_header(image_size),
            self.encode_info_header(raster.width, raster.height, image_size),
        )

    def encode(self, raster: RasterBuffer) -> bytes:
        """Return the complete BMP file for raster as a single bytes object."""
        file_header, info_header = self.encode_headers(raster)
        data = file_header + info_header + raster.pixel_data.tobytes()
        logger.debug("Encoded %r: %d bytes", raster, len(data))
        return data

    def write(self, raster: RasterBuffer, sink: ByteSink) -> int:
        """
        Write raster as a BMP file to sink.

        The first failing write aborts the whole operation; bytes the sink has
        already accepted are left in place.

        Returns:
            int: Total number of bytes written

        Raises:
            BitmapWriteError: If the sink raises or reports a short write
        """
        file_header, info_header = self.encode_headers(raster)
        chunks = (
            ("file header", file_header),
            ("info header", info_header),
            ("pixel data", raster.pixel_data),
        )

        total = 0
        for section, chunk in chunks:
            try:
                written = sink.write(chunk)
            except Exception as e:
                logger.warning("BMP %s write failed: %s", section, e)
                raise BitmapWriteError(
                    f"Failed writing BMP {section}: {e}", section
                ) from e

            if written is not None and written != len(chunk):
                logger.warning("Short BMP %s write: %s/%d bytes", section, written, len(chunk))
                raise BitmapWriteError(
                    f"Short write in BMP {section}: {written}/{len(chunk)} bytes", section
                )
            total += len(chunk)

        logger.debug("Wrote %r: %d bytes", raster, total)
        return total

    def write_to_file(self, raster: RasterBuffer, path: Union[str, Path]) -> Path:
        """
        Write raster as a BMP file at path, creating or truncating it.

        Raises:
            BitmapWriteError: If the file cannot be opened or written
        """
        p = Path(path)
        try:
            f = p.open("wb")
        except OSError as e:
            raise BitmapWriteError(f"Cannot open {p} for writing: {e}", "open") from e

        with f:
            total = self.write(raster, f)

        logger.info("Saved %r to %s (%d bytes)", raster, p, total)
        return p


# Default encoder for the module-level helpers
_encoder = BitmapEncoder()


def write_bitmap(raster: RasterBuffer, sink: ByteSink) -> int:
    """Write raster to sink using the default encoder. See BitmapEncoder.write."""
    return _encoder.write(raster, sink)


def save_bitmap(raster: RasterBuffer, path: Union[str, Path]) -> Path:
    """Save raster to path using the default encoder. See BitmapEncoder.write_to_file."""
    return _encoder.write_to_file(raster, path)
