"""Tests for the raster buffer: allocation, pixel addressing and array interop."""

import numpy as np
import pytest

from bitmap_writer.bmp_format import BLACK, WHITE, Color, RowLayout
from bitmap_writer.config import BitmapConfig
from bitmap_writer.raster import RasterBuffer
from bitmap_writer.validation import (
    ColorValidationError,
    DimensionError,
    PixelBoundsError,
    ValidationError,
)


@pytest.fixture(params=[RowLayout.LEGACY, RowLayout.STANDARD], ids=str)
def config(request):
    return BitmapConfig(layout=request.param)


def test_new_raster_is_white(config):
    raster = RasterBuffer(5, 3, config)
    assert raster.width == 5 and raster.height == 3
    assert all(b == 0xFF for b in raster.pixel_data)
    for y in range(3):
        for x in range(5):
            assert raster.get_pixel(x, y) == WHITE


def test_custom_fill_byte():
    raster = RasterBuffer(2, 2, BitmapConfig(fill=0))
    assert raster.get_pixel(1, 1) == BLACK
    assert bytes(raster.pixel_data) == bytes(raster.image_size)


def test_legacy_allocation_size():
    # width*3 + width%4 bytes per row
    for width in range(1, 10):
        raster = RasterBuffer(width, 4)
        assert raster.row_stride == width * 3 + width % 4
        assert raster.image_size == 4 * width * 3 + 4 * (width % 4)


def test_standard_allocation_size():
    for width in range(1, 10):
        raster = RasterBuffer(width, 4, BitmapConfig(layout=RowLayout.STANDARD))
        assert raster.row_stride % 4 == 0
        assert width * 3 <= raster.row_stride < width * 3 + 4
        assert raster.image_size == 4 * raster.row_stride


def test_set_pixel_stores_bgr():
    raster = RasterBuffer(4, 1)
    raster.set_pixel(1, 0, (10, 20, 30))
    assert bytes(raster.pixel_data[3:6]) == bytes([30, 20, 10])
    assert raster.get_pixel(1, 0) == Color(10, 20, 30)
    assert raster.get_pixel(1, 0) == (10, 20, 30)


def test_rows_are_stored_bottom_up():
    # width 4: both layouts use a 12 byte stride
    raster = RasterBuffer(4, 3)
    raster.set_pixel(0, 0, (1, 2, 3))
    raster.set_pixel(0, 2, (4, 5, 6))
    data = bytes(raster.pixel_data)
    assert data[24:27] == bytes([3, 2, 1])  # last row
    assert data[0:3] == bytes([6, 5, 4])  # first row


def test_legacy_addressing_uses_unpadded_stride():
    raster = RasterBuffer(3, 2)
    raster.set_pixel(2, 0, (1, 2, 3))
    data = bytes(raster.pixel_data)
    assert len(data) == 24
    assert data[15:18] == bytes([3, 2, 1])
    # padding of every row ends up after the addressed pixels
    assert data[18:] == b"\xff" * 6


def test_standard_addressing_uses_padded_stride():
    raster = RasterBuffer(3, 2, BitmapConfig(layout=RowLayout.STANDARD))
    raster.set_pixel(2, 0, (1, 2, 3))
    data = bytes(raster.pixel_data)
    assert len(data) == 24
    assert data[18:21] == bytes([3, 2, 1])
    assert data[9:12] == b"\xff" * 3


def test_set_pixel_does_not_alias(config):
    width, height = 7, 5
    raster = RasterBuffer(width, height, config)
    expected = {}
    for y in range(height):
        for x in range(width):
            color = (x * 30, y * 50, (x + y) % 256)
            raster.set_pixel(x, y, color)
            expected[(x, y)] = color

    for (x, y), color in expected.items():
        assert raster.get_pixel(x, y) == color


def test_set_pixel_leaves_other_pixels_untouched(config):
    raster = RasterBuffer(6, 4, config)
    raster.set_pixel(2, 1, (0, 0, 0))
    for y in range(4):
        for x in range(6):
            if (x, y) != (2, 1):
                assert raster.get_pixel(x, y) == WHITE


def test_set_pixel_accepts_numpy_integers():
    raster = RasterBuffer(np.int64(3), np.int32(2))
    assert (raster.width, raster.height) == (3, 2)
    assert type(raster.width) is int

    xs = np.arange(3)
    channels = np.zeros(3, dtype=np.uint8) + np.array([10, 20, 30], dtype=np.uint8)
    raster.set_pixel(xs[2], xs[1], tuple(channels))
    assert raster.get_pixel(np.int64(2), np.int64(1)) == (10, 20, 30)

    # a pixel read back through to_array() can be written again
    other = RasterBuffer(3, 2)
    other.set_pixel(xs[0], xs[0], tuple(raster.to_array()[1, 2]))
    assert other.get_pixel(0, 0) == (10, 20, 30)
    assert all(type(c) is int for c in other.get_pixel(0, 0))


def test_bool_is_not_a_coordinate():
    raster = RasterBuffer(2, 2)
    with pytest.raises(PixelBoundsError):
        raster.set_pixel(np.True_, 0, (0, 0, 0))
    with pytest.raises(ColorValidationError):
        raster.set_pixel(0, 0, (np.uint8(1), np.float64(2.0), 3))


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (4, 0), (0, 3), (10, 10)])
def test_out_of_bounds_pixel(x, y):
    raster = RasterBuffer(4, 3)
    with pytest.raises(PixelBoundsError, match="out of bounds"):
        raster.set_pixel(x, y, (0, 0, 0))
    with pytest.raises(IndexError):
        raster.get_pixel(x, y)


@pytest.mark.parametrize(
    "color", [(256, 0, 0), (0, -1, 0), (0, 0), (0, 0, 0, 0), (1.0, 2, 3), None, "abc"]
)
def test_invalid_color(color):
    raster = RasterBuffer(2, 2)
    with pytest.raises(ColorValidationError):
        raster.set_pixel(0, 0, color)
    assert raster.get_pixel(0, 0) == WHITE


@pytest.mark.parametrize("width,height", [(0, 1), (1, 0), (-3, 2), (2, -1), (2.5, 1), (True, 1)])
def test_invalid_dimensions(width, height):
    with pytest.raises(DimensionError):
        RasterBuffer(width, height)


def test_oversized_dimensions_rejected_before_allocation():
    with pytest.raises(DimensionError, match="32-bit"):
        RasterBuffer(0x80000000, 1)
    with pytest.raises(DimensionError, match="BMP limit"):
        RasterBuffer(40000, 40000)


def test_pixel_data_is_read_only():
    raster = RasterBuffer(2, 2)
    with pytest.raises(TypeError):
        raster.pixel_data[0] = 0


def test_to_array_orientation(config):
    raster = RasterBuffer(3, 2, config)
    raster.set_pixel(0, 0, (255, 0, 0))
    raster.set_pixel(2, 1, (0, 0, 255))

    arr = raster.to_array()
    assert arr.shape == (2, 3, 3)
    assert arr.dtype == np.uint8
    assert tuple(arr[0, 0]) == (255, 0, 0)
    assert tuple(arr[1, 2]) == (0, 0, 255)
    assert tuple(arr[1, 0]) == (255, 255, 255)


def test_from_array_matches_get_pixel(config):
    rng = np.random.default_rng(7)
    img = rng.integers(0, 256, size=(5, 7, 3), dtype=np.uint8)

    raster = RasterBuffer.from_array(img, config)
    assert (raster.width, raster.height) == (7, 5)
    assert raster.layout is config.layout
    assert raster.get_pixel(3, 4) == tuple(int(v) for v in img[4, 3])
    np.testing.assert_array_equal(raster.to_array(), img)


def test_from_array_validation():
    with pytest.raises(DimensionError):
        RasterBuffer.from_array(np.zeros((2, 2), dtype=np.uint8))
    with pytest.raises(DimensionError):
        RasterBuffer.from_array(np.zeros((0, 2, 3), dtype=np.uint8))
    with pytest.raises(ColorValidationError):
        RasterBuffer.from_array(np.full((2, 2, 3), 300, dtype=np.int32))
    with pytest.raises(ColorValidationError):
        RasterBuffer.from_array(np.zeros((2, 2, 3), dtype=np.float32))


def test_validation_errors_share_base():
    assert issubclass(DimensionError, ValidationError)
    assert issubclass(PixelBoundsError, ValidationError)
    assert issubclass(ColorValidationError, ValidationError)
    assert issubclass(ValidationError, ValueError)


if __name__ == "__main__":
    pytest.main([__file__])
