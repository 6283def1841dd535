"""Unit tests for recolor: shading blend toward target, alpha and transparent pixels untouched."""

from __future__ import annotations

import numpy as np
import pytest

from app.imaging.color import Color
from app.imaging.recolor import PixelBuffer, recolor

RED = Color(255, 0, 0)


def _solid(rgb, alpha=255, h=4, w=4):
    img = np.zeros((h, w, 4), dtype=np.uint8)
    img[:, :, :3] = rgb
    img[:, :, 3] = alpha
    return PixelBuffer(img)


def test_black_becomes_target():
    out = recolor(_solid((0, 0, 0)), Color(18, 52, 86))
    np.testing.assert_array_equal(out.data[:, :, :3], np.broadcast_to([18, 52, 86], (4, 4, 3)))


@pytest.mark.parametrize("target", [RED, Color(0, 0, 0), Color(18, 52, 86)])
def test_white_stays_white(target):
    out = recolor(_solid((255, 255, 255), alpha=128), target)
    assert (out.data[:, :, :3] == 255).all()


def test_mid_gray_blends_half_way():
    # L = 128, k = 127/255; G and B = 255 * 128/255 = 128
    out = recolor(_solid((128, 128, 128), h=1, w=1), RED)
    assert tuple(out.data[0, 0]) == (255, 128, 128, 255)


def test_transparent_pixels_untouched():
    img = np.zeros((2, 3, 4), dtype=np.uint8)
    img[:, :, 0] = 10
    img[:, :, 1] = 200
    img[:, :, 2] = 30
    img[0, 0, 3] = 255
    out = recolor(PixelBuffer(img), Color(0, 0, 255))
    np.testing.assert_array_equal(out.data[1], img[1])
    np.testing.assert_array_equal(out.data[0, 1:], img[0, 1:])
    assert not np.array_equal(out.data[0, 0], img[0, 0])


def test_recolor_preserves_shape_and_alpha_exactly():
    rng = np.random.RandomState(123)
    img = rng.randint(0, 256, (16, 24, 4)).astype(np.uint8)
    out = recolor(PixelBuffer(img), Color(229, 57, 53))
    assert (out.width, out.height) == (24, 16)
    assert out.data.dtype == np.uint8
    np.testing.assert_array_equal(out.data[:, :, 3], img[:, :, 3])


def test_recolor_does_not_mutate_input():
    rng = np.random.RandomState(7)
    img = rng.randint(0, 256, (8, 8, 4)).astype(np.uint8)
    before = img.copy()
    buffer = PixelBuffer(img)
    out = recolor(buffer, RED)
    np.testing.assert_array_equal(buffer.data, before)
    assert out.data is not buffer.data


def test_recolor_twice_is_not_a_no_op():
    once = recolor(_solid((128, 128, 128), h=1, w=1), RED)
    twice = recolor(once, RED)
    assert tuple(once.data[0, 0]) == (255, 128, 128, 255)
    assert not np.array_equal(once.data, twice.data)


def test_recolor_deterministic():
    rng = np.random.RandomState(42)
    img = rng.randint(0, 256, (16, 16, 4)).astype(np.uint8)
    out1 = recolor(PixelBuffer(img), Color(229, 57, 53))
    out2 = recolor(PixelBuffer(img), Color(229, 57, 53))
    np.testing.assert_array_equal(out1.data, out2.data)


def test_pixel_buffer_from_bytes():
    buf = PixelBuffer.from_bytes(2, 1, bytes([0, 0, 0, 255, 255, 255, 255, 255]))
    assert (buf.width, buf.height) == (2, 1)
    assert buf.to_bytes() == bytes([0, 0, 0, 255, 255, 255, 255, 255])


@pytest.mark.parametrize(
    "width, height, length",
    [(2, 1, 7), (2, 1, 12), (0, 1, 0), (1, 0, 0)],
)
def test_pixel_buffer_from_bytes_rejects_bad_length(width, height, length):
    with pytest.raises(ValueError):
        PixelBuffer.from_bytes(width, height, bytes(length))


def test_pixel_buffer_rejects_bad_arrays():
    with pytest.raises(ValueError):
        PixelBuffer(np.zeros((4, 4, 3), dtype=np.uint8))
    with pytest.raises(ValueError):
        PixelBuffer(np.zeros((4, 4, 4), dtype=np.float32))
    with pytest.raises(ValueError):
        PixelBuffer(np.zeros((0, 4, 4), dtype=np.uint8))
