import numpy as np
import pytest

from screenmatch.vision.preprocess import is_empty, is_rgba, resize_tpl, scaled_size, to_gray


def test_rgba_uses_luma_weighting():
    px = np.zeros((2, 2, 4), np.uint8)
    px[..., 0] = 255  # pure red
    px[..., 3] = 255
    gray = to_gray(px)
    assert gray.shape == (2, 2)
    assert int(gray[0, 0]) == 76


def test_rgb_and_rgba_agree():
    rgb = np.random.default_rng(0).integers(0, 256, size=(8, 9, 3), dtype=np.uint8)
    rgba = np.dstack([rgb, np.full(rgb.shape[:2], 255, np.uint8)])
    assert np.array_equal(to_gray(rgb), to_gray(rgba))


def test_single_channel_is_copied_unchanged():
    gray = np.arange(12, dtype=np.uint8).reshape(3, 4)
    out = to_gray(gray)
    assert np.array_equal(out, gray)
    out[0, 0] = 99
    assert gray[0, 0] == 0
    assert np.array_equal(to_gray(gray[:, :, None]), gray)


@pytest.mark.parametrize("bad", [
    None,
    np.zeros((0, 5, 4), np.uint8),
    np.zeros((4, 4, 2), np.uint8),
    np.zeros((4, 4, 4), np.float32),
    np.zeros(16, np.uint8),
    "not an image",
])
def test_malformed_inputs_yield_none(bad):
    assert to_gray(bad) is None


def test_is_rgba():
    assert is_rgba(np.zeros((3, 3, 4), np.uint8))
    assert not is_rgba(np.zeros((3, 3, 3), np.uint8))
    assert not is_rgba(np.zeros((3, 3, 4), np.int16))
    assert not is_rgba(np.zeros((0, 3, 4), np.uint8))
    assert not is_rgba([[0, 0, 0, 0]])


def test_is_empty():
    assert is_empty(None)
    assert is_empty(np.zeros((0, 0), np.uint8))
    assert not is_empty(np.zeros((1, 1), np.uint8))


def test_scaled_size_truncates():
    assert scaled_size((40, 45), 0.95) == (42, 38)
    assert scaled_size((41, 45), 1.15) == (51, 47)


def test_resize_tpl():
    tpl = np.zeros((40, 45), np.uint8)
    assert resize_tpl(tpl, 1.0) is tpl
    assert resize_tpl(tpl, 0.9).shape == (36, 40)
    assert resize_tpl(tpl, 1.1).shape == (44, 49)
