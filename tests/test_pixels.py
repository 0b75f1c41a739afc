import cv2
import numpy as np
import pytest

from screenmatch.io.pixels import PixelBufferError, load_rgba, to_rgba


def test_bgr_and_bgra_are_swapped_to_rgba():
    bgr = np.zeros((2, 3, 3), np.uint8)
    bgr[..., 0] = 255  # blue
    out = to_rgba(bgr)
    assert out.shape == (2, 3, 4)
    assert tuple(out[0, 0]) == (0, 0, 255, 255)
    bgra = np.dstack([bgr, np.full((2, 3), 9, np.uint8)])
    assert tuple(to_rgba(bgra)[0, 0]) == (0, 0, 255, 9)


def test_rgb_order_and_gray():
    rgb = np.zeros((2, 2, 3), np.uint8)
    rgb[..., 0] = 200
    assert tuple(to_rgba(rgb, order="rgb")[1, 1]) == (200, 0, 0, 255)
    gray = np.full((2, 2), 17, np.uint8)
    assert tuple(to_rgba(gray)[0, 1]) == (17, 17, 17, 255)
    rgba = np.full((2, 2, 4), 5, np.uint8)
    assert np.array_equal(to_rgba(rgba, order="rgb"), rgba)


@pytest.mark.parametrize("bad", [np.zeros((0, 2, 3), np.uint8), np.zeros((2, 2, 3), np.float64),
                                 np.zeros((2, 2, 5), np.uint8), None])
def test_to_rgba_rejects(bad):
    with pytest.raises(PixelBufferError):
        to_rgba(bad)


def test_load_rgba_roundtrip(tmp_path):
    bgr = np.zeros((4, 5, 3), np.uint8)
    bgr[..., 2] = 250  # red in BGR
    path = tmp_path / "red.png"
    assert cv2.imwrite(str(path), bgr)
    out = load_rgba(path)
    assert out.shape == (4, 5, 4)
    assert tuple(out[0, 0]) == (250, 0, 0, 255)


def test_load_rgba_failures(tmp_path):
    with pytest.raises(PixelBufferError):
        load_rgba(tmp_path / "nope.png")
    junk = tmp_path / "junk.png"
    junk.write_bytes(b"definitely not a png")
    with pytest.raises(PixelBufferError):
        load_rgba(junk)


def test_load_rgba_float_image(tmp_path):
    bgr = np.zeros((6, 8, 3), np.float32)
    bgr[...] = (0.25, 0.5, 0.75)
    path = tmp_path / "tpl.hdr"
    assert cv2.imwrite(str(path), bgr)
    out = load_rgba(path)
    assert out.shape == (6, 8, 4) and out.dtype == np.uint8
    r, g, b, a = (int(v) for v in out[0, 0])
    assert abs(r - 191) <= 2 and abs(g - 127) <= 2 and abs(b - 64) <= 2
    assert a == 255


def test_load_rgba_clips_out_of_range_floats(tmp_path):
    bgr = np.full((4, 4, 3), 3.0, np.float32)
    path = tmp_path / "bright.hdr"
    assert cv2.imwrite(str(path), bgr)
    assert tuple(load_rgba(path)[0, 0]) == (255, 255, 255, 255)
