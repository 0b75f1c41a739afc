"""
Pixel buffer adapters.

Everything the engine consumes at its boundary is an H x W x 4 uint8 RGBA
array. These helpers turn files and OpenCV/mss style arrays into that layout.
Failures to acquire pixels are raised here as PixelBufferError; the matchers
never see an invalid buffer from this module.
"""
from __future__ import annotations

from pathlib import Path
from typing import Union
import logging

import cv2
import numpy as np

logger = logging.getLogger(__name__)


class PixelBufferError(RuntimeError):
    """Pixels could not be read, decoded, or converted."""


def to_rgba(img: np.ndarray, order: str = "bgr") -> np.ndarray:
    """Convert a gray, BGR/RGB or BGRA/RGBA uint8 array to a contiguous RGBA buffer.

    order: channel order of 3/4-channel input, "bgr" (OpenCV, mss) or "rgb".
    """
    if not isinstance(img, np.ndarray) or img.size == 0:
        raise PixelBufferError("empty or non-array image")
    if img.dtype != np.uint8:
        raise PixelBufferError(f"unsupported dtype {img.dtype}; expected uint8")
    bgr = order.lower() == "bgr"
    if img.ndim == 2 or (img.ndim == 3 and img.shape[2] == 1):
        return cv2.cvtColor(img.reshape(img.shape[0], img.shape[1]), cv2.COLOR_GRAY2RGBA)
    if img.ndim == 3 and img.shape[2] == 3:
        return cv2.cvtColor(img, cv2.COLOR_BGR2RGBA if bgr else cv2.COLOR_RGB2RGBA)
    if img.ndim == 3 and img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA) if bgr else np.ascontiguousarray(img)
    raise PixelBufferError(f"unsupported image shape {img.shape}")


def load_rgba(path: Union[str, Path]) -> np.ndarray:
    """Decode an image file into an RGBA buffer (alpha kept when present)."""
    p = Path(path)
    if not p.exists():
        raise PixelBufferError(f"image not found: {p}")
    img = cv2.imread(str(p), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise PixelBufferError(f"failed to decode image: {p}")
    if np.issubdtype(img.dtype, np.floating):
        # HDR/EXR decode to float, nominal range 0..1
        img = np.clip(np.nan_to_num(img) * 255.0, 0, 255).astype(np.uint8)
    elif np.issubdtype(img.dtype, np.integer) and img.dtype != np.uint8:
        # 16-bit PNGs and friends: scale down to 8 bits per channel
        img = cv2.convertScaleAbs(img, alpha=255.0 / float(np.iinfo(img.dtype).max))
    rgba = to_rgba(img, order="bgr")
    logger.debug("pixels: loaded %s %dx%d", p.name, rgba.shape[1], rgba.shape[0])
    return rgba
