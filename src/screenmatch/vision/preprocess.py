"""
Pure image preprocessing utilities shared by both matching strategies.

This module contains only stateless, side-effect-free functions. Buffers are
numpy arrays in RGB channel order (the layout produced by screenmatch.io);
anything this module cannot interpret yields None instead of raising, so
callers can treat it as "no match" / "no-op".
"""
from __future__ import annotations

from typing import Optional
import logging
import cv2
import numpy as np

logger = logging.getLogger(__name__)


def is_empty(img: Optional[np.ndarray]) -> bool:
    """True for None, zero-sized arrays, and arrays without a 2D extent."""
    return img is None or not isinstance(img, np.ndarray) or img.size == 0 or img.ndim < 2


def is_rgba(img) -> bool:
    """Boundary layout check: H x W x 4, one byte per channel, non-empty."""
    return (
        isinstance(img, np.ndarray)
        and img.dtype == np.uint8
        and img.ndim == 3
        and img.shape[2] == 4
        and img.shape[0] > 0
        and img.shape[1] > 0
    )


def to_gray(img) -> Optional[np.ndarray]:
    """Convert an RGBA/RGB/single-channel uint8 buffer to single-channel luminance.

    4 and 3 channel inputs use the standard luma weighting; single-channel
    inputs (H x W or H x W x 1) are copied unchanged. Returns None for empty
    or malformed input. The result is always a fresh, C-contiguous array.
    """
    if is_empty(img) or img.dtype != np.uint8:
        return None
    if img.ndim == 2:
        return img.copy()
    if img.ndim != 3:
        return None
    channels = img.shape[2]
    if channels == 4:
        return cv2.cvtColor(img, cv2.COLOR_RGBA2GRAY)
    if channels == 3:
        return cv2.cvtColor(img, cv2.COLOR_RGB2GRAY)
    if channels == 1:
        return img[:, :, 0].copy()
    logger.debug("preprocess: unsupported channel count %d", channels)
    return None


def scaled_size(shape, scale: float):
    """Return (w, h) of a template of `shape` resized by `scale` (truncating)."""
    h, w = shape[:2]
    return int(w * scale), int(h * scale)


def resize_tpl(tpl: np.ndarray, scale: float) -> np.ndarray:
    """Resize template by `scale` with bilinear resampling; 1.0 returns the input."""
    if scale == 1.0:
        return tpl
    nw, nh = scaled_size(tpl.shape, scale)
    return cv2.resize(tpl, (nw, nh), interpolation=cv2.INTER_LINEAR)


def freeze(arr: np.ndarray) -> np.ndarray:
    """Mark an array read-only so it can be shared across threads."""
    arr.setflags(write=False)
    return arr
