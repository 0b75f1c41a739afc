"""Pytest configuration.

Ensures src/ is on sys.path so tests can import `screenmatch.*` without an
install, and provides synthetic images (no binary fixtures in the repo).
"""

import sys
from pathlib import Path

import cv2
import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"
for p in (str(PROJECT_ROOT), str(SRC_DIR)):
    if p not in sys.path:
        sys.path.insert(0, p)


def rgba(gray: np.ndarray) -> np.ndarray:
    """Gray -> opaque RGBA buffer."""
    return np.dstack([gray, gray, gray, np.full_like(gray, 255)])


def paste(screen: np.ndarray, tpl: np.ndarray, x: int, y: int) -> np.ndarray:
    out = screen.copy()
    h, w = tpl.shape[:2]
    out[y:y + h, x:x + w] = tpl
    return out


def noise(shape, seed: int, blur: int = 0) -> np.ndarray:
    img = np.random.default_rng(seed).integers(0, 256, size=shape, dtype=np.uint8)
    if blur:
        img = cv2.GaussianBlur(img, (blur, blur), 0)
    return img


def shapes(h: int = 48, w: int = 64) -> np.ndarray:
    """A button-like template: flat fill, border, bar and a dot."""
    img = np.full((h, w), 200, np.uint8)
    cv2.rectangle(img, (2, 2), (w - 3, h - 3), 40, 2)
    cv2.rectangle(img, (8, h // 2 - 4), (w - 20, h // 2 + 4), 90, -1)
    cv2.circle(img, (w - 10, 10), 5, 0, -1)
    return img


def textured(size: int = 160, seed: int = 7) -> np.ndarray:
    """Corner-rich texture for ORB: blurred noise overlaid with random boxes."""
    img = noise((size, size), seed, blur=3)
    rng = np.random.default_rng(seed + 1)
    for _ in range(25):
        x0, y0 = rng.integers(0, size - 20, size=2)
        x1, y1 = x0 + rng.integers(8, 40), y0 + rng.integers(8, 40)
        cv2.rectangle(img, (int(x0), int(y0)), (int(x1), int(y1)), int(rng.integers(0, 256)), -1)
    return img


@pytest.fixture
def noise_screen():
    return noise((240, 320), seed=1)


@pytest.fixture
def noise_template():
    return noise((48, 56), seed=2, blur=3)
