"""
Vision configuration knobs centralization.

All thresholds, scale sets, and detector parameters live here. Matchers
import from this module instead of hardcoding values.
"""
from __future__ import annotations

from typing import Tuple
import os

# Correlation strategy: scale search order. 1.00 first; early exit is gated on it.
CORRELATION_SCALES: Tuple[float, ...] = (1.00, 0.95, 1.05, 0.90, 1.10, 0.85, 1.15)

# Thresholds
MATCH_THRESHOLD: float = 0.75
EARLY_EXIT_SCORE: float = 0.90

# Feature strategy: ORB detector
ORB_FEATURES: int = 800
ORB_LEVELS: int = 8
ORB_SCALE_FACTOR: float = 1.2
ORB_EDGE_THRESHOLD: int = 31

# Feature strategy: correspondence filtering and geometric verification
RATIO_TEST: float = 0.75
MIN_CORRESPONDENCES: int = 8
MIN_INLIERS: int = 12
RANSAC_REPROJ_THRESHOLD: float = 3.0

# Environment flags
PERF_ENABLED: bool = os.environ.get("SM_VISION_PERF", "0") == "1"

__all__ = [
    "CORRELATION_SCALES",
    "MATCH_THRESHOLD",
    "EARLY_EXIT_SCORE",
    "ORB_FEATURES",
    "ORB_LEVELS",
    "ORB_SCALE_FACTOR",
    "ORB_EDGE_THRESHOLD",
    "RATIO_TEST",
    "MIN_CORRESPONDENCES",
    "MIN_INLIERS",
    "RANSAC_REPROJ_THRESHOLD",
    "PERF_ENABLED",
]
