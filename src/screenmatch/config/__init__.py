"""Config subpackage.

- vision: central knobs for matcher thresholds, scales, and detector parameters
"""
# Import vision configuration explicitly to avoid F403
from .vision import (
    CORRELATION_SCALES,
    MATCH_THRESHOLD,
    EARLY_EXIT_SCORE,
    ORB_FEATURES,
    ORB_LEVELS,
    ORB_SCALE_FACTOR,
    ORB_EDGE_THRESHOLD,
    RATIO_TEST,
    MIN_CORRESPONDENCES,
    MIN_INLIERS,
    RANSAC_REPROJ_THRESHOLD,
    PERF_ENABLED,
)

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
