"""Vision package: pure image ops, result types, and the two matching strategies.

Submodules:
- preprocess: stateless grayscale normalization and template resizing
- results: MatchResult / FeatureMatch containers and the aggregator
- matcher: multi-scale normalized cross-correlation (registry-backed)
- features: ORB keypoints, ratio test, RANSAC homography (single template)
- strategy: the Matcher protocol both strategies implement

Only the pure modules are re-exported here; matchers depend on
screenmatch.core.registry and are imported from their own modules.
"""
from .preprocess import is_empty, is_rgba, to_gray, resize_tpl
from .results import MatchResult, FeatureMatch, NO_FEATURE_MATCH, aggregate

__all__ = [
    "is_empty",
    "is_rgba",
    "to_gray",
    "resize_tpl",
    "MatchResult",
    "FeatureMatch",
    "NO_FEATURE_MATCH",
    "aggregate",
]
