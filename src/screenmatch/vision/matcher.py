"""
Multi-scale normalized cross-correlation matching.

`match_one` is a pure function over two grayscale arrays. `CorrelationMatcher`
binds it to a TemplateRegistry: each pass snapshots the registry first, then
correlates every template without holding the registry lock.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple
import logging
import time

import cv2
import numpy as np

from ..config.vision import CORRELATION_SCALES, EARLY_EXIT_SCORE, MATCH_THRESHOLD, PERF_ENABLED
from ..core.registry import Template, TemplateRegistry
from .preprocess import is_empty, resize_tpl, scaled_size
from .results import MatchResult, aggregate

logger = logging.getLogger(__name__)


def correlate(screen_gray: np.ndarray, tpl: np.ndarray) -> Tuple[float, Tuple[int, int]]:
    """Return (max score, (x, y) of the max) of the TM_CCOEFF_NORMED surface."""
    res = cv2.matchTemplate(screen_gray, tpl, cv2.TM_CCOEFF_NORMED)
    _, max_val, _, max_loc = cv2.minMaxLoc(res)
    return float(max_val), (int(max_loc[0]), int(max_loc[1]))


def match_one(
    screen_gray: np.ndarray,
    template_gray: np.ndarray,
    template_id: int = 0,
    scales: Sequence[float] = CORRELATION_SCALES,
) -> MatchResult:
    """Search `template_gray` in `screen_gray` across `scales`.

    The first scale is expected to be 1.0: if it alone scores above
    EARLY_EXIT_SCORE the remaining scales are not tried. Ties keep the earlier
    scale. The reported score is the raw correlation maximum.
    """
    if is_empty(screen_gray) or is_empty(template_gray):
        return MatchResult(template_id)

    sh, sw = screen_gray.shape[:2]
    th, tw = template_gray.shape[:2]
    if tw > sw or th > sh:
        logger.debug(
            "match: id=%d template (%dx%d) larger than screen (%dx%d), skipping",
            template_id, tw, th, sw, sh,
        )
        return MatchResult(template_id)

    best_score = -1.0
    best_loc: Optional[Tuple[int, int]] = None
    best_scale = 1.0

    for i, s in enumerate(scales):
        nw, nh = scaled_size(template_gray.shape, s)
        if nw <= 0 or nh <= 0 or nw > sw or nh > sh:
            continue
        sc, loc = correlate(screen_gray, resize_tpl(template_gray, s))
        if sc > best_score:
            best_score = sc
            best_loc = loc
            best_scale = s
        if i == 0 and best_score > EARLY_EXIT_SCORE:
            break

    if best_loc is None:
        return MatchResult(template_id)

    w, h = scaled_size(template_gray.shape, best_scale)
    matched = best_score >= MATCH_THRESHOLD
    logger.debug(
        "match: id=%d score=%.3f (threshold=%.2f) scale=%.2f at=(%d,%d) %dx%d %s",
        template_id, best_score, MATCH_THRESHOLD, best_scale, best_loc[0], best_loc[1], w, h,
        "MATCHED" if matched else "no match",
    )
    return MatchResult(template_id, matched, best_score, best_loc[0], best_loc[1], w, h)


class CorrelationMatcher:
    """Registry-backed multi-template correlation matcher."""

    name = "correlation"

    def __init__(self, registry: Optional[TemplateRegistry] = None) -> None:
        self.registry = registry if registry is not None else TemplateRegistry()

    def register(self, template_id: int, image) -> None:
        self.registry.add(template_id, image)

    def clear(self) -> None:
        self.registry.clear()

    def evaluate(self, screen_gray: np.ndarray) -> List[MatchResult]:
        return self.match_all(screen_gray)

    def match_all(self, screen_gray: np.ndarray) -> List[MatchResult]:
        """One result per registered template, in snapshot order."""
        templates = self.registry.snapshot()
        if is_empty(screen_gray) or not templates:
            return []
        t0 = time.perf_counter()
        results = aggregate(self._match_template(screen_gray, tpl) for tpl in templates.values())
        if PERF_ENABLED:
            logger.debug(
                "match: %d templates in %.1fms", len(results), (time.perf_counter() - t0) * 1000.0
            )
        return results

    def _match_template(self, screen_gray: np.ndarray, tpl: Template) -> MatchResult:
        return match_one(screen_gray, tpl.gray, tpl.id)
