"""
ORB keypoint matching with RANSAC homography verification.

The matcher holds a single active template. `set_template` builds the new
template (keypoints and descriptors) outside the lock and swaps it in under
the lock; `match` takes the current reference under the lock and does all
detection and fitting without it, so registration never waits on a frame.

Every rejection path (empty inputs, no descriptors, too few ratio-test
survivors, failed fit, too few inliers) returns NO_FEATURE_MATCH.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple
import logging
import threading

import cv2
import numpy as np

from ..config.vision import (
    MIN_CORRESPONDENCES,
    MIN_INLIERS,
    ORB_EDGE_THRESHOLD,
    ORB_FEATURES,
    ORB_LEVELS,
    ORB_SCALE_FACTOR,
    RANSAC_REPROJ_THRESHOLD,
    RATIO_TEST,
)
from ..core.registry import Keypoint, Template
from .preprocess import freeze, is_empty, to_gray
from .results import NO_FEATURE_MATCH, FeatureMatch, MatchResult

logger = logging.getLogger(__name__)

Features = Tuple[Tuple[Keypoint, ...], Optional[np.ndarray]]


def create_detector():
    """ORB detector shared by templates and frames (Harris corner scoring)."""
    return cv2.ORB_create(
        nfeatures=ORB_FEATURES,
        scaleFactor=ORB_SCALE_FACTOR,
        nlevels=ORB_LEVELS,
        edgeThreshold=ORB_EDGE_THRESHOLD,
        scoreType=cv2.ORB_HARRIS_SCORE,
    )


def detect(gray: np.ndarray, detector=None) -> Features:
    """Detect and describe keypoints; descriptors is None when nothing is found."""
    detector = detector if detector is not None else create_detector()
    kps, des = detector.detectAndCompute(gray, None)
    if des is None or len(kps) == 0:
        return (), None
    points = tuple(Keypoint(k.pt[0], k.pt[1], k.size, k.angle, k.response) for k in kps)
    return points, freeze(des)


def ratio_filter(knn_matches: Sequence[Sequence], ratio: float = RATIO_TEST) -> List:
    """Lowe's ratio test over k=2 nearest neighbours.

    Queries with fewer than two neighbours are dropped: without a runner-up
    the match cannot be shown to be unambiguous.
    """
    good = []
    for pair in knn_matches:
        if len(pair) < 2:
            continue
        m, n = pair[0], pair[1]
        if m.distance < ratio * n.distance:
            good.append(m)
    return good


def bounding_rect(h: np.ndarray, width: int, height: int) -> Tuple[int, int, int, int]:
    """Project the template corners through `h`; return their axis-aligned bbox."""
    corners = np.float32([[0, 0], [width, 0], [width, height], [0, height]]).reshape(-1, 1, 2)
    projected = cv2.perspectiveTransform(corners, h).reshape(-1, 2)
    x0, y0 = np.floor(projected.min(axis=0))
    x1, y1 = np.ceil(projected.max(axis=0))
    return int(x0), int(y0), int(x1 - x0), int(y1 - y0)


def verify_homography(
    src_pts: np.ndarray,
    dst_pts: np.ndarray,
    width: int,
    height: int,
) -> FeatureMatch:
    """Gate correspondences: count, RANSAC fit, then inlier count.

    A homography that fits but has fewer than MIN_INLIERS inliers is rejected.
    """
    n = len(src_pts)
    if n < MIN_CORRESPONDENCES:
        logger.debug("features: %d correspondences < %d, no match", n, MIN_CORRESPONDENCES)
        return NO_FEATURE_MATCH

    src = np.asarray(src_pts, dtype=np.float32).reshape(-1, 1, 2)
    dst = np.asarray(dst_pts, dtype=np.float32).reshape(-1, 1, 2)
    h, mask = cv2.findHomography(src, dst, cv2.RANSAC, RANSAC_REPROJ_THRESHOLD)
    if h is None or mask is None:
        logger.debug("features: homography fit failed on %d correspondences", n)
        return NO_FEATURE_MATCH

    inliers = int(np.count_nonzero(mask))
    if inliers < MIN_INLIERS:
        logger.debug("features: %d inliers < %d, rejecting fitted homography", inliers, MIN_INLIERS)
        return NO_FEATURE_MATCH

    x, y, w, hh = bounding_rect(h, width, height)
    logger.debug("features: MATCHED inliers=%d/%d rect=(%d,%d,%d,%d)", inliers, n, x, y, w, hh)
    return FeatureMatch(True, float(inliers), x, y, w, hh)


class FeatureMatcher:
    """Single-template ORB + homography matcher."""

    name = "feature"

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self._template: Optional[Template] = None
        self._norm = cv2.NORM_HAMMING

    @property
    def template(self) -> Optional[Template]:
        with self.lock:
            return self._template

    def set_template(self, image, template_id: int = 0) -> None:
        """Replace the active template.

        Empty or malformed images are ignored. An image without detectable
        keypoints still replaces the slot; later matches then fail.
        """
        gray = to_gray(image)
        if gray is None:
            logger.debug("features: ignored empty/malformed template image")
            return
        kps, des = detect(gray)
        tpl = Template(id=int(template_id), gray=freeze(gray), keypoints=kps, descriptors=des)
        with self.lock:
            self._template = tpl
        logger.debug("features: template id=%d %dx%d keypoints=%d", tpl.id, tpl.width, tpl.height, len(kps))

    def clear(self) -> None:
        with self.lock:
            self._template = None

    def match(self, screen) -> FeatureMatch:
        """Locate the active template in an RGBA/RGB/gray screen buffer."""
        gray = to_gray(screen)
        if gray is None:
            return NO_FEATURE_MATCH
        return self.match_gray(gray)

    def match_gray(self, screen_gray: np.ndarray) -> FeatureMatch:
        return self._match_template(self.template, screen_gray)

    def _match_template(self, tpl: Optional[Template], screen_gray: np.ndarray) -> FeatureMatch:
        if tpl is None or tpl.descriptors is None or is_empty(screen_gray):
            return NO_FEATURE_MATCH

        frame_kps, frame_des = detect(screen_gray)
        if frame_des is None:
            logger.debug("features: frame yielded no descriptors")
            return NO_FEATURE_MATCH

        matcher = cv2.BFMatcher(self._norm)
        good = ratio_filter(matcher.knnMatch(tpl.descriptors, frame_des, k=2))
        src = [(tpl.keypoints[m.queryIdx].x, tpl.keypoints[m.queryIdx].y) for m in good]
        dst = [(frame_kps[m.trainIdx].x, frame_kps[m.trainIdx].y) for m in good]
        return verify_homography(np.float32(src).reshape(-1, 2), np.float32(dst).reshape(-1, 2),
                                 tpl.width, tpl.height)

    # Matcher protocol: one slot, so register replaces and evaluate yields <= 1 result
    def register(self, template_id: int, image) -> None:
        self.set_template(image, template_id)

    def evaluate(self, screen_gray: np.ndarray) -> List[MatchResult]:
        tpl = self.template
        if tpl is None:
            return []
        return [self._match_template(tpl, screen_gray).with_id(tpl.id)]
