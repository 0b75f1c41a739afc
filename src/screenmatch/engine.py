"""
Engine facade: the boundary callers talk to.

VisionEngine is the multi-template entry point (correlation strategy by
default); FeatureEngine is the single-template feature entry point. Both
accept only H x W x 4 uint8 RGBA buffers and reject anything else quietly:
registration becomes a no-op and matching reports nothing matched.
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union
import logging
import time

from .core.config import ConfigManager
from .io.pixels import PixelBufferError, load_rgba
from .vision.features import FeatureMatcher
from .vision.matcher import CorrelationMatcher
from .vision.preprocess import is_rgba, to_gray
from .vision.results import NO_FEATURE_MATCH, FeatureMatch, MatchResult
from .vision.strategy import Matcher

logger = logging.getLogger(__name__)

STRATEGIES = ("correlation", "feature")
DEFAULT_SLOW_MS = 250.0


def create_matcher(strategy: str = "correlation") -> Matcher:
    """Return a fresh matcher for `strategy` ("correlation" or "feature")."""
    key = str(strategy).strip().lower()
    if key == "correlation":
        return CorrelationMatcher()
    if key == "feature":
        return FeatureMatcher()
    raise ValueError(f"unknown strategy {strategy!r}; expected one of {STRATEGIES}")


class VisionEngine:
    """Register templates by id and match them against screen frames."""

    def __init__(
        self,
        strategy: Optional[str] = None,
        config_manager: Optional[ConfigManager] = None,
    ) -> None:
        self.config_manager = config_manager
        if strategy is None:
            strategy = config_manager.get("strategy", "correlation") if config_manager else "correlation"
        self.matcher = create_matcher(strategy)
        self.slow_ms = DEFAULT_SLOW_MS
        if config_manager is not None:
            self.slow_ms = float(config_manager.get_int("slow_match_threshold_ms", int(DEFAULT_SLOW_MS)))

    @property
    def strategy(self) -> str:
        return self.matcher.name

    def init(self) -> str:
        """Reset to an empty template set and return a status banner."""
        self.matcher.clear()
        banner = f"Vision Engine Initialized ({self.strategy} matching)"
        logger.info("engine: %s", banner)
        return banner

    def add_template(self, template_id: int, image) -> None:
        """Register an RGBA image under `template_id`; invalid buffers are ignored."""
        if not is_rgba(image):
            logger.debug("engine: rejected template id=%s (not an RGBA uint8 buffer)", template_id)
            return
        self.matcher.register(template_id, image)

    def add_template_file(self, template_id: int, path: Union[str, Path]) -> bool:
        """Load and register a template from disk. Returns False if it could not be decoded."""
        try:
            image = load_rgba(path)
        except PixelBufferError as exc:
            logger.error("engine: failed to load template id=%s: %s", template_id, exc)
            return False
        self.add_template(template_id, image)
        logger.info("engine: template id=%s loaded from %s", template_id, Path(path).name)
        return True

    def clear_templates(self) -> None:
        self.matcher.clear()

    def release(self) -> None:
        self.matcher.clear()

    def match(self, screen) -> List[MatchResult]:
        """Evaluate every registered template against `screen` (RGBA)."""
        if not is_rgba(screen):
            logger.debug("engine: rejected screen (not an RGBA uint8 buffer)")
            return []
        t0 = time.perf_counter()
        results = self.matcher.evaluate(to_gray(screen))
        dur_ms = (time.perf_counter() - t0) * 1000.0
        if dur_ms > self.slow_ms:
            logger.warning("engine: slow match pass %.1fms for %d templates", dur_ms, len(results))
        return results


class FeatureEngine:
    """Single active template located by ORB features and a homography."""

    def __init__(self) -> None:
        self.matcher = FeatureMatcher()

    def set_template(self, image) -> None:
        if not is_rgba(image):
            logger.debug("engine: rejected feature template (not an RGBA uint8 buffer)")
            return
        self.matcher.set_template(image)

    def match(self, screen) -> FeatureMatch:
        if not is_rgba(screen):
            return NO_FEATURE_MATCH
        return self.matcher.match(screen)

    def release(self) -> None:
        self.matcher.clear()
