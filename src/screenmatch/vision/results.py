"""
Match result containers and the per-frame aggregator.

Results are immutable once built. The correlation score is the raw NCC
maximum (usually in [-1, 1]); the feature score is the raw inlier count.
The two scales are not comparable.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Tuple
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchResult:
    """One template's outcome on one frame.

    x/y/width/height are only meaningful when `matched`; otherwise they hold
    the best-effort location for diagnostics.
    """

    id: int
    matched: bool = False
    score: float = 0.0
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def rect(self) -> Tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height

    @property
    def center(self) -> Tuple[int, int]:
        return self.x + self.width // 2, self.y + self.height // 2

    def as_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class FeatureMatch:
    """Single-template feature-strategy outcome (no id)."""

    matched: bool = False
    score: float = 0.0
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def rect(self) -> Tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height

    @property
    def center(self) -> Tuple[int, int]:
        return self.x + self.width // 2, self.y + self.height // 2

    def as_dict(self) -> Dict:
        return asdict(self)

    def with_id(self, template_id: int) -> MatchResult:
        return MatchResult(template_id, self.matched, self.score, self.x, self.y, self.width, self.height)


NO_FEATURE_MATCH = FeatureMatch()


def aggregate(results: Iterable[MatchResult]) -> List[MatchResult]:
    """Collect per-template results into an ordered list, preserving input order."""
    out = list(results)
    if logger.isEnabledFor(logging.DEBUG):
        hits = [r.id for r in out if r.matched]
        logger.debug("results: %d evaluated, matched ids=%s", len(out), hits)
    return out
