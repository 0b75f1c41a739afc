"""Common shape of the two matching strategies."""
from __future__ import annotations

from typing import List, Protocol

import numpy as np

from .results import MatchResult


class Matcher(Protocol):
    """Register reference images, then evaluate grayscale frames against them."""

    name: str

    def register(self, template_id: int, image) -> None: ...

    def clear(self) -> None: ...

    def evaluate(self, screen_gray: np.ndarray) -> List[MatchResult]: ...
