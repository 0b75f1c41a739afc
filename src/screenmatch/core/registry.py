"""
Template Registry Module
Thread-safe id -> template store shared by registration and matching threads.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional, Tuple

import numpy as np

from ..vision.preprocess import freeze, to_gray

logger = logging.getLogger(__name__)


class Keypoint(NamedTuple):
    x: float
    y: float
    scale: float
    orientation: float
    response: float


@dataclass(frozen=True)
class Template:
    """A registered reference image.

    `gray` is read-only. Feature-strategy templates also carry keypoints and
    their binary descriptors (one row per keypoint, or None when detection
    found nothing).
    """

    id: int
    gray: np.ndarray
    keypoints: Tuple[Keypoint, ...] = ()
    descriptors: Optional[np.ndarray] = None

    @property
    def width(self) -> int:
        return int(self.gray.shape[1])

    @property
    def height(self) -> int:
        return int(self.gray.shape[0])


def build_template(template_id: int, image) -> Optional[Template]:
    """Grayscale-convert `image` into a frozen Template, or None if unusable."""
    gray = to_gray(image)
    if gray is None:
        return None
    return Template(id=int(template_id), gray=freeze(gray))


class TemplateRegistry:
    """Thread-safe template registry.

    All mutations run under one lock. `snapshot()` copies the mapping under
    the same lock so matching never holds it while correlating.
    """

    def __init__(self):
        self.lock = threading.Lock()
        self._templates = {}

    def add(self, template_id: int, image) -> None:
        """Register `image` under `template_id`, replacing any prior entry.

        Empty or malformed images are ignored.
        """
        tpl = build_template(template_id, image)
        if tpl is None:
            logger.debug("registry: ignored empty/malformed image for id=%s", template_id)
            return
        with self.lock:
            self._templates[tpl.id] = tpl
        logger.debug("registry: added template id=%d %dx%d", tpl.id, tpl.width, tpl.height)

    def remove(self, template_id: int) -> None:
        """Thread-safe remover; unknown ids are ignored."""
        with self.lock:
            self._templates.pop(int(template_id), None)

    def clear(self) -> None:
        """Thread-safe clear of all templates."""
        with self.lock:
            self._templates.clear()
        logger.debug("registry: cleared all templates")

    def get(self, template_id: int) -> Optional[Template]:
        with self.lock:
            return self._templates.get(int(template_id))

    def snapshot(self) -> Mapping[int, Template]:
        """Point-in-time, read-only copy of the mapping in ascending id order."""
        with self.lock:
            items = list(self._templates.items())
        items.sort(key=lambda kv: kv[0])
        return MappingProxyType(dict(items))

    def ids(self) -> Tuple[int, ...]:
        return tuple(self.snapshot().keys())

    def __len__(self) -> int:
        with self.lock:
            return len(self._templates)

    def __contains__(self, template_id) -> bool:
        with self.lock:
            return int(template_id) in self._templates
