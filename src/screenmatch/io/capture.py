"""
Screen capture via mss, returned as RGBA pixel buffers.

One mss instance is kept per thread since mss handles are not shareable
across threads on every platform.
"""
from __future__ import annotations

from typing import Optional
import logging
import threading
import time

import mss
from mss.exception import ScreenShotError
import numpy as np

from ..config.vision import PERF_ENABLED
from .pixels import PixelBufferError, to_rgba

logger = logging.getLogger(__name__)


class ScreenCapture:
    """Grab a monitor or an absolute region {left, top, width, height}."""

    def __init__(self, monitor: int = 1) -> None:
        self.monitor = int(monitor)
        self._tls = threading.local()

    def _get_sct(self, force_new: bool = False):
        sct = getattr(self._tls, "sct", None)
        if force_new or sct is None:
            if sct is not None:
                sct.close()
            sct = mss.mss()
            self._tls.sct = sct
        return sct

    def _region(self, sct, region: Optional[dict]) -> dict:
        if region:
            return region
        monitors = sct.monitors
        if not 0 <= self.monitor < len(monitors):
            logger.warning(
                "capture: invalid monitor index %d (have %d), using primary", self.monitor, len(monitors) - 1
            )
            return monitors[1] if len(monitors) > 1 else monitors[0]
        return monitors[self.monitor]

    def grab(self, region: Optional[dict] = None) -> np.ndarray:
        """Capture and return an RGBA buffer; raises PixelBufferError on failure."""
        t0 = time.perf_counter()
        try:
            sct = self._get_sct()
            try:
                shot = sct.grab(self._region(sct, region))
            except AttributeError:
                # Stale handle (e.g. display reconnected): retry once with a fresh one
                sct = self._get_sct(force_new=True)
                shot = sct.grab(self._region(sct, region))
        except ScreenShotError as exc:
            raise PixelBufferError(f"screen capture failed: {exc}") from exc
        frame = to_rgba(np.asarray(shot), order="bgr")  # mss delivers BGRA
        if PERF_ENABLED:
            logger.debug("capture: grab %.1fms region=%s", (time.perf_counter() - t0) * 1000.0, region)
        return frame

    def close(self) -> None:
        sct = getattr(self._tls, "sct", None)
        if sct is not None:
            sct.close()
            self._tls.sct = None
