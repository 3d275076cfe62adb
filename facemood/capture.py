"""
Camera capture source.
"""
from __future__ import annotations
from typing import Optional
import logging

import cv2
import numpy as np

from facemood.errors import CameraUnavailableError

logger = logging.getLogger(__name__)


class CameraSource:
    """Owns one ``cv2.VideoCapture`` between open() and release().

    Index 0 is the system default camera, which on laptops is the
    user-facing one.
    """

    def __init__(self, index: int = 0):
        self.index = int(index)
        self._cap = None

    @property
    def is_open(self) -> bool:
        return self._cap is not None

    def open(self) -> None:
        if self._cap is not None:
            return
        cap = cv2.VideoCapture(self.index)
        if not cap.isOpened():
            cap.release()
            raise CameraUnavailableError(f"Could not open camera index {self.index}")
        self._cap = cap
        logger.debug(f"[capture] opened camera index={self.index}")

    def read(self) -> Optional[np.ndarray]:
        """Latest BGR frame, or None when the device has nothing to give yet."""
        if self._cap is None:
            return None
        ok, frame = self._cap.read()
        if not ok or frame is None:
            return None
        return frame

    def release(self) -> None:
        cap, self._cap = self._cap, None
        if cap is not None:
            cap.release()
            logger.debug(f"[capture] released camera index={self.index}")
