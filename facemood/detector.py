"""
Face location with OpenCV's Haar cascade.
"""
from __future__ import annotations
from typing import List, Protocol
import logging
import os

import cv2
import numpy as np

from facemood.errors import StartupError
from facemood.models import FaceRegion

logger = logging.getLogger(__name__)


class FaceLocator(Protocol):
    def detect(self, frame: np.ndarray) -> List[FaceRegion]: ...


class CascadeFaceLocator:
    """Wraps ``cv2.CascadeClassifier.detectMultiScale`` on a grayscale copy of the frame."""

    def __init__(self, cascade_path: str, scale_factor: float = 1.1, min_neighbors: int = 3):
        if not os.path.exists(cascade_path):
            raise StartupError(f"Cascade not found: {cascade_path}")
        self.cascade = cv2.CascadeClassifier()
        try:
            loaded = self.cascade.load(cascade_path)
        except cv2.error as e:
            raise StartupError(f"Cascade load failed: {e}") from e
        if not loaded:
            raise StartupError(f"Cascade load failed: {cascade_path}")
        self.scale_factor = float(scale_factor)
        self.min_neighbors = int(min_neighbors)
        logger.debug(f"[detector] loaded cascade {cascade_path}")

    def detect(self, frame: np.ndarray) -> List[FaceRegion]:
        gray = frame if frame.ndim == 2 else cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
        # (0, 0) min/max size: no size constraint
        boxes = self.cascade.detectMultiScale(
            gray,
            scaleFactor=self.scale_factor,
            minNeighbors=self.min_neighbors,
            flags=0,
            minSize=(0, 0),
            maxSize=(0, 0),
        )
        return [FaceRegion(x=int(x), y=int(y), w=int(w), h=int(h)) for (x, y, w, h) in boxes]
