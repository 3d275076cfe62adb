"""
Shared drawing surface: the latest annotated frame, read by the display layer.
"""
from __future__ import annotations
from typing import Optional
import threading

import cv2
import numpy as np

from facemood.visual import clear_surface


class FrameBuffer:
    """Last-write-wins holder for the most recent annotated frame."""

    def __init__(self):
        self._lock = threading.Lock()
        self._frame: Optional[np.ndarray] = None

    def publish(self, frame: np.ndarray) -> None:
        with self._lock:
            self._frame = frame

    def snapshot(self) -> Optional[np.ndarray]:
        with self._lock:
            return None if self._frame is None else self._frame.copy()

    def clear(self) -> None:
        """Blank the surface, keeping its size so the display layer still has something to show."""
        with self._lock:
            if self._frame is not None:
                self._frame = clear_surface(self._frame.copy())

    def encode_jpeg(self, quality: int = 80) -> Optional[bytes]:
        frame = self.snapshot()
        if frame is None:
            return None
        ok, buf = cv2.imencode(".jpg", frame, [int(cv2.IMWRITE_JPEG_QUALITY), int(quality)])
        if not ok:
            raise RuntimeError("JPEG encoding failed")
        return buf.tobytes()
