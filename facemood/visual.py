"""Overlay drawing for the live surface.

- draw_detections: box outline, corner accents and a label panel per classified face
- clear_surface: blank the surface when a session stops

OpenCV's Hershey fonts only render ASCII, so emotions are shown with ASCII emoticons.
"""
from __future__ import annotations
import cv2
import numpy as np
from typing import Iterable, Tuple

from facemood.models import DetectionResult, FaceDetection

GLYPHS = {
    "happy": ":D",
    "sad": ":(",
    "angry": ">:(",
    "surprise": ":O",
    "neutral": ":|",
    "fear": "D:",
    "disgust": ":P",
}
DEFAULT_GLYPH = "[?]"

BOX_COLOR: Tuple[int, int, int] = (128, 222, 74)      # BGR
CORNER_COLOR: Tuple[int, int, int] = (94, 197, 34)
PANEL_COLOR: Tuple[int, int, int] = (0, 0, 0)
TEXT_COLOR: Tuple[int, int, int] = (255, 255, 255)
PANEL_W, PANEL_H = 180, 40


def glyph_for(label: str) -> str:
    return GLYPHS.get((label or "").lower(), DEFAULT_GLYPH)


def format_label(result: DetectionResult) -> str:
    """E.g. ``":D happy 66%"``."""
    pct = int(result.confidence * 100 + 0.5)
    return f"{glyph_for(result.label)} {result.label} {pct}%"


def label_panel_origin(x: int, y: int, surface_w: int, surface_h: int) -> Tuple[int, int]:
    """Top-left of the label panel: above the box, kept inside the surface."""
    px = max(0, min(x, surface_w - PANEL_W))
    py = max(0, min(y - PANEL_H, surface_h - PANEL_H))
    return px, py


def _draw_corners(out: np.ndarray, x: int, y: int, w: int, h: int) -> None:
    n = int(min(20, w / 4))
    if n <= 0:
        return
    corners = [
        [(x, y + n), (x, y), (x + n, y)],
        [(x + w - n, y), (x + w, y), (x + w, y + n)],
        [(x, y + h - n), (x, y + h), (x + n, y + h)],
        [(x + w - n, y + h), (x + w, y + h), (x + w, y + h - n)],
    ]
    pts = [np.array(c, dtype=np.int32).reshape(-1, 1, 2) for c in corners]
    cv2.polylines(out, pts, False, CORNER_COLOR, 4, cv2.LINE_AA)


def draw_detections(surface: np.ndarray, detections: Iterable[FaceDetection]) -> np.ndarray:
    """Draw boxes and labels for classified faces.

    Args:
        surface: BGR image, modified in place
        detections: faces with their classification

    Returns:
        The same surface, for chaining
    """
    H, W = surface.shape[:2]
    for det in detections:
        r = det.region
        x, y, w, h = r.x, r.y, r.w, r.h

        cv2.rectangle(surface, (x, y), (x + w, y + h), BOX_COLOR, 2)
        _draw_corners(surface, x, y, w, h)

        px, py = label_panel_origin(x, y, W, H)
        cv2.rectangle(surface, (px, py), (px + PANEL_W - 1, py + PANEL_H - 1), PANEL_COLOR, -1)
        cv2.putText(surface, format_label(det.result), (px + 10, py + 26),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.6, TEXT_COLOR, 2, cv2.LINE_AA)

    return surface


def clear_surface(surface: np.ndarray) -> np.ndarray:
    surface[...] = 0
    return surface
