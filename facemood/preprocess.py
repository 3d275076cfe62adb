"""
Face crop -> classifier input tensor.

The classifier was exported expecting a (1, 3, S, S) float32 tensor with
R, G, B planes in that order, row-major within each plane, values in [0, 1].
Frames coming from OpenCV are BGR, so the channel swap happens here.
"""
from __future__ import annotations
import cv2
import numpy as np

from facemood.models import FaceRegion

def crop_face(frame: np.ndarray, region: FaceRegion) -> np.ndarray:
    """Slice the region out of a BGR frame (clamped to frame bounds)."""
    if region.w <= 0 or region.h <= 0:
        raise ValueError(f"Degenerate face region: {region}")
    H, W = frame.shape[:2]
    x0 = max(0, min(region.x, W)); y0 = max(0, min(region.y, H))
    x1 = max(x0, min(region.x + region.w, W)); y1 = max(y0, min(region.y + region.h, H))
    chip = frame[y0:y1, x0:x1]
    if chip.size == 0:
        raise ValueError(f"Face region {region} lies outside the {W}x{H} frame")
    return chip


def to_planar_rgb(chip: np.ndarray, size: int = 64) -> np.ndarray:
    """Resize a BGR chip to size x size and return a (1, 3, size, size) float32 tensor."""
    resized = cv2.resize(chip, (size, size), interpolation=cv2.INTER_LINEAR)
    rgb = cv2.cvtColor(resized, cv2.COLOR_BGR2RGB).astype(np.float32) / 255.0
    tensor = np.ascontiguousarray(np.transpose(rgb, (2, 0, 1))[None, ...])
    tensor.setflags(write=False)
    return tensor


def crop_to_tensor(frame: np.ndarray, region: FaceRegion, size: int = 64) -> np.ndarray:
    return to_planar_rgb(crop_face(frame, region), size=size)
