"""
Logits -> probabilities -> (label, confidence).
"""
from __future__ import annotations
from typing import Sequence
import numpy as np

from facemood.models import DetectionResult

def softmax(logits) -> np.ndarray:
    """Numerically stable softmax over a 1-D logit vector."""
    x = np.asarray(logits, dtype=np.float64).reshape(-1)
    if x.size == 0:
        raise ValueError("Empty score vector")
    e = np.exp(x - x.max())
    return e / e.sum()


def interpret_scores(logits, labels: Sequence[str]) -> DetectionResult:
    """Pick the most probable class.

    np.argmax returns the first index on exact ties. Labels shorter than the
    score vector fall back to a synthetic ``class_<index>`` name.
    """
    probs = softmax(logits)
    idx = int(np.argmax(probs))
    label = labels[idx] if idx < len(labels) else f"class_{idx}"
    confidence = float(min(1.0, max(0.0, probs[idx])))
    return DetectionResult(label=label, confidence=confidence)
