"""
Emotion classification with an ONNX model via onnxruntime, plus the class-label registry.
"""
from __future__ import annotations
from typing import List, Protocol, Sequence
import json
import logging
import os

import numpy as np
import onnxruntime as ort

from facemood.errors import StartupError

logger = logging.getLogger(__name__)


class Classifier(Protocol):
    def run(self, tensor: np.ndarray) -> np.ndarray: ...


def load_labels(path: str) -> List[str]:
    """Load the ordered class list.

    Accepts a plain JSON list, an index map ``{"0": "angry", ...}`` or a
    label map ``{"angry": 0, ...}``.
    """
    if not os.path.exists(path):
        raise StartupError(f"Class list not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            obj = json.load(f)
    except (OSError, ValueError) as e:
        raise StartupError(f"Failed to load classes: {e}") from e

    if isinstance(obj, dict) and all(str(k).isdigit() for k in obj.keys()):
        labels = [obj[k] for k in sorted(obj.keys(), key=int)]
    elif isinstance(obj, dict):
        labels = [k for k, _ in sorted(obj.items(), key=lambda kv: int(kv[1]))]
    elif isinstance(obj, list):
        labels = obj
    else:
        raise StartupError(f"Unsupported class list format in {path}")
    return [str(x) for x in labels]


class OnnxEmotionClassifier:
    """Runs a single-input / single-output ONNX classifier.

    Input and output names come from the loaded model so that exports with
    different tensor names work unchanged.
    """

    def __init__(self, model_path: str, providers: Sequence[str] = ("CPUExecutionProvider",)):
        if not os.path.exists(model_path):
            raise StartupError(f"Model not found: {model_path}")
        available = set(ort.get_available_providers())
        chosen = [p for p in providers if p in available] or ["CPUExecutionProvider"]
        try:
            self.session = ort.InferenceSession(model_path, providers=chosen)
        except Exception as e:
            raise StartupError(f"Failed to load model {model_path}: {e}") from e
        self.input_name = self.session.get_inputs()[0].name
        self.output_name = self.session.get_outputs()[0].name
        logger.debug(f"[classifier] loaded {model_path} providers={chosen} "
                     f"input={self.input_name} output={self.output_name}")

    def run(self, tensor: np.ndarray) -> np.ndarray:
        """Return the raw logit vector for one (1, 3, S, S) tensor."""
        out = self.session.run([self.output_name], {self.input_name: tensor})[0]
        return np.asarray(out, dtype=np.float32).reshape(-1)
