# facemood/pipeline.py
from __future__ import annotations
from typing import List, Sequence, Tuple
import logging
import os

import cv2
import numpy as np

from facemood.classifier import Classifier, OnnxEmotionClassifier, load_labels
from facemood.config import Settings
from facemood.detector import CascadeFaceLocator, FaceLocator
from facemood.models import FaceDetection, ImageAnalysis
from facemood.preprocess import crop_to_tensor
from facemood.scores import interpret_scores
from facemood.selector import select_faces
from facemood.visual import draw_detections

logger = logging.getLogger(__name__)

def load_collaborators(settings: Settings) -> Tuple[FaceLocator, Classifier, List[str]]:
    """
    Load the cascade, the ONNX classifier and the class list. Raises StartupError.
    """
    logger.debug(f"[pipeline] loading cascade={settings.CASCADE_PATH} model={settings.MODEL_PATH}")
    locator = CascadeFaceLocator(
        settings.CASCADE_PATH,
        scale_factor=settings.SCALE_FACTOR,
        min_neighbors=settings.MIN_NEIGHBORS,
    )
    classifier = OnnxEmotionClassifier(settings.MODEL_PATH, providers=settings.execution_providers())
    labels = load_labels(settings.CLASSES_PATH)
    logger.debug(f"[pipeline] collaborators ready; {len(labels)} classes")
    return locator, classifier, labels

def process_frame(
    frame: np.ndarray,
    locator: FaceLocator,
    classifier: Classifier,
    labels: Sequence[str],
    settings: Settings,
) -> Tuple[np.ndarray, List[FaceDetection]]:
    """
    One detect -> select -> crop -> classify -> interpret -> render pass.

    Crops are taken from the untouched frame; drawing happens on a copy so an
    earlier face's overlay never leaks into a later face's crop.
    Returns (annotated_frame, detections).
    """
    surface = frame.copy()
    regions = locator.detect(frame)
    selected = select_faces(regions, k=settings.MAX_FACES)
    logger.debug(f"[pipeline] located={len(regions)} selected={len(selected)}")

    detections: List[FaceDetection] = []
    for region in selected:
        tensor = crop_to_tensor(frame, region, size=settings.INPUT_SIZE)
        logits = classifier.run(tensor)
        result = interpret_scores(logits, labels)
        det = FaceDetection(region=region, result=result)
        draw_detections(surface, [det])
        detections.append(det)
    return surface, detections

def analyze_image(
    image_path: str,
    settings: Settings,
    annotated_path: str | None = None,
    collaborators: Tuple[FaceLocator, Classifier, Sequence[str]] | None = None,
) -> ImageAnalysis:
    """
    Classify the faces of a single image file; optionally write the annotated image.

    Already-loaded collaborators (e.g. from a running LiveSession) are reused;
    otherwise they are loaded for this call.
    """
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Image not found: {image_path}")
    frame = cv2.imread(image_path)
    if frame is None:
        raise ValueError(f"Could not decode image: {image_path}")

    if collaborators is None:
        collaborators = load_collaborators(settings)
    locator, classifier, labels = collaborators
    annotated, detections = process_frame(frame, locator, classifier, labels, settings)
    if annotated_path:
        cv2.imwrite(annotated_path, annotated)
        logger.debug(f"[pipeline] annotated image written -> {annotated_path}")

    h, w = frame.shape[:2]
    return ImageAnalysis(width=w, height=h, faces=detections)
