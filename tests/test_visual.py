import numpy as np
from facemood.models import DetectionResult, FaceDetection, FaceRegion
from facemood.visual import (
    draw_detections, clear_surface, format_label, label_panel_origin,
    DEFAULT_GLYPH, PANEL_W, PANEL_H,
)

def _det(x, y, w, h, label="happy", conf=0.659):
    return FaceDetection(region=FaceRegion(x=x, y=y, w=w, h=h),
                         result=DetectionResult(label=label, confidence=conf))

def test_format_label():
    assert format_label(DetectionResult(label="happy", confidence=0.659)) == ":D happy 66%"
    assert format_label(DetectionResult(label="Sad", confidence=1.0)) == ":( Sad 100%"
    assert format_label(DetectionResult(label="class_9", confidence=0.0)) == f"{DEFAULT_GLYPH} class_9 0%"

def test_label_panel_clamped():
    assert label_panel_origin(50, 100, 640, 480) == (50, 100 - PANEL_H)
    # near the top edge
    assert label_panel_origin(50, 10, 640, 480) == (50, 0)
    # near the right edge
    assert label_panel_origin(600, 100, 640, 480) == (640 - PANEL_W, 100 - PANEL_H)

def test_draw_detections_in_place():
    frame = np.zeros((240, 320, 3), dtype=np.uint8)
    out = draw_detections(frame, [_det(60, 80, 100, 100), _det(200, 5, 40, 40, "fear", 0.4)])
    assert out is frame
    assert frame.any()
    # box outline drawn on the box edge
    assert frame[80, 110].any()
    # panel above first face is opaque black background with white text pixels
    panel = frame[80 - PANEL_H:80, 60:60 + PANEL_W]
    assert (panel == 255).all(axis=2).any()
    # face interior untouched
    assert not frame[130, 110].any()

def test_draw_no_detections():
    frame = np.zeros((40, 40, 3), dtype=np.uint8)
    draw_detections(frame, [])
    assert not frame.any()

def test_tiny_box_has_no_corner_accents():
    frame = np.zeros((100, 100, 3), dtype=np.uint8)
    draw_detections(frame, [_det(50, 60, 3, 3)])
    assert frame.any()

def test_clear_surface():
    frame = np.full((20, 20, 3), 200, dtype=np.uint8)
    clear_surface(frame)
    assert not frame.any()
