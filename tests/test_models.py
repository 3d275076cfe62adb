import pytest
from pydantic import ValidationError
from facemood.models import FaceRegion, DetectionResult, FaceDetection, ImageAnalysis, LiveStatus

def test_models():
    r = FaceRegion(x=1, y=2, w=30, h=20)
    assert r.area == 600
    det = FaceDetection(region=r, result=DetectionResult(label="happy", confidence=0.66))
    ia = ImageAnalysis(width=64, height=48, faces=[det])
    assert ia.model_dump()["faces"][0]["result"]["label"] == "happy"
    st = LiveStatus(state="idle", running=False, ready=False, message="Loading models...")
    assert st.faces == [] and st.face_count == 0

def test_confidence_bounds():
    with pytest.raises(ValidationError):
        DetectionResult(label="sad", confidence=1.5)
    with pytest.raises(ValidationError):
        LiveStatus(state="paused", running=False, ready=True, message="")
