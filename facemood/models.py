"""
Pydantic data models for the live pipeline and API IO.
"""
from __future__ import annotations
from pydantic import BaseModel, Field
from typing import List, Optional, Literal

class FaceRegion(BaseModel):
    """Axis-aligned face rectangle in frame coordinates."""
    x: int
    y: int
    w: int
    h: int

    @property
    def area(self) -> int:
        return self.w * self.h

class DetectionResult(BaseModel):
    label: str
    confidence: float = Field(ge=0.0, le=1.0)

class FaceDetection(BaseModel):
    region: FaceRegion
    result: DetectionResult

class ImageAnalysis(BaseModel):
    width: int
    height: int
    faces: List[FaceDetection] = Field(default_factory=list)



# live model


SessionState = Literal["idle", "running", "stopped"]

class LiveStatus(BaseModel):
    state: SessionState
    running: bool
    ready: bool
    message: str
    started_at: float | None = None
    frames_processed: int = 0
    face_count: int = 0
    faces: List[DetectionResult] = Field(default_factory=list)
    last_error: Optional[str] = None
