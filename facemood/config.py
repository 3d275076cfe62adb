"""
Configuration for the live emotion pipeline.
"""
from pydantic import BaseModel
import os

import cv2


DEFAULT_CASCADE = os.path.join(cv2.data.haarcascades, "haarcascade_frontalface_default.xml")


class Settings(BaseModel):
    """
    Runtime settings with environment-variable overrides.
    """
    DEVICE: str = (os.getenv("DEVICE", "cpu") or "cpu")
    CAMERA_INDEX: int = int(os.getenv("CAMERA_INDEX", "0"))

    # Static startup resources
    CASCADE_PATH: str = os.getenv("CASCADE_PATH", DEFAULT_CASCADE)
    MODEL_PATH: str = os.getenv("MODEL_PATH", "models/emotion_yolo11n_cls.onnx")
    CLASSES_PATH: str = os.getenv("CLASSES_PATH", "models/classes.json")

    # Detection / classification
    INPUT_SIZE: int = int(os.getenv("INPUT_SIZE", "64"))
    MAX_FACES: int = int(os.getenv("MAX_FACES", "2"))
    SCALE_FACTOR: float = float(os.getenv("SCALE_FACTOR", "1.1"))
    MIN_NEIGHBORS: int = int(os.getenv("MIN_NEIGHBORS", "3"))

    # Loop driver
    LIVE_TICK_INTERVAL: float = float(os.getenv("LIVE_TICK_INTERVAL", str(1.0 / 60.0)))
    LIVE_MAX_NOT_READY_TICKS: int = int(os.getenv("LIVE_MAX_NOT_READY_TICKS", "600"))
    LIVE_STOP_TIMEOUT: float | None = (
        float(os.getenv("LIVE_STOP_TIMEOUT")) if os.getenv("LIVE_STOP_TIMEOUT") else None
    )

    def __init__(self, **data):
        super().__init__(**data)
        # Normalize DEVICE: strip comments/extra words, lower-case, validate
        words = (self.DEVICE or "").strip().split() or ["cpu"]
        dev = words[0].lower()
        if dev not in ("cpu", "cuda"):
            dev = "cpu"
        object.__setattr__(self, "DEVICE", dev)

    def execution_providers(self) -> list[str]:
        """onnxruntime providers for the configured device, CPU always last."""
        if self.DEVICE == "cuda":
            return ["CUDAExecutionProvider", "CPUExecutionProvider"]
        return ["CPUExecutionProvider"]
