import pytest
import numpy as np

from facemood.config import Settings
from facemood.errors import CameraUnavailableError
from facemood.models import FaceRegion

LABELS = ["happy", "sad", "neutral"]


class FakeCamera:
    def __init__(self, frame=None, fail_open=False):
        self.frame = frame if frame is not None else np.full((120, 160, 3), 90, dtype=np.uint8)
        self.fail_open = fail_open
        self.opened = 0
        self.released = 0
        self.is_open = False
    def open(self):
        if self.fail_open:
            raise CameraUnavailableError("permission denied")
        self.opened += 1
        self.is_open = True
    def read(self):
        return self.frame.copy() if self.is_open else None
    def release(self):
        self.released += 1
        self.is_open = False


class FakeLocator:
    def __init__(self, regions=None):
        self.regions = regions if regions is not None else [FaceRegion(x=20, y=50, w=40, h=40)]
        self.calls = 0
    def detect(self, frame):
        self.calls += 1
        return list(self.regions)


class FakeClassifier:
    """Returns fixed logits; optionally raises on the N-th call."""
    def __init__(self, logits=(2.0, 1.0, 0.1), fail_on=None):
        self.logits = np.asarray(logits, dtype=np.float32)
        self.fail_on = fail_on
        self.calls = 0
        self.inputs = []
    def run(self, tensor):
        self.calls += 1
        self.inputs.append(tensor)
        if self.fail_on is not None and self.calls >= self.fail_on:
            raise RuntimeError("inference exploded")
        return self.logits


@pytest.fixture
def settings():
    return Settings(LIVE_TICK_INTERVAL=0.001, LIVE_MAX_NOT_READY_TICKS=50, LIVE_STOP_TIMEOUT=5.0)

@pytest.fixture
def camera():
    return FakeCamera()

@pytest.fixture
def locator():
    return FakeLocator()

@pytest.fixture
def classifier():
    return FakeClassifier()

@pytest.fixture
def fake_loader(locator, classifier):
    return lambda s: (locator, classifier, LABELS)
