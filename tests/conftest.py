"""Pytest fixtures for Card Master tests."""

import threading

import numpy as np
import pytest

from cardmaster.errors import CaptureError
from cardmaster.pipeline import Pipeline
from cardmaster.state import DetectedCard


class FakeCamera:
    """Frame source that hands out a blank 640x480 frame once opened."""

    def __init__(self, fail_open=False):
        self.fail_open = fail_open
        self.opened = False
        self.released = False
        self.frame = np.zeros((480, 640, 3), dtype=np.uint8)

    def open(self):
        if self.fail_open:
            raise CaptureError("Could not open camera 0")
        self.opened = True

    def read(self):
        return self.frame if self.opened else None

    def release(self):
        self.opened = False
        self.released = True


class FakeDetector:
    """Recognition oracle that replays a script of results or exceptions."""

    def __init__(self):
        self.script = []
        self.calls = []

    def detect(self, image):
        self.calls.append(image)
        result = self.script.pop(0) if self.script else []
        if isinstance(result, Exception):
            raise result
        return result


class BlockingDetector(FakeDetector):
    """Detector that parks inside detect() until released."""

    def __init__(self):
        super().__init__()
        self.entered = threading.Event()
        self.release = threading.Event()

    def detect(self, image):
        self.entered.set()
        self.release.wait(timeout=5)
        return super().detect(image)


class RecordingAdvisor:
    """Recommendation oracle that records its arguments."""

    def __init__(self, action="Stand"):
        self.action = action
        self.calls = []

    def recommend(self, player_values, dealer_card, deck_count=1,
                  dealer_checked_blackjack=True, options=None):
        self.calls.append((list(player_values), dealer_card, deck_count,
                           dealer_checked_blackjack, options))
        return self.action


@pytest.fixture
def cards():
    """Build detections from (label, y) pairs."""
    def _cards(*pairs):
        return [DetectedCard(label=label, y=y) for label, y in pairs]
    return _cards


@pytest.fixture
def camera():
    """An opened fake camera."""
    cam = FakeCamera()
    cam.open()
    return cam


@pytest.fixture
def broken_camera():
    """A fake camera whose device cannot be opened."""
    return FakeCamera(fail_open=True)


@pytest.fixture
def detector():
    """A scripted recognition oracle."""
    return FakeDetector()


@pytest.fixture
def blocking_detector():
    """A recognition oracle that stalls until told to answer."""
    det = BlockingDetector()
    yield det
    det.release.set()


@pytest.fixture
def advisor():
    """A recommendation oracle that always says Stand."""
    return RecordingAdvisor()


@pytest.fixture
def make_pipeline(camera, detector, advisor):
    """Factory for pipelines whose timer never fires on its own."""
    created = []

    def _make(**overrides):
        kwargs = {
            "camera": camera,
            "detector": detector,
            "advisor": advisor,
            "interval": 3600,
        }
        kwargs.update(overrides)
        p = Pipeline(**kwargs)
        created.append(p)
        return p

    yield _make
    for p in created:
        p.shutdown()


@pytest.fixture
def pipeline(make_pipeline):
    """A default pipeline (current-cycle flag, fake oracles)."""
    return make_pipeline()
