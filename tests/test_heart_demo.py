"""Drives scripts/heart_demo.py with a fake camera, detector and window."""

import importlib.util
import os
import sys

import numpy as np
import pytest

pytest.importorskip("cv2")

SCRIPT = os.path.join(os.path.dirname(__file__), "..", "scripts", "heart_demo.py")


def _load_demo():
    spec = importlib.util.spec_from_file_location("heart_demo", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class FakeCapture:
    def __init__(self, reads):
        self._reads = list(reads)
        self.released = False

    def read(self):
        return self._reads.pop(0)

    def release(self):
        self.released = True


class FakeDetector:
    def __init__(self, positions, **kwargs):
        self._positions = positions

    def detect(self, frame, timestamp_ms=None):
        return self._positions

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        pass


class FakePew:
    def __init__(self, **kwargs):
        pass

    def play(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        pass


def test_lost_camera_clears_holding(monkeypatch, heart_positions):
    demo = _load_demo()
    frame = np.zeros((48, 64, 3), dtype=np.uint8)
    cap = FakeCapture([(True, frame), (False, None)])
    keys = [0, ord("q")]
    hud_calls = []

    monkeypatch.setattr(sys, "argv", ["heart_demo.py", "--width", "64", "--height", "48", "--mute"])
    monkeypatch.setattr(demo, "open_camera", lambda *args: cap)
    monkeypatch.setattr(demo, "HandLandmarkDetector", lambda **kw: FakeDetector(heart_positions, **kw))
    monkeypatch.setattr(demo, "PewPlayer", FakePew)
    monkeypatch.setattr(demo, "draw_hud", lambda frame, state, status, toast=None, holding=False: hud_calls.append((status, holding)))
    monkeypatch.setattr(demo.cv2, "imshow", lambda *args: None)
    monkeypatch.setattr(demo.cv2, "waitKey", lambda delay: keys.pop(0))
    monkeypatch.setattr(demo.cv2, "destroyAllWindows", lambda: None)

    assert demo.main() == 0
    assert cap.released
    assert hud_calls[0] == (demo.messages.STATUS_READY, True)
    assert hud_calls[1] == (demo.messages.STATUS_NO_CAMERA, False)
