import pytest

from heartgate.types import HandLandmark, HandLandmarkIndex, Handedness, HandPosition


def _hand(center, thumb_tip, index_tip, span=0.2):
    """21 landmarks: wrist/middle-base straddle `center` vertically, tips where asked, the rest at the wrist."""
    cx, cy = center
    wrist = (cx, cy + span / 2)
    pts = [wrist] * 21
    pts[HandLandmarkIndex.MIDDLE_FINGER_MCP] = (cx, cy - span / 2)
    pts[HandLandmarkIndex.THUMB_TIP] = thumb_tip
    pts[HandLandmarkIndex.INDEX_FINGER_TIP] = index_tip
    return [HandLandmark(idx=i, x=x, y=y) for i, (x, y) in enumerate(pts)]


@pytest.fixture
def make_hand():
    return _hand


@pytest.fixture
def heart_pair():
    """Left/right hands whose thumb and index tips meet at frame center."""
    left = _hand((0.45, 0.5), thumb_tip=(0.5, 0.51), index_tip=(0.5, 0.50))
    right = _hand((0.55, 0.5), thumb_tip=(0.5, 0.51), index_tip=(0.5, 0.50))
    return left, right


@pytest.fixture
def apart_pair():
    """Hands 1.0 apart, each finger resting on its own hand."""
    left = _hand((0.0, 0.5), thumb_tip=(0.02, 0.5), index_tip=(0.0, 0.42))
    right = _hand((1.0, 0.5), thumb_tip=(0.98, 0.5), index_tip=(1.0, 0.42))
    return left, right


@pytest.fixture
def heart_positions(heart_pair):
    left, right = heart_pair
    return [
        HandPosition(landmarks=left, handedness=[Handedness("Left", 0.97)]),
        HandPosition(landmarks=right, handedness=[Handedness("Right", 0.95)]),
    ]
