import numpy as np
import pytest

pytest.importorskip("cv2")

from heartgate.drawing import (  # noqa: E402
    HAND_CONNECTIONS,
    PINK,
    draw_accepted_overlay,
    draw_hands,
    draw_hud,
    draw_progress,
)
from heartgate.types import HandPosition, ProgressState  # noqa: E402


def _blank(h=240, w=320):
    return np.zeros((h, w, 3), dtype=np.uint8)


def test_connections_cover_all_landmarks():
    assert len(HAND_CONNECTIONS) == 23
    assert {i for pair in HAND_CONNECTIONS for i in pair} == set(range(21))


def test_draw_hands_marks_landmarks(heart_pair):
    frame = _blank()
    out = draw_hands(frame, [HandPosition(landmarks=hand) for hand in heart_pair])
    assert out is frame
    assert out.shape == (240, 320, 3)
    # Index tips meet at frame center.
    assert out[120, 160].any()


def test_progress_fill_tracks_value():
    empty = draw_progress(_blank(), ProgressState(0.0))
    full = draw_progress(_blank(), ProgressState(100.0))
    pink = np.all(full == np.array(PINK, dtype=np.uint8), axis=-1).sum()
    assert pink > np.all(empty == np.array(PINK, dtype=np.uint8), axis=-1).sum()


def test_hud_and_overlay_draw_something():
    frame = draw_hud(_blank(), ProgressState(42.0), "Make a hand heart to accept.", toast="Halfway there!", holding=True)
    assert frame.any()

    frame = draw_accepted_overlay(_blank(), "Yay! You did it!")
    assert frame.any()
