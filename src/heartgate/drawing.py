from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np

from .messages import progress_label
from .types import HandPosition, ProgressState
from .utils import clamp, to_px


HAND_CONNECTIONS: List[Tuple[int, int]] = [
    # thumb
    (0, 1),
    (1, 2),
    (2, 3),
    (3, 4),
    # index
    (0, 5),
    (5, 6),
    (6, 7),
    (7, 8),
    # middle
    (0, 9),
    (9, 10),
    (10, 11),
    (11, 12),
    # ring
    (0, 13),
    (13, 14),
    (14, 15),
    (15, 16),
    # pinky
    (0, 17),
    (17, 18),
    (18, 19),
    (19, 20),
    # knuckles
    (5, 9),
    (9, 13),
    (13, 17),
]

# BGR
PINK = (172, 79, 255)
WHITE = (255, 255, 255)
TRACK = (70, 40, 70)
HOLD_GLOW = (120, 230, 255)


def draw_text(frame, text: str, org: Tuple[int, int], color=WHITE, scale=0.7, thickness=2):
    cv2.putText(frame, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, (0, 0, 0), thickness + 2, cv2.LINE_AA)
    cv2.putText(frame, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, color, thickness, cv2.LINE_AA)
    return frame


def draw_centered_text(frame, text: str, y: int, color=WHITE, scale=1.0, thickness=2):
    w = frame.shape[1]
    (tw, _), _ = cv2.getTextSize(text, cv2.FONT_HERSHEY_SIMPLEX, scale, thickness)
    return draw_text(frame, text, (max(0, (w - tw) // 2), y), color=color, scale=scale, thickness=thickness)


def draw_hands(frame, hands: Sequence[HandPosition]):
    h, w = frame.shape[:2]
    for hand in hands:
        pts = [to_px(lm, w, h) for lm in hand.landmarks]
        for a, b in HAND_CONNECTIONS:
            if a < len(pts) and b < len(pts):
                cv2.line(frame, pts[a], pts[b], PINK, 3, cv2.LINE_AA)
        for pt in pts:
            cv2.circle(frame, pt, 4, WHITE, -1, lineType=cv2.LINE_AA)
    return frame


def draw_progress(frame, state: ProgressState, holding: bool = False, margin: int = 24, height: int = 22):
    h, w = frame.shape[:2]
    x0, x1 = margin, w - margin
    y1 = h - margin
    y0 = y1 - height
    cv2.rectangle(frame, (x0, y0), (x1, y1), TRACK, -1)

    fill = int(round((x1 - x0) * clamp(state.value, 0.0, 100.0) / 100.0))
    if fill > 0:
        cv2.rectangle(frame, (x0, y0), (x0 + fill, y1), PINK, -1)
    cv2.rectangle(frame, (x0, y0), (x1, y1), HOLD_GLOW if holding else WHITE, 2)

    draw_text(frame, progress_label(state.value), (x0, y0 - 10))
    return frame


def draw_accepted_overlay(frame, message: str, alpha: float = 0.55):
    overlay = np.empty_like(frame)
    overlay[:] = PINK
    cv2.addWeighted(overlay, alpha, frame, 1.0 - alpha, 0, dst=frame)
    draw_centered_text(frame, message, frame.shape[0] // 2, scale=1.6, thickness=3)
    draw_centered_text(frame, "press r to go again", frame.shape[0] // 2 + 48, scale=0.7)
    return frame


def draw_hud(
    frame,
    state: ProgressState,
    status: str,
    toast: Optional[str] = None,
    holding: bool = False,
):
    draw_text(frame, status, (12, 28))
    if toast:
        draw_centered_text(frame, toast, 80, color=PINK, scale=1.1)
    draw_progress(frame, state, holding=holding)
    return frame
