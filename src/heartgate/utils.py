from __future__ import annotations

import math
from typing import Sequence, Tuple

from .types import HandLandmarkIndex


Point2f = Tuple[float, float]


def clamp(v: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, v))


def clamp_int(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, v))


def closeness(d: float, d_max: float) -> float:
    """
    Normalized proximity: 1.0 at distance 0, 0.0 at or beyond `d_max`, linear in between.
    """

    return clamp(1.0 - d / d_max, 0.0, 1.0)


def point_xy(point) -> Point2f:
    """
    Read (x, y) from a landmark-like object.

    Accepts anything with `x`/`y` attributes (our HandLandmark, MediaPipe NormalizedLandmark)
    or an (x, y[, z]) sequence. Raises TypeError/ValueError on anything else.
    """

    if hasattr(point, "x") and hasattr(point, "y"):
        return (float(point.x), float(point.y))
    x, y = point[0], point[1]
    return (float(x), float(y))


def distance(a: Point2f, b: Point2f) -> float:
    # Depth is ignored; the detector's z is relative to the wrist and too noisy here.
    return math.hypot(a[0] - b[0], a[1] - b[1])


def hand_center(hand: Sequence) -> Point2f:
    """Midpoint between the wrist and the middle-finger base."""

    wx, wy = point_xy(hand[HandLandmarkIndex.WRIST])
    mx, my = point_xy(hand[HandLandmarkIndex.MIDDLE_FINGER_MCP])
    return ((wx + mx) / 2.0, (wy + my) / 2.0)


def to_px(point, w: int, h: int) -> Tuple[int, int]:
    x, y = point_xy(point)
    return (
        clamp_int(int(round(x * w)), 0, w - 1),
        clamp_int(int(round(y * h)), 0, h - 1),
    )
