"""
Hand-heart pose classifier.

Per-frame and stateless: two hands are scored on how closely their thumb and index tips meet and
how centered the pair sits in the frame. The sum of four closeness sub-scores is compared against
a fixed threshold.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from .types import NUM_LANDMARKS, HandLandmarkIndex
from .utils import closeness, distance, hand_center, point_xy

logger = logging.getLogger(__name__)


# --- Tuning knobs ---
HEART_SCORE_THRESHOLD = 2.6
MAX_CENTER_DISTANCE = 0.65  # hands further apart than this never form a heart
CROSS_THUMB_INDEX_MAX = 0.14
INDEX_NEAR_MAX = 0.18
THUMB_NEAR_MAX = 0.20
CENTER_BALANCE_MAX = 0.18
FRAME_CENTER_X = 0.5


@dataclass(frozen=True)
class HandAssignment:
    left: Sequence
    right: Sequence
    from_labels: bool  # False when the positional fallback was used


@dataclass(frozen=True)
class HeartScore:
    cross_thumb_index: float
    index_near: float
    thumb_near: float
    center_balance: float
    center_distance: float

    @property
    def gated(self) -> bool:
        return self.center_distance > MAX_CENTER_DISTANCE

    @property
    def total(self) -> float:
        return self.cross_thumb_index + self.index_near + self.thumb_near + self.center_balance

    @property
    def is_heart(self) -> bool:
        return not self.gated and self.total >= HEART_SCORE_THRESHOLD


def _top_label(candidates) -> Optional[str]:
    if not candidates:
        return None
    c0 = candidates[0]
    if isinstance(c0, str):
        label = c0
    else:
        label = getattr(c0, "label", None) or getattr(c0, "category_name", None)
    if not label:
        return None
    return str(label).lower()


def assign_hands(hands: Sequence, handedness: Optional[Sequence] = None) -> Optional[HandAssignment]:
    """
    Map detected hands to left/right.

    Labels are trusted only when there is one candidate list per hand and both "left" and "right"
    end up present; otherwise the first hand is taken as left and the second as right. The fallback
    says nothing about the real identity of the hands (mirrored cameras swap them); the score is
    close to symmetric so the classifier tolerates that.
    """

    if hands is None:
        return None
    try:
        hands = list(hands)
    except TypeError:
        return None
    if len(hands) < 2:
        return None

    by_label: Dict[str, Sequence] = {}
    try:
        if handedness is not None and len(handedness) == len(hands):
            for hand, candidates in zip(hands, handedness):
                label = _top_label(candidates)
                if label:
                    by_label[label] = hand
    except (AttributeError, IndexError, KeyError, TypeError) as e:
        logger.debug("unusable handedness, assigning hands by order: %s", e)
        by_label = {}

    if "left" in by_label and "right" in by_label:
        return HandAssignment(left=by_label["left"], right=by_label["right"], from_labels=True)
    return HandAssignment(left=hands[0], right=hands[1], from_labels=False)


def heart_score(left: Sequence, right: Sequence) -> HeartScore:
    """Score a left/right hand pair. Raises on malformed landmarks; see `is_heart_pose`."""

    if len(left) < NUM_LANDMARKS or len(right) < NUM_LANDMARKS:
        raise ValueError("each hand needs %d landmarks" % NUM_LANDMARKS)

    left_thumb = point_xy(left[HandLandmarkIndex.THUMB_TIP])
    left_index = point_xy(left[HandLandmarkIndex.INDEX_FINGER_TIP])
    right_thumb = point_xy(right[HandLandmarkIndex.THUMB_TIP])
    right_index = point_xy(right[HandLandmarkIndex.INDEX_FINGER_TIP])

    left_center = hand_center(left)
    right_center = hand_center(right)

    cross = closeness(distance(left_thumb, right_index), CROSS_THUMB_INDEX_MAX) + closeness(
        distance(right_thumb, left_index), CROSS_THUMB_INDEX_MAX
    )
    mid_x = (left_center[0] + right_center[0]) / 2.0

    return HeartScore(
        cross_thumb_index=cross,
        index_near=closeness(distance(left_index, right_index), INDEX_NEAR_MAX),
        thumb_near=closeness(distance(left_thumb, right_thumb), THUMB_NEAR_MAX),
        center_balance=closeness(abs(mid_x - FRAME_CENTER_X), CENTER_BALANCE_MAX),
        center_distance=distance(left_center, right_center),
    )


def score_frame(hands: Sequence, handedness: Optional[Sequence] = None) -> Optional[HeartScore]:
    """Score one frame's hands, or None when the input cannot be scored."""

    assignment = assign_hands(hands, handedness)
    if assignment is None:
        return None
    try:
        return heart_score(assignment.left, assignment.right)
    except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
        logger.debug("unusable landmarks, treating as no pose: %s", e)
        return None


def is_heart_pose(hands: Sequence, handedness: Optional[Sequence] = None) -> bool:
    """True when the frame's hands form a hand-heart. Fails closed on any insufficient input."""

    score = score_frame(hands, handedness)
    if score is None:
        return False
    logger.debug("heart score %.2f (center distance %.2f)", score.total, score.center_distance)
    return score.is_heart
