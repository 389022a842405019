from .classifier import HeartScore, assign_hands, heart_score, is_heart_pose
from .progress import initial_state, reset, update
from .session import FrameResult, HeartSession
from .types import Completed, HandLandmark, Handedness, HandPosition, Milestone, ProgressState

__all__ = [
    "Completed",
    "FrameResult",
    "HandLandmark",
    "HandPosition",
    "Handedness",
    "HeartScore",
    "HeartSession",
    "Milestone",
    "ProgressState",
    "assign_hands",
    "heart_score",
    "initial_state",
    "is_heart_pose",
    "reset",
    "update",
]
