from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union


class HandLandmarkIndex:
    """MediaPipe hand landmark indices (21 per hand)."""

    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_FINGER_MCP = 5
    INDEX_FINGER_PIP = 6
    INDEX_FINGER_DIP = 7
    INDEX_FINGER_TIP = 8
    MIDDLE_FINGER_MCP = 9
    MIDDLE_FINGER_PIP = 10
    MIDDLE_FINGER_DIP = 11
    MIDDLE_FINGER_TIP = 12
    RING_FINGER_MCP = 13
    RING_FINGER_PIP = 14
    RING_FINGER_DIP = 15
    RING_FINGER_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


NUM_LANDMARKS = 21


@dataclass(frozen=True)
class HandLandmark:
    """A single hand landmark in normalized frame coordinates."""

    idx: int
    x: float
    y: float
    z: float = 0.0


@dataclass(frozen=True)
class Handedness:
    """One handedness candidate reported by the detector."""

    label: str  # "Left" / "Right"
    score: float = 0.0


@dataclass(frozen=True)
class HandPosition:
    """Detected landmarks for a single hand plus its ranked handedness candidates."""

    landmarks: List[HandLandmark]  # length 21
    handedness: List[Handedness] = field(default_factory=list)

    @property
    def handedness_label(self) -> Optional[str]:
        return self.handedness[0].label if self.handedness else None

    @property
    def handedness_score(self) -> Optional[float]:
        return self.handedness[0].score if self.handedness else None


@dataclass(frozen=True)
class ProgressState:
    """Hold meter value in [0, 100] and the one-way accepted latch."""

    value: float = 0.0
    accepted: bool = False


@dataclass(frozen=True)
class Milestone:
    threshold: int


@dataclass(frozen=True)
class Completed:
    pass


Event = Union[Milestone, Completed]
