from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from . import progress
from .classifier import is_heart_pose
from .types import Event, HandPosition, ProgressState

logger = logging.getLogger(__name__)


MIN_FRAME_DELTA_S = 0.016
MAX_FRAME_DELTA_S = 0.25  # a stalled loop must not fill the meter in one frame


@dataclass(frozen=True)
class FrameResult:
    holding: bool
    state: ProgressState
    delta_s: float
    events: List[Event] = field(default_factory=list)


class HeartSession:
    """
    Frame-driven owner of one hold meter.

    Call `step()` once per video frame with that frame's hands. Timestamps come from `clock`
    (seconds) unless passed explicitly.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._state = progress.initial_state()
        self._last_t: Optional[float] = None

    @property
    def state(self) -> ProgressState:
        return self._state

    @property
    def accepted(self) -> bool:
        return self._state.accepted

    def frame_delta(self, now: float) -> float:
        if self._last_t is None:
            return MIN_FRAME_DELTA_S
        return min(MAX_FRAME_DELTA_S, max(MIN_FRAME_DELTA_S, now - self._last_t))

    def step(self, hands: Sequence, handedness: Optional[Sequence] = None, now: Optional[float] = None) -> FrameResult:
        if now is None:
            now = self._clock()
        delta_s = self.frame_delta(now)
        self._last_t = now

        holding = is_heart_pose(hands, handedness)
        self._state, events = progress.update(self._state, holding, delta_s)
        return FrameResult(holding=holding, state=self._state, delta_s=delta_s, events=events)

    def step_positions(self, positions: Sequence[HandPosition], now: Optional[float] = None) -> FrameResult:
        hands = [p.landmarks for p in positions]
        handedness = [p.handedness for p in positions]
        return self.step(hands, handedness, now=now)

    def reset(self) -> None:
        self._state = progress.reset()
        self._last_t = None
        logger.info("session reset")
