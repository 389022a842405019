"""
Hold meter for the heart gesture.

The meter grows while the pose is held and decays (more slowly) while it is not, so a pose lost
for a moment does not restart the run. Reaching the top latches the state as accepted; only
`reset()` leaves that state.

`update` expects a non-negative, bounded frame delta. Flooring/capping it is the caller's job
(see `heartgate.session`).
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from .types import Completed, Event, Milestone, ProgressState
from .utils import clamp

logger = logging.getLogger(__name__)


HOLD_RATE = 25.0  # units / second while holding
DECAY_RATE = 10.0  # units / second while not holding
MAX_PROGRESS = 100.0
MILESTONES = (25, 50, 75)
MILESTONE_BAND = 5  # messages belong to [t, t + band)


def initial_state() -> ProgressState:
    return ProgressState(value=0.0, accepted=False)


def reset() -> ProgressState:
    return initial_state()


def update(state: ProgressState, is_holding: bool, delta_s: float) -> Tuple[ProgressState, List[Event]]:
    if state.accepted:
        return state, []

    rate = HOLD_RATE if is_holding else -DECAY_RATE
    value = clamp(state.value + rate * delta_s, 0.0, MAX_PROGRESS)

    events: List[Event] = []
    for threshold in MILESTONES:
        # Upward entry only; dropping back below and regrowing fires again.
        if state.value < threshold <= value:
            events.append(Milestone(threshold))

    accepted = value >= MAX_PROGRESS
    if accepted:
        events.append(Completed())
        logger.info("hold meter complete, accepted")

    return ProgressState(value=value, accepted=accepted), events
