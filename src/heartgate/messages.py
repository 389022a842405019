from __future__ import annotations

from typing import Dict, Optional

from .types import Completed, Event, Milestone


MESSAGE_DURATION_S = 2.0

MILESTONE_MESSAGES: Dict[int, str] = {
    25: "You're doing great!",
    50: "Halfway there!",
    75: "Almost there!",
}
COMPLETED_MESSAGE = "Yay! You did it!"

STATUS_LOADING = "Loading hand tracker..."
STATUS_READY = "Make a hand heart to accept."
STATUS_NO_CAMERA = "Unable to access camera."
STATUS_RESETTING = "Resetting camera..."


def message_for(event: Event) -> Optional[str]:
    if isinstance(event, Completed):
        return COMPLETED_MESSAGE
    if isinstance(event, Milestone):
        return MILESTONE_MESSAGES.get(event.threshold)
    return None


def progress_label(value: float) -> str:
    return f"HOLDING {value:.0f}%"


class MessageToast:
    """Most recent message, visible for `duration_s` after it was shown."""

    def __init__(self, duration_s: float = MESSAGE_DURATION_S) -> None:
        self.duration_s = duration_s
        self._text: Optional[str] = None
        self._until = 0.0

    def show(self, text: str, now: float) -> None:
        self._text = text
        self._until = now + self.duration_s

    def current(self, now: float) -> Optional[str]:
        if self._text is None or now >= self._until:
            return None
        return self._text

    def clear(self) -> None:
        self._text = None
        self._until = 0.0
