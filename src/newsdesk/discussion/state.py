from enum import StrEnum


class DiscussionState(StrEnum):
    """Where a spoken discussion currently is in its turn cycle."""

    IDLE = "idle"
    GENERATING = "generating"
    AWAITING_USER_SPEECH = "awaiting_user_speech"
    TRANSCRIBING = "transcribing"
    PROCESSING = "processing"
    SPEAKING = "speaking"

    @property
    def is_busy(self) -> bool:
        """A generation or evaluation request is in flight."""
        return self in (DiscussionState.GENERATING, DiscussionState.PROCESSING)
