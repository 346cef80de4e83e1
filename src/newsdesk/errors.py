"""Exception hierarchy for newsdesk.

Every failure surfaced to callers derives from ``NewsdeskError`` so that the
HTTP layer can map whole families of errors to status codes.
"""


class NewsdeskError(Exception):
    """Base class for all newsdesk errors."""


class ConfigurationError(NewsdeskError, ValueError):
    """A component is missing credentials or is otherwise misconfigured."""


class InvalidCategoryError(NewsdeskError, ValueError):
    """The requested news category is not supported."""


class ProviderError(NewsdeskError):
    """An external service (LLM, speech, news, transcription) failed."""


class MalformedResponseError(ProviderError):
    """An external service answered, but the payload could not be used."""


class EmptyInputError(NewsdeskError):
    """There is nothing to work on (no text, no content)."""


class NoSpeechDetectedError(EmptyInputError):
    """A recording produced no transcript."""

    def __init__(self, message: str = "No speech was detected. Please try again.") -> None:
        super().__init__(message)


class InvalidTransitionError(NewsdeskError):
    """The discussion is not in a state that allows the requested operation."""


class TurnInProgressError(InvalidTransitionError):
    """A generation or evaluation request for this discussion is still pending."""
