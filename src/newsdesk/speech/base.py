from typing import Protocol

from newsdesk.data import Usage


class SpeechSynthesizer(Protocol):
    """Interface for text-to-speech services."""

    async def synthesize(self, text: str) -> tuple[bytes, Usage]:
        """Render text as audio.

        Args:
            text: Text to speak.

        Returns:
            Tuple of (encoded audio bytes, usage).
        """
        ...
