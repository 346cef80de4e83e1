from collections.abc import AsyncIterator
from typing import Protocol


class TranscriptionConnection(Protocol):
    """A live speech-to-text session: audio goes in, finalized phrases come out.

    Iterating the connection yields each finalized transcript fragment in
    arrival order and stops when the service closes the stream. Iteration
    raises if the connection fails.
    """

    @property
    def closed(self) -> bool:
        """Whether the connection can no longer accept audio."""
        ...

    async def send(self, chunk: bytes) -> None:
        """Send one chunk of encoded audio."""
        ...

    async def finish(self) -> None:
        """Signal end of audio so the service flushes remaining results and closes."""
        ...

    async def close(self) -> None:
        """Drop the connection without waiting for pending results."""
        ...

    def __aiter__(self) -> AsyncIterator[str]: ...


class LiveTranscriber(Protocol):
    """Factory for live transcription connections."""

    async def connect(self) -> TranscriptionConnection:
        """Open a new live transcription connection."""
        ...
