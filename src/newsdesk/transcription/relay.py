"""Helpers for pushing captured audio into a transcription connection."""

import logging
from collections.abc import AsyncIterable, Iterator

from newsdesk.errors import ProviderError
from newsdesk.transcription.base import TranscriptionConnection

logger = logging.getLogger(__name__)

# Roughly 250 ms of 128 kbit/s webm/opus, the cadence browsers record at.
DEFAULT_CHUNK_SIZE = 4096


def iter_chunks(audio: bytes, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
    """Split a recorded blob into fixed-size chunks."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    for start in range(0, len(audio), chunk_size):
        yield audio[start : start + chunk_size]


async def relay(chunk: bytes, connection: TranscriptionConnection) -> bool:
    """Forward one chunk. Returns False if the connection is gone and the chunk was dropped."""
    if not chunk:
        return True
    if connection.closed:
        logger.warning("Dropping %d audio bytes: transcription connection closed", len(chunk))
        return False
    try:
        await connection.send(chunk)
    except ProviderError as e:
        logger.warning("Dropping audio chunk: %s", e)
        return False
    return True


async def relay_stream(
    chunks: AsyncIterable[bytes], connection: TranscriptionConnection
) -> int:
    """Forward every chunk of an audio stream. Returns the number of bytes delivered."""
    delivered = 0
    async for chunk in chunks:
        if await relay(chunk, connection):
            delivered += len(chunk)
    return delivered
