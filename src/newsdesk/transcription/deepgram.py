"""Deepgram live transcription over its streaming websocket endpoint."""

import json
import logging
import os
from collections.abc import AsyncIterator
from urllib.parse import urlencode

from pydantic import BaseModel, ValidationError
from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed, WebSocketException

from newsdesk.errors import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)

DEEPGRAM_LISTEN_URL = "wss://api.deepgram.com/v1/listen"


class _Alternative(BaseModel):
    transcript: str = ""


class _Channel(BaseModel):
    alternatives: list[_Alternative] = []


class _ResultsMessage(BaseModel):
    type: str = ""
    is_final: bool = False
    channel: _Channel | None = None


def parse_fragment(message: str | bytes) -> str | None:
    """Extract the transcript of a final ``Results`` message.

    Returns None for metadata, non-final results, blank transcripts and
    anything that does not parse.
    """
    try:
        payload = json.loads(message)
        result = _ResultsMessage.model_validate(payload)
    except (json.JSONDecodeError, ValidationError, TypeError):
        logger.debug("Ignoring unparseable Deepgram message")
        return None
    if result.type != "Results" or not result.is_final or result.channel is None:
        return None
    if not result.channel.alternatives:
        return None
    transcript = result.channel.alternatives[0].transcript
    return transcript if transcript.strip() else None


class DeepgramConnection:
    """One open Deepgram listen socket."""

    def __init__(self, websocket: ClientConnection) -> None:
        self._ws = websocket
        self._finished = False
        self._dropped = False

    @property
    def closed(self) -> bool:
        return self._finished or self._dropped

    async def send(self, chunk: bytes) -> None:
        if self.closed:
            raise ProviderError("Transcription connection is closed")
        try:
            await self._ws.send(chunk)
        except ConnectionClosed as e:
            self._dropped = True
            raise ProviderError(f"Transcription connection closed: {e}") from e

    async def finish(self) -> None:
        if self.closed:
            return
        self._finished = True
        try:
            await self._ws.send(json.dumps({"type": "CloseStream"}))
        except ConnectionClosed:
            self._dropped = True

    async def close(self) -> None:
        self._dropped = True
        await self._ws.close()

    async def __aiter__(self) -> AsyncIterator[str]:
        try:
            async for message in self._ws:
                fragment = parse_fragment(message)
                if fragment is not None:
                    yield fragment
        except ConnectionClosed as e:
            self._dropped = True
            raise ProviderError(f"Transcription connection closed unexpectedly: {e}") from e
        finally:
            self._dropped = self._dropped or not self._finished


class DeepgramTranscriber:
    """Open live transcription connections against Deepgram.

    Interim results are disabled, so every fragment is a finalized phrase.

    Args:
        api_key: Deepgram API key (defaults to DEEPGRAM_API_KEY env var).
        model: Deepgram model name.
        language: BCP-47 language tag.
        smart_format: Let Deepgram punctuate and format numbers.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str = "nova-2",
        language: str = "en-US",
        smart_format: bool = True,
    ) -> None:
        self._api_key = api_key or os.environ.get("DEEPGRAM_API_KEY")
        if not self._api_key:
            raise ConfigurationError(
                "Deepgram API key required. Pass api_key or set DEEPGRAM_API_KEY env var."
            )
        self._model = model
        self._language = language
        self._smart_format = smart_format

    @property
    def url(self) -> str:
        params = {
            "model": self._model,
            "language": self._language,
            "smart_format": str(self._smart_format).lower(),
            "interim_results": "false",
        }
        return f"{DEEPGRAM_LISTEN_URL}?{urlencode(params)}"

    async def connect(self) -> DeepgramConnection:
        try:
            websocket = await connect(
                self.url,
                additional_headers={"Authorization": f"Token {self._api_key}"},
            )
        except (OSError, WebSocketException) as e:
            raise ProviderError(f"Could not open transcription connection: {e}") from e
        logger.info("Deepgram connection opened (model=%s)", self._model)
        return DeepgramConnection(websocket)
