"""Tests for Deepgram live transcription and the audio relay helpers."""

import json
from unittest.mock import AsyncMock

import pytest
from websockets.exceptions import ConnectionClosed

from newsdesk.errors import ConfigurationError, ProviderError
from newsdesk.transcription import (
    DeepgramConnection,
    DeepgramTranscriber,
    iter_chunks,
    parse_fragment,
    relay,
    relay_stream,
)
from newsdesk.transcription import deepgram as deepgram_module


def _results(transcript: str, *, is_final: bool = True) -> str:
    return json.dumps(
        {
            "type": "Results",
            "is_final": is_final,
            "channel": {"alternatives": [{"transcript": transcript, "confidence": 0.9}]},
        }
    )


class FakeWebSocket:
    """Stands in for a websockets ClientConnection."""

    def __init__(self, messages: list[str] | None = None, error: Exception | None = None):
        self.messages = messages or []
        self.error = error
        self.sent: list[bytes | str] = []
        self.closed = False

    async def send(self, message: bytes | str) -> None:
        if self.error and isinstance(self.error, ConnectionClosed):
            raise self.error
        self.sent.append(message)

    async def close(self) -> None:
        self.closed = True

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for message in self.messages:
            yield message
        if self.error:
            raise self.error


# -- parse_fragment --


def test_parse_fragment_final_result() -> None:
    assert parse_fragment(_results("hello world")) == "hello world"


def test_parse_fragment_ignores_interim_blank_and_other_messages() -> None:
    assert parse_fragment(_results("partial", is_final=False)) is None
    assert parse_fragment(_results("   ")) is None
    assert parse_fragment(json.dumps({"type": "Metadata", "request_id": "x"})) is None
    assert parse_fragment("not json") is None
    assert parse_fragment(json.dumps({"type": "Results", "is_final": True})) is None


# -- DeepgramConnection --


async def test_connection_yields_final_fragments() -> None:
    ws = FakeWebSocket(
        [
            json.dumps({"type": "Metadata"}),
            _results("I think"),
            _results("it matters", is_final=False),
            _results("it matters."),
        ]
    )
    connection = DeepgramConnection(ws)  # type: ignore[arg-type]

    fragments = [f async for f in connection]

    assert fragments == ["I think", "it matters."]


async def test_connection_send_and_finish() -> None:
    ws = FakeWebSocket()
    connection = DeepgramConnection(ws)  # type: ignore[arg-type]

    await connection.send(b"\x00\x01")
    await connection.finish()

    assert ws.sent == [b"\x00\x01", json.dumps({"type": "CloseStream"})]
    assert connection.closed
    with pytest.raises(ProviderError, match="closed"):
        await connection.send(b"late")


async def test_connection_drop_while_sending() -> None:
    ws = FakeWebSocket(error=ConnectionClosed(None, None))
    connection = DeepgramConnection(ws)  # type: ignore[arg-type]

    with pytest.raises(ProviderError):
        await connection.send(b"audio")
    assert connection.closed


async def test_connection_drop_while_reading_keeps_earlier_fragments() -> None:
    ws = FakeWebSocket([_results("first words")], error=ConnectionClosed(None, None))
    connection = DeepgramConnection(ws)  # type: ignore[arg-type]

    fragments: list[str] = []
    with pytest.raises(ProviderError, match="closed unexpectedly"):
        async for fragment in connection:
            fragments.append(fragment)

    assert fragments == ["first words"]
    assert connection.closed


async def test_connection_close() -> None:
    ws = FakeWebSocket()
    connection = DeepgramConnection(ws)  # type: ignore[arg-type]
    await connection.close()
    assert ws.closed
    assert connection.closed


# -- DeepgramTranscriber --


def test_transcriber_requires_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DEEPGRAM_API_KEY", raising=False)
    with pytest.raises(ConfigurationError, match="API key required"):
        DeepgramTranscriber()


def test_transcriber_url() -> None:
    transcriber = DeepgramTranscriber(api_key="test-key")
    assert transcriber.url.startswith("wss://api.deepgram.com/v1/listen?")
    assert "model=nova-2" in transcriber.url
    assert "language=en-US" in transcriber.url
    assert "smart_format=true" in transcriber.url
    assert "interim_results=false" in transcriber.url


async def test_transcriber_connect(monkeypatch: pytest.MonkeyPatch) -> None:
    ws = FakeWebSocket()
    mock_connect = AsyncMock(return_value=ws)
    monkeypatch.setattr(deepgram_module, "connect", mock_connect)
    transcriber = DeepgramTranscriber(api_key="test-key")

    connection = await transcriber.connect()

    assert isinstance(connection, DeepgramConnection)
    assert mock_connect.call_args.args == (transcriber.url,)
    assert mock_connect.call_args.kwargs == {
        "additional_headers": {"Authorization": "Token test-key"}
    }


async def test_transcriber_connect_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        deepgram_module, "connect", AsyncMock(side_effect=OSError("network down"))
    )
    transcriber = DeepgramTranscriber(api_key="test-key")
    with pytest.raises(ProviderError, match="Could not open transcription connection"):
        await transcriber.connect()


# -- relay helpers --


def test_iter_chunks() -> None:
    assert list(iter_chunks(b"abcdefg", 3)) == [b"abc", b"def", b"g"]
    assert list(iter_chunks(b"", 3)) == []


def test_iter_chunks_rejects_bad_size() -> None:
    with pytest.raises(ValueError):
        list(iter_chunks(b"abc", 0))


async def test_relay_drops_chunks_after_close() -> None:
    ws = FakeWebSocket()
    connection = DeepgramConnection(ws)  # type: ignore[arg-type]

    assert await relay(b"one", connection)
    await connection.finish()
    assert not await relay(b"two", connection)
    assert ws.sent[0] == b"one"
    assert b"two" not in ws.sent


async def test_relay_stream_counts_delivered_bytes() -> None:
    ws = FakeWebSocket()
    connection = DeepgramConnection(ws)  # type: ignore[arg-type]

    async def chunks():
        yield b"12345"
        yield b""
        yield b"678"

    assert await relay_stream(chunks(), connection) == 8
    assert ws.sent == [b"12345", b"678"]
