"""Live speech-to-text: connections, audio relay and transcript accumulation."""

from newsdesk.transcription.base import LiveTranscriber, TranscriptionConnection
from newsdesk.transcription.buffer import TranscriptBuffer, clean_transcript
from newsdesk.transcription.deepgram import DeepgramConnection, DeepgramTranscriber, parse_fragment
from newsdesk.transcription.relay import DEFAULT_CHUNK_SIZE, iter_chunks, relay, relay_stream

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DeepgramConnection",
    "DeepgramTranscriber",
    "LiveTranscriber",
    "TranscriptBuffer",
    "TranscriptionConnection",
    "clean_transcript",
    "iter_chunks",
    "parse_fragment",
    "relay",
    "relay_stream",
]
