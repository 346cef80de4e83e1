"""Text-to-speech using the OpenAI audio API."""

import logging
import os

import openai

from newsdesk.data import Usage
from newsdesk.errors import ConfigurationError, EmptyInputError, ProviderError

logger = logging.getLogger(__name__)

MEDIA_TYPES = {
    "mp3": "audio/mpeg",
    "opus": "audio/ogg",
    "aac": "audio/aac",
    "flac": "audio/flac",
    "wav": "audio/wav",
    "pcm": "audio/pcm",
}


class OpenAISpeechSynthesizer:
    """Synthesize speech with OpenAI's ``audio.speech`` endpoint.

    Args:
        api_key: API key (defaults to OPENAI_API_KEY env var).
        model: TTS model name.
        voice: Voice preset.
        response_format: Audio container returned by the API.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str = "tts-1",
        voice: str = "alloy",
        response_format: str = "mp3",
    ) -> None:
        resolved_key = api_key or os.environ.get("OPENAI_API_KEY")
        if not resolved_key:
            raise ConfigurationError(
                "OpenAI API key required. Pass api_key or set OPENAI_API_KEY env var."
            )
        self._client = openai.AsyncOpenAI(api_key=resolved_key)
        self._model = model
        self._voice = voice
        self._response_format = response_format

    @property
    def media_type(self) -> str:
        """Content type of the audio ``synthesize`` returns."""
        return MEDIA_TYPES.get(self._response_format, "application/octet-stream")

    async def synthesize(self, text: str) -> tuple[bytes, Usage]:
        if not text or not text.strip():
            raise EmptyInputError("Text is required")

        try:
            response = await self._client.audio.speech.create(
                model=self._model,
                voice=self._voice,
                input=text,
                response_format=self._response_format,
            )
        except openai.OpenAIError as e:
            raise ProviderError(f"Failed to generate speech: {e}") from e

        audio = response.content
        logger.debug("Synthesized %d chars into %d audio bytes", len(text), len(audio))
        return (audio, Usage(speech_characters=len(text)))
