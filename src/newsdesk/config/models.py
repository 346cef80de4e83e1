"""Pydantic configuration models for newsdesk components."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from newsdesk.generation.claude_output import DEFAULT_MODEL

# ============================================================
# News Provider Configs
# ============================================================


class NewsAPIProviderConfig(BaseModel):
    """Configuration for NewsAPIProvider."""

    type: Literal["newsapi"] = "newsapi"
    country: str = "us"
    timeout: float = 30.0

    model_config = {"frozen": True}


class GuardianProviderConfig(BaseModel):
    """Configuration for GuardianProvider."""

    type: Literal["guardian"] = "guardian"
    timeout: float = 30.0

    model_config = {"frozen": True}


class MediaStackProviderConfig(BaseModel):
    """Configuration for MediaStackProvider."""

    type: Literal["mediastack"] = "mediastack"
    country: str = "us"
    timeout: float = 30.0

    model_config = {"frozen": True}


NewsProviderConfig = Annotated[
    NewsAPIProviderConfig | GuardianProviderConfig | MediaStackProviderConfig,
    Field(discriminator="type"),
]


def _default_providers() -> list[NewsProviderConfig]:
    return [NewsAPIProviderConfig(), GuardianProviderConfig(), MediaStackProviderConfig()]


class NewsConfig(BaseModel):
    """Headline aggregation settings."""

    providers: list[NewsProviderConfig] = Field(default_factory=_default_providers)
    articles_per_provider: int = Field(default=10, gt=0)
    description_max_chars: int = Field(default=300, gt=0)
    fetch_timeout: float = 30.0

    model_config = {"frozen": True}


# ============================================================
# Generation Configs
# ============================================================


class ClaudeGenerationConfig(BaseModel):
    """Configuration for the Claude discussion generator and study tools."""

    type: Literal["claude"] = "claude"
    model: str = DEFAULT_MODEL
    temperature: float = 0.7
    max_tokens: int = 1024

    model_config = {"frozen": True}


# ============================================================
# Speech Configs
# ============================================================


class OpenAISpeechConfig(BaseModel):
    """Configuration for OpenAISpeechSynthesizer."""

    type: Literal["openai"] = "openai"
    model: str = "tts-1"
    voice: str = "alloy"
    response_format: Literal["mp3", "opus", "aac", "flac", "wav", "pcm"] = "mp3"

    model_config = {"frozen": True}


# ============================================================
# Transcription Configs
# ============================================================


class DeepgramTranscriptionConfig(BaseModel):
    """Configuration for DeepgramTranscriber."""

    type: Literal["deepgram"] = "deepgram"
    model: str = "nova-2"
    language: str = "en-US"
    smart_format: bool = True
    chunk_size: int = Field(default=4096, gt=0)
    finish_timeout: float | None = None

    model_config = {"frozen": True}


# ============================================================
# Storage, API and Logging Configs
# ============================================================


class StorageConfig(BaseModel):
    """Where the reader library is kept. ``:memory:`` keeps it for the process lifetime."""

    path: str = "data/newsdesk.db"

    model_config = {"frozen": True}


class ApiConfig(BaseModel):
    """HTTP server settings."""

    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    model_config = {"frozen": True}


class LoggingConfig(BaseModel):
    """Configuration for news run logging."""

    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class NewsdeskConfig(BaseModel):
    """Root configuration for newsdesk."""

    news: NewsConfig = Field(default_factory=NewsConfig)
    generation: ClaudeGenerationConfig = Field(default_factory=ClaudeGenerationConfig)
    speech: OpenAISpeechConfig = Field(default_factory=OpenAISpeechConfig)
    transcription: DeepgramTranscriptionConfig = Field(default_factory=DeepgramTranscriptionConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
