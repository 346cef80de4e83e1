"""Configuration module for newsdesk."""

from newsdesk.config.factory import (
    Services,
    create_aggregator,
    create_generator,
    create_provider,
    create_services,
    create_study_tools,
    create_synthesizer,
    create_transcriber,
)
from newsdesk.config.loader import get_default_config_path, load_config
from newsdesk.config.models import (
    ApiConfig,
    ClaudeGenerationConfig,
    DeepgramTranscriptionConfig,
    GuardianProviderConfig,
    LoggingConfig,
    MediaStackProviderConfig,
    NewsAPIProviderConfig,
    NewsConfig,
    NewsdeskConfig,
    NewsProviderConfig,
    OpenAISpeechConfig,
    StorageConfig,
)

__all__ = [
    "ApiConfig",
    "ClaudeGenerationConfig",
    "DeepgramTranscriptionConfig",
    "GuardianProviderConfig",
    "LoggingConfig",
    "MediaStackProviderConfig",
    "NewsAPIProviderConfig",
    "NewsConfig",
    "NewsProviderConfig",
    "NewsdeskConfig",
    "OpenAISpeechConfig",
    "Services",
    "StorageConfig",
    "create_aggregator",
    "create_generator",
    "create_provider",
    "create_services",
    "create_study_tools",
    "create_synthesizer",
    "create_transcriber",
    "get_default_config_path",
    "load_config",
]
