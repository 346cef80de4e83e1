"""Factory functions to create components from configuration."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from newsdesk.config.models import (
    ClaudeGenerationConfig,
    DeepgramTranscriptionConfig,
    GuardianProviderConfig,
    MediaStackProviderConfig,
    NewsAPIProviderConfig,
    NewsConfig,
    NewsdeskConfig,
    NewsProviderConfig,
    OpenAISpeechConfig,
)
from newsdesk.errors import ConfigurationError
from newsdesk.generation import ClaudeDiscussionGenerator, DiscussionGenerator
from newsdesk.news import (
    ArticleFetcher,
    GuardianProvider,
    MediaStackProvider,
    NewsAggregator,
    NewsAPIProvider,
    NewsProvider,
)
from newsdesk.run_logger import RunLogger
from newsdesk.speech import OpenAISpeechSynthesizer, SpeechSynthesizer
from newsdesk.storage import (
    BookmarkRepository,
    DiscussionHistory,
    ProgressRepository,
    SQLiteDocumentStore,
)
from newsdesk.study import ClaudeStudyTools
from newsdesk.transcription import DeepgramTranscriber, LiveTranscriber

logger = logging.getLogger(__name__)


def create_provider(config: NewsProviderConfig) -> NewsProvider:
    """Create a news provider from config.

    Uses explicit type matching rather than getattr.
    """
    if isinstance(config, NewsAPIProviderConfig):
        return NewsAPIProvider(country=config.country, timeout=config.timeout)
    if isinstance(config, GuardianProviderConfig):
        return GuardianProvider(timeout=config.timeout)
    if isinstance(config, MediaStackProviderConfig):
        return MediaStackProvider(country=config.country, timeout=config.timeout)
    msg = f"Unknown provider config type: {type(config)}"
    raise ValueError(msg)


def create_aggregator(config: NewsConfig, run_logger: RunLogger | None = None) -> NewsAggregator:
    """Create the headline aggregator.

    Providers whose API key is missing are skipped with a warning, so a
    partially configured deployment still serves the sources it has.
    """
    providers: list[NewsProvider] = []
    for provider_config in config.providers:
        try:
            providers.append(create_provider(provider_config))
        except ConfigurationError as e:
            logger.warning("Skipping %s provider: %s", provider_config.type, e)
    return NewsAggregator(
        providers,
        articles_per_provider=config.articles_per_provider,
        description_max_chars=config.description_max_chars,
        run_logger=run_logger,
    )


def create_generator(config: ClaudeGenerationConfig) -> DiscussionGenerator:
    """Create the discussion generator from config."""
    if isinstance(config, ClaudeGenerationConfig):
        return ClaudeDiscussionGenerator(
            model=config.model,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
        )
    msg = f"Unknown generation config type: {type(config)}"
    raise ValueError(msg)


def create_study_tools(config: ClaudeGenerationConfig) -> ClaudeStudyTools:
    """Create the study tools from config."""
    if isinstance(config, ClaudeGenerationConfig):
        return ClaudeStudyTools(model=config.model)
    msg = f"Unknown generation config type: {type(config)}"
    raise ValueError(msg)


def create_synthesizer(config: OpenAISpeechConfig) -> SpeechSynthesizer:
    """Create the speech synthesizer from config."""
    if isinstance(config, OpenAISpeechConfig):
        return OpenAISpeechSynthesizer(
            model=config.model,
            voice=config.voice,
            response_format=config.response_format,
        )
    msg = f"Unknown speech config type: {type(config)}"
    raise ValueError(msg)


def create_transcriber(config: DeepgramTranscriptionConfig) -> LiveTranscriber:
    """Create the live transcriber from config."""
    if isinstance(config, DeepgramTranscriptionConfig):
        return DeepgramTranscriber(
            model=config.model,
            language=config.language,
            smart_format=config.smart_format,
        )
    msg = f"Unknown transcription config type: {type(config)}"
    raise ValueError(msg)


@dataclass
class Services:
    """Everything the API needs, built once per process.

    Components whose credentials are missing are None and the reason is
    kept in ``unavailable`` under the component's name.
    """

    config: NewsdeskConfig
    aggregator: NewsAggregator
    fetcher: ArticleFetcher
    store: SQLiteDocumentStore
    history: DiscussionHistory
    bookmarks: BookmarkRepository
    progress: ProgressRepository
    generator: DiscussionGenerator | None = None
    study_tools: ClaudeStudyTools | None = None
    synthesizer: SpeechSynthesizer | None = None
    transcriber: LiveTranscriber | None = None
    run_logger: RunLogger | None = None
    unavailable: dict[str, str] = field(default_factory=dict)

    def require(self, name: str) -> Any:
        """Return a component, or raise ConfigurationError if it could not be built."""
        component = getattr(self, name)
        if component is None:
            reason = self.unavailable.get(name, f"{name} is not configured")
            raise ConfigurationError(reason)
        return component


def _optional(name: str, build, unavailable: dict[str, str]) -> Any:
    try:
        return build()
    except ConfigurationError as e:
        logger.warning("%s unavailable: %s", name, e)
        unavailable[name] = str(e)
        return None


def create_services(
    config: NewsdeskConfig,
    *,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
    db_path_override: str | None = None,
) -> Services:
    """Create every component from root config.

    Args:
        config: Root configuration.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.
        db_path_override: Override the config's storage.path setting.

    Returns:
        Services bundle. Its store still has to be initialized.
    """
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)

    run_logger: RunLogger | None = None
    if log_enabled:
        run_logger = RunLogger(log_dir=log_dir, enabled=True)

    store = SQLiteDocumentStore(db_path_override or config.storage.path)
    bookmarks = BookmarkRepository(store)
    unavailable: dict[str, str] = {}

    return Services(
        config=config,
        aggregator=create_aggregator(config.news, run_logger=run_logger),
        fetcher=ArticleFetcher(timeout=config.news.fetch_timeout),
        store=store,
        history=DiscussionHistory(store),
        bookmarks=bookmarks,
        progress=ProgressRepository(store, bookmarks),
        generator=_optional("generator", lambda: create_generator(config.generation), unavailable),
        study_tools=_optional(
            "study_tools", lambda: create_study_tools(config.generation), unavailable
        ),
        synthesizer=_optional(
            "synthesizer", lambda: create_synthesizer(config.speech), unavailable
        ),
        transcriber=_optional(
            "transcriber", lambda: create_transcriber(config.transcription), unavailable
        ),
        run_logger=run_logger,
        unavailable=unavailable,
    )
