"""newsdesk: headlines, study tools and spoken discussions for an interactive news reader."""

from newsdesk.config import NewsdeskConfig, Services, create_services, load_config
from newsdesk.data import (
    AnsweredQuestion,
    APICallUsage,
    ArticleSource,
    Bookmark,
    Category,
    Concept,
    ConceptType,
    ConversationEntry,
    DiscussionOpening,
    DiscussionSummary,
    DiscussionTurn,
    EntryKind,
    Evaluation,
    Flashcard,
    NewsArticle,
    QuestionType,
    Quiz,
    QuizQuestion,
    QuizResult,
    Usage,
    UserProgress,
)
from newsdesk.discussion import (
    ConversationSession,
    DiscussionArchive,
    DiscussionCoordinator,
    DiscussionState,
)
from newsdesk.errors import (
    ConfigurationError,
    EmptyInputError,
    InvalidCategoryError,
    InvalidTransitionError,
    MalformedResponseError,
    NewsdeskError,
    NoSpeechDetectedError,
    ProviderError,
    TurnInProgressError,
)
from newsdesk.generation import ClaudeDiscussionGenerator, DiscussionGenerator
from newsdesk.news import (
    ArticleFetcher,
    GuardianProvider,
    MediaStackProvider,
    NewsAggregator,
    NewsAPIProvider,
    NewsFeed,
    NewsProvider,
)
from newsdesk.run_logger import RunLogger
from newsdesk.speech import OpenAISpeechSynthesizer, SpeechSynthesizer
from newsdesk.storage import (
    BookmarkRepository,
    DiscussionHistory,
    DocumentStore,
    ProgressRepository,
    SQLiteDocumentStore,
)
from newsdesk.study import ClaudeStudyTools
from newsdesk.transcription import (
    DeepgramTranscriber,
    LiveTranscriber,
    TranscriptBuffer,
    TranscriptionConnection,
)

__all__ = [
    # Models
    "APICallUsage",
    "AnsweredQuestion",
    "ArticleSource",
    "Bookmark",
    "Category",
    "Concept",
    "ConceptType",
    "ConversationEntry",
    "DiscussionOpening",
    "DiscussionSummary",
    "DiscussionTurn",
    "EntryKind",
    "Evaluation",
    "Flashcard",
    "NewsArticle",
    "NewsFeed",
    "QuestionType",
    "Quiz",
    "QuizQuestion",
    "QuizResult",
    "Usage",
    "UserProgress",
    # Errors
    "ConfigurationError",
    "EmptyInputError",
    "InvalidCategoryError",
    "InvalidTransitionError",
    "MalformedResponseError",
    "NewsdeskError",
    "NoSpeechDetectedError",
    "ProviderError",
    "TurnInProgressError",
    # Protocols
    "DiscussionArchive",
    "DiscussionGenerator",
    "DocumentStore",
    "LiveTranscriber",
    "NewsProvider",
    "SpeechSynthesizer",
    "TranscriptionConnection",
    # News
    "ArticleFetcher",
    "GuardianProvider",
    "MediaStackProvider",
    "NewsAPIProvider",
    "NewsAggregator",
    # Discussion
    "ClaudeDiscussionGenerator",
    "ConversationSession",
    "DeepgramTranscriber",
    "DiscussionCoordinator",
    "DiscussionState",
    "OpenAISpeechSynthesizer",
    "TranscriptBuffer",
    # Study tools
    "ClaudeStudyTools",
    # Storage
    "BookmarkRepository",
    "DiscussionHistory",
    "ProgressRepository",
    "SQLiteDocumentStore",
    # Logging
    "RunLogger",
    # Config
    "NewsdeskConfig",
    "Services",
    "create_services",
    "load_config",
]
