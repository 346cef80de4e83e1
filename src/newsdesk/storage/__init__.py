"""Document persistence and the reader library built on it."""

from newsdesk.storage.base import Document, DocumentStore
from newsdesk.storage.repositories import BookmarkRepository, DiscussionHistory, ProgressRepository
from newsdesk.storage.sqlite import SQLiteDocumentStore

__all__ = [
    "BookmarkRepository",
    "DiscussionHistory",
    "Document",
    "DocumentStore",
    "ProgressRepository",
    "SQLiteDocumentStore",
]
