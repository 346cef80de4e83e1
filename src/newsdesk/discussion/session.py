"""In-memory conversation log of one spoken discussion."""

from collections.abc import Iterable
from typing import Protocol

from newsdesk.data import ConversationEntry, DiscussionSummary, EntryKind

TOPIC_PREVIEW_CHARS = 100


def topic_for(source_text: str, highlighted_text: str | None = None) -> str:
    """The highlighted excerpt if there is one, else the start of the article."""
    if highlighted_text:
        return highlighted_text
    return f"{source_text[:TOPIC_PREVIEW_CHARS]}..."


class DiscussionArchive(Protocol):
    """Where finished discussions are flushed."""

    async def save(self, summary: DiscussionSummary) -> str:
        """Persist a discussion summary and return its id."""
        ...


class ConversationSession:
    """Ordered, append-only log of a discussion.

    Entries are committed in batches so a failed turn never leaves half of
    its entries behind.
    """

    def __init__(self, topic: str) -> None:
        self._topic = topic
        self._entries: list[ConversationEntry] = []

    @property
    def topic(self) -> str:
        return self._topic

    @property
    def entries(self) -> tuple[ConversationEntry, ...]:
        return tuple(self._entries)

    @property
    def exchange_count(self) -> int:
        return sum(1 for e in self._entries if e.kind is EntryKind.RESPONSE)

    def commit(self, entries: Iterable[ConversationEntry]) -> None:
        self._entries.extend(entries)

    def to_summary(self, subject_id: str) -> DiscussionSummary:
        return DiscussionSummary(
            subject_id=subject_id,
            topic=self._topic,
            entries=self.entries,
            exchange_count=self.exchange_count,
        )

    def __len__(self) -> int:
        return len(self._entries)
