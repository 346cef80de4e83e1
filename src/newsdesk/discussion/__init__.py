"""Spoken discussion turn-taking."""

from newsdesk.discussion.coordinator import DiscussionCoordinator
from newsdesk.discussion.session import ConversationSession, DiscussionArchive, topic_for
from newsdesk.discussion.state import DiscussionState

__all__ = [
    "ConversationSession",
    "DiscussionArchive",
    "DiscussionCoordinator",
    "DiscussionState",
    "topic_for",
]
