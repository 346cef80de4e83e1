"""HTTP API over the newsdesk components."""

from newsdesk.api.app import create_app
from newsdesk.api.errors import status_for
from newsdesk.api.registry import DiscussionRegistry

__all__ = ["DiscussionRegistry", "create_app", "status_for"]
