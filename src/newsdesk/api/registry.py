import logging
import uuid

from fastapi import HTTPException

from newsdesk.discussion import DiscussionCoordinator

logger = logging.getLogger(__name__)


class DiscussionRegistry:
    """Live discussions of this process, keyed by discussion id."""

    def __init__(self) -> None:
        self._discussions: dict[str, DiscussionCoordinator] = {}

    def add(self, coordinator: DiscussionCoordinator) -> str:
        discussion_id = uuid.uuid4().hex
        self._discussions[discussion_id] = coordinator
        return discussion_id

    def get(self, discussion_id: str) -> DiscussionCoordinator:
        coordinator = self._discussions.get(discussion_id)
        if coordinator is None:
            raise HTTPException(status_code=404, detail=f"Unknown discussion: {discussion_id}")
        return coordinator

    async def close(self, discussion_id: str) -> str | None:
        """Reset a discussion, flushing its history, and forget it."""
        coordinator = self.get(discussion_id)
        history_id = await coordinator.reset()
        del self._discussions[discussion_id]
        return history_id

    async def close_all(self) -> None:
        for discussion_id, coordinator in list(self._discussions.items()):
            try:
                await coordinator.reset()
            except Exception as e:
                logger.warning("Could not close discussion %s: %s", discussion_id, e)
        self._discussions.clear()

    def __len__(self) -> int:
        return len(self._discussions)

    def __contains__(self, discussion_id: str) -> bool:
        return discussion_id in self._discussions
