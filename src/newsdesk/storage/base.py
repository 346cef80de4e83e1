from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class Document:
    """A stored JSON document and its generated id."""

    id: str
    data: dict[str, Any]


class DocumentStore(Protocol):
    """Collection-scoped document persistence."""

    async def init(self) -> None:
        """Open the store and create its schema."""
        ...

    async def close(self) -> None:
        """Release the underlying connection."""
        ...

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        """Insert a document and return its id."""
        ...

    async def get(self, collection: str, doc_id: str) -> Document | None:
        """Fetch one document by id."""
        ...

    async def query(
        self,
        collection: str,
        *,
        where: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Document]:
        """Find documents whose top-level fields equal every ``where`` value."""
        ...

    async def count(self, collection: str, *, where: dict[str, Any] | None = None) -> int:
        """Count documents matching ``where``."""
        ...

    async def delete(self, collection: str, doc_id: str) -> bool:
        """Delete one document. Returns False if it did not exist."""
        ...
