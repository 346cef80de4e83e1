"""SQLite document store implementation."""

import json
import re
import uuid
from pathlib import Path
from typing import Any

import aiosqlite

from newsdesk.storage.base import Document

SCHEMA = """
CREATE TABLE IF NOT EXISTS documents (
    id TEXT PRIMARY KEY,
    collection TEXT NOT NULL,
    data TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);
CREATE INDEX IF NOT EXISTS idx_documents_collection ON documents (collection);
"""

_FIELD_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _field_path(name: str) -> str:
    if not _FIELD_NAME.match(name):
        raise ValueError(f"Invalid document field name: {name!r}")
    return f"$.{name}"


def _where_clause(collection: str, where: dict[str, Any] | None) -> tuple[str, list[Any]]:
    clauses = ["collection = ?"]
    params: list[Any] = [collection]
    for name, value in (where or {}).items():
        clauses.append("json_extract(data, ?) = ?")
        params.extend([_field_path(name), value])
    return " AND ".join(clauses), params


class SQLiteDocumentStore:
    """Stores JSON documents in a single SQLite table, keyed by collection."""

    def __init__(self, db_path: str | Path = ":memory:"):
        self._db_path = str(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def init(self) -> None:
        """Initialize database and create tables."""
        if self._db_path != ":memory:":
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = await aiosqlite.connect(self._db_path)
        await self._conn.executescript(SCHEMA)
        await self._conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    def _connection(self) -> aiosqlite.Connection:
        if not self._conn:
            raise RuntimeError("Storage not initialized")
        return self._conn

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        conn = self._connection()
        doc_id = uuid.uuid4().hex
        await conn.execute(
            "INSERT INTO documents (id, collection, data) VALUES (?, ?, ?)",
            (doc_id, collection, json.dumps(data)),
        )
        await conn.commit()
        return doc_id

    async def get(self, collection: str, doc_id: str) -> Document | None:
        conn = self._connection()
        cursor = await conn.execute(
            "SELECT id, data FROM documents WHERE collection = ? AND id = ?",
            (collection, doc_id),
        )
        row = await cursor.fetchone()
        if not row:
            return None
        return Document(id=row[0], data=json.loads(row[1]))

    async def query(
        self,
        collection: str,
        *,
        where: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Document]:
        conn = self._connection()
        clause, params = _where_clause(collection, where)
        sql = f"SELECT id, data FROM documents WHERE {clause}"
        direction = "DESC" if descending else "ASC"
        if order_by:
            sql += f" ORDER BY json_extract(data, ?) {direction}, rowid {direction}"
            params.append(_field_path(order_by))
        else:
            sql += " ORDER BY rowid ASC"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)

        cursor = await conn.execute(sql, params)
        rows = await cursor.fetchall()
        return [Document(id=row[0], data=json.loads(row[1])) for row in rows]

    async def count(self, collection: str, *, where: dict[str, Any] | None = None) -> int:
        conn = self._connection()
        clause, params = _where_clause(collection, where)
        cursor = await conn.execute(f"SELECT COUNT(*) FROM documents WHERE {clause}", params)
        row = await cursor.fetchone()
        return int(row[0]) if row else 0

    async def delete(self, collection: str, doc_id: str) -> bool:
        conn = self._connection()
        cursor = await conn.execute(
            "DELETE FROM documents WHERE collection = ? AND id = ?",
            (collection, doc_id),
        )
        await conn.commit()
        return cursor.rowcount > 0

    async def clear(self) -> None:
        """Remove every document."""
        conn = self._connection()
        await conn.execute("DELETE FROM documents")
        await conn.commit()
