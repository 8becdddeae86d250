"""
SQLite implementation of source document storage.

Documents are stored whole as a JSON payload keyed by (kind, id), with the
status and creation time pulled out into columns for listing.
"""

from datetime import datetime

from pydantic import TypeAdapter

from stockledger.config import get_logger
from stockledger.core.entities.documents import (
    DocumentKind,
    ProductionOrder,
    SourceDocument,
    document_status,
)
from stockledger.core.interfaces.document_store import IDocumentStore
from stockledger.infrastructure.storage.sqlite.base import SQLiteStore, utcnow

logger = get_logger(__name__)

_document_adapter: TypeAdapter[SourceDocument] = TypeAdapter(SourceDocument)


def _created_at(document: SourceDocument) -> datetime:
    if isinstance(document, ProductionOrder):
        return document.run_date
    return document.created_at


class SQLiteDocumentStore(SQLiteStore, IDocumentStore):
    """SQLite implementation of source document storage."""

    async def save(self, document: SourceDocument) -> SourceDocument:
        """Create or replace a document."""
        kind = DocumentKind(document.kind)
        async with self._writer() as conn:
            await conn.execute(
                """
                INSERT INTO source_documents (
                    kind, id, status, payload, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(kind, id) DO UPDATE SET
                    status = excluded.status,
                    payload = excluded.payload,
                    updated_at = excluded.updated_at
                """,
                (
                    kind.value,
                    document.id,
                    document_status(document),
                    document.model_dump_json(),
                    _created_at(document).isoformat(),
                    utcnow().isoformat(),
                ),
            )
        logger.debug("document_saved", document_kind=kind.value, document_id=document.id)
        return document

    async def get(self, kind: DocumentKind, doc_id: str) -> SourceDocument | None:
        async with self._reader() as conn:
            cursor = await conn.execute(
                "SELECT payload FROM source_documents WHERE kind = ? AND id = ?",
                (kind.value, doc_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return _document_adapter.validate_json(row["payload"])

    async def list_documents(
        self, kind: DocumentKind, limit: int = 100, offset: int = 0
    ) -> list[SourceDocument]:
        async with self._reader() as conn:
            cursor = await conn.execute(
                """
                SELECT payload FROM source_documents
                WHERE kind = ?
                ORDER BY created_at DESC, id
                LIMIT ? OFFSET ?
                """,
                (kind.value, limit, offset),
            )
            rows = await cursor.fetchall()
            return [_document_adapter.validate_json(row["payload"]) for row in rows]

    async def delete(self, kind: DocumentKind, doc_id: str) -> bool:
        async with self._writer() as conn:
            cursor = await conn.execute(
                "DELETE FROM source_documents WHERE kind = ? AND id = ?",
                (kind.value, doc_id),
            )
            return cursor.rowcount > 0

    async def is_empty(self) -> bool:
        async with self._reader() as conn:
            cursor = await conn.execute(
                """
                SELECT 1 FROM source_documents
                WHERE kind IN (?, ?)
                LIMIT 1
                """,
                (DocumentKind.EXPENSE.value, DocumentKind.SALES.value),
            )
            return await cursor.fetchone() is None
