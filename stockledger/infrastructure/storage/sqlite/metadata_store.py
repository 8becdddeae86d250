"""SQLite key/value metadata, holding the last-modified marker."""

from datetime import datetime

from stockledger.config import get_logger
from stockledger.core.interfaces.document_store import IMetadataStore
from stockledger.core.services.document_commit import ChangeEvent
from stockledger.infrastructure.storage.sqlite.base import (
    SQLiteStore,
    parse_timestamp,
    utcnow,
)

logger = get_logger(__name__)

LAST_MODIFIED_KEY = "last_modified"


class SQLiteMetadataStore(SQLiteStore, IMetadataStore):
    async def get_last_modified(self) -> datetime | None:
        async with self._reader() as conn:
            cursor = await conn.execute(
                "SELECT value FROM metadata WHERE key = ?", (LAST_MODIFIED_KEY,)
            )
            row = await cursor.fetchone()
            return parse_timestamp(row["value"]) if row else None

    async def set_last_modified(self, timestamp: datetime) -> None:
        # The marker only moves forward
        async with self._writer() as conn:
            await conn.execute(
                """
                INSERT INTO metadata (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                WHERE excluded.value > metadata.value
                """,
                (LAST_MODIFIED_KEY, timestamp.isoformat(), utcnow().isoformat()),
            )


class LastModifiedTracker:
    """
    Change listener that persists the last-modified marker.

    Sync and export collaborators poll the marker to find out whether
    anything changed since they last looked.
    """

    def __init__(self, store: IMetadataStore | None = None):
        self._store = store or SQLiteMetadataStore()

    async def __call__(self, event: ChangeEvent) -> None:
        await self._store.set_last_modified(event.occurred_at)
        logger.debug(
            "last_modified_updated",
            entity=event.entity,
            entity_id=event.entity_id,
            action=event.action,
        )
