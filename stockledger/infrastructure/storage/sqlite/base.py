"""Shared plumbing for SQLite stores."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import aiosqlite

from stockledger.infrastructure.storage.sqlite.connection import get_connection, get_transaction


def utcnow() -> datetime:
    return datetime.now(UTC)


def parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value)


class SQLiteStore:
    """
    Base for stores that run standalone or inside an open transaction.

    Unbound stores take a pooled connection per call and commit their own
    writes. A store bound to a connection reads and writes through it and
    leaves commit and rollback to whoever opened the transaction.
    """

    def __init__(self, conn: aiosqlite.Connection | None = None):
        self._conn = conn

    @property
    def is_bound(self) -> bool:
        return self._conn is not None

    @asynccontextmanager
    async def _reader(self) -> AsyncIterator[aiosqlite.Connection]:
        if self._conn is not None:
            yield self._conn
        else:
            async with get_connection() as conn:
                yield conn

    @asynccontextmanager
    async def _writer(self) -> AsyncIterator[aiosqlite.Connection]:
        if self._conn is not None:
            yield self._conn
        else:
            async with get_transaction() as conn:
                yield conn
