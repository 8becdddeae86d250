"""SQLite transaction manager binding every store to one connection."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from stockledger.config.settings import LedgerSettings
from stockledger.core.interfaces.transaction import ITransactionManager, StoreSession
from stockledger.infrastructure.storage.sqlite.catalog_store import SQLiteCatalogStore
from stockledger.infrastructure.storage.sqlite.connection import get_transaction
from stockledger.infrastructure.storage.sqlite.document_store import SQLiteDocumentStore
from stockledger.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryLedger
from stockledger.infrastructure.storage.sqlite.movement_log import SQLiteMovementLog


class SQLiteTransactionManager(ITransactionManager):
    """
    Opens a BEGIN IMMEDIATE transaction and hands out stores bound to it.

    Lock contention surfaces as TransactionConflictError from the
    connection pool.
    """

    def __init__(self, settings: LedgerSettings | None = None):
        self._settings = settings

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[StoreSession]:
        async with get_transaction(immediate=True) as conn:
            yield StoreSession(
                catalog=SQLiteCatalogStore(conn),
                ledger=SQLiteInventoryLedger(conn, self._settings),
                movements=SQLiteMovementLog(conn),
                documents=SQLiteDocumentStore(conn),
            )

    @asynccontextmanager
    async def read_transaction(self) -> AsyncIterator[StoreSession]:
        # Under WAL a deferred transaction reads one snapshot until it ends
        async with get_transaction(immediate=False) as conn:
            yield StoreSession(
                catalog=SQLiteCatalogStore(conn),
                ledger=SQLiteInventoryLedger(conn, self._settings),
                movements=SQLiteMovementLog(conn),
                documents=SQLiteDocumentStore(conn),
            )
