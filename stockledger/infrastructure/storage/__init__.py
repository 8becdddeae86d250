"""Storage infrastructure implementations."""

from stockledger.infrastructure.storage.sqlite import (
    LastModifiedTracker,
    SQLiteCatalogStore,
    SQLiteDocumentStore,
    SQLiteInventoryLedger,
    SQLiteMetadataStore,
    SQLiteMovementLog,
    SQLiteTransactionManager,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteCatalogStore",
    "SQLiteInventoryLedger",
    "SQLiteMovementLog",
    "SQLiteDocumentStore",
    "SQLiteMetadataStore",
    "SQLiteTransactionManager",
    "LastModifiedTracker",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
