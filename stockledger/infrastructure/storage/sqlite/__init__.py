"""SQLite storage implementations."""

from stockledger.infrastructure.storage.sqlite.catalog_store import SQLiteCatalogStore
from stockledger.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from stockledger.infrastructure.storage.sqlite.document_store import SQLiteDocumentStore
from stockledger.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryLedger
from stockledger.infrastructure.storage.sqlite.metadata_store import (
    LastModifiedTracker,
    SQLiteMetadataStore,
)
from stockledger.infrastructure.storage.sqlite.movement_log import SQLiteMovementLog
from stockledger.infrastructure.storage.sqlite.transaction_manager import (
    SQLiteTransactionManager,
)

# Singleton instances
_catalog_store: SQLiteCatalogStore | None = None
_inventory_ledger: SQLiteInventoryLedger | None = None
_movement_log: SQLiteMovementLog | None = None
_document_store: SQLiteDocumentStore | None = None
_metadata_store: SQLiteMetadataStore | None = None
_transaction_manager: SQLiteTransactionManager | None = None


async def get_catalog_store() -> SQLiteCatalogStore:
    """Get singleton catalog store instance."""
    global _catalog_store
    if _catalog_store is None:
        _catalog_store = SQLiteCatalogStore()
    return _catalog_store


async def get_inventory_ledger() -> SQLiteInventoryLedger:
    """Get singleton inventory ledger instance."""
    global _inventory_ledger
    if _inventory_ledger is None:
        _inventory_ledger = SQLiteInventoryLedger()
    return _inventory_ledger


async def get_movement_log() -> SQLiteMovementLog:
    """Get singleton movement log instance."""
    global _movement_log
    if _movement_log is None:
        _movement_log = SQLiteMovementLog()
    return _movement_log


async def get_document_store() -> SQLiteDocumentStore:
    """Get singleton document store instance."""
    global _document_store
    if _document_store is None:
        _document_store = SQLiteDocumentStore()
    return _document_store


async def get_metadata_store() -> SQLiteMetadataStore:
    """Get singleton metadata store instance."""
    global _metadata_store
    if _metadata_store is None:
        _metadata_store = SQLiteMetadataStore()
    return _metadata_store


async def get_transaction_manager() -> SQLiteTransactionManager:
    """Get singleton transaction manager instance."""
    global _transaction_manager
    if _transaction_manager is None:
        _transaction_manager = SQLiteTransactionManager()
    return _transaction_manager


def reset_stores() -> None:
    """Drop singleton stores (for testing)."""
    global _catalog_store, _inventory_ledger, _movement_log
    global _document_store, _metadata_store, _transaction_manager
    _catalog_store = None
    _inventory_ledger = None
    _movement_log = None
    _document_store = None
    _metadata_store = None
    _transaction_manager = None


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteCatalogStore",
    "SQLiteInventoryLedger",
    "SQLiteMovementLog",
    "SQLiteDocumentStore",
    "SQLiteMetadataStore",
    "SQLiteTransactionManager",
    "LastModifiedTracker",
    # Factory functions
    "get_catalog_store",
    "get_inventory_ledger",
    "get_movement_log",
    "get_document_store",
    "get_metadata_store",
    "get_transaction_manager",
    "reset_stores",
]
