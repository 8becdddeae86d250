"""Core interfaces (ports) for dependency injection."""

from stockledger.core.interfaces.catalog_store import ICatalogStore
from stockledger.core.interfaces.document_store import IDocumentStore, IMetadataStore
from stockledger.core.interfaces.inventory_store import IInventoryLedger, IMovementLog
from stockledger.core.interfaces.transaction import ITransactionManager, StoreSession

__all__ = [
    "ICatalogStore",
    "IDocumentStore",
    "IMetadataStore",
    "IInventoryLedger",
    "IMovementLog",
    "ITransactionManager",
    "StoreSession",
]
