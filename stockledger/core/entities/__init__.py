"""Core domain entities."""

from stockledger.core.entities.catalog import (
    BOMComponent,
    CatalogEntry,
    ItemCategory,
    ItemKind,
)
from stockledger.core.entities.documents import (
    DocumentKind,
    ExpenseDocument,
    ExpenseType,
    LineItem,
    ManualAdjustment,
    ProductionOrder,
    ProductionStatus,
    PurchaseStatus,
    SalesDocType,
    SalesDocument,
    SalesStatus,
    SourceDocument,
    document_status,
)
from stockledger.core.entities.inventory import (
    InventoryRecord,
    Movement,
    MovementKind,
    StockShortage,
)

__all__ = [
    # Catalog
    "BOMComponent",
    "CatalogEntry",
    "ItemCategory",
    "ItemKind",
    # Documents
    "DocumentKind",
    "ExpenseDocument",
    "ExpenseType",
    "LineItem",
    "ManualAdjustment",
    "ProductionOrder",
    "ProductionStatus",
    "PurchaseStatus",
    "SalesDocType",
    "SalesDocument",
    "SalesStatus",
    "SourceDocument",
    "document_status",
    # Inventory
    "InventoryRecord",
    "Movement",
    "MovementKind",
    "StockShortage",
]
