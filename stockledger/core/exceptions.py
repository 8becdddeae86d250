"""
Domain exceptions for the stock ledger.

Every failure of a commit surfaces to the caller as one of these types.
"""

from typing import Any


class StockLedgerError(Exception):
    """Base exception for all stock ledger errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(StockLedgerError):
    """Base exception for storage operations."""

    pass


class DocumentNotFoundError(StorageError):
    """Source document not found in storage."""

    def __init__(self, kind: str, doc_id: str):
        super().__init__(
            f"{kind.capitalize()} document not found: {doc_id}",
            code="DOCUMENT_NOT_FOUND",
            details={"kind": kind, "doc_id": doc_id},
        )


class InventoryRecordNotFoundError(StorageError):
    """No inventory record exists for the SKU."""

    def __init__(self, sku: str):
        super().__init__(
            f"Inventory record not found: {sku}",
            code="INVENTORY_RECORD_NOT_FOUND",
            details={"sku": sku},
        )


class TransactionConflictError(StorageError):
    """The store rejected a transaction because of contention."""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            f"Transaction conflict during {operation}: {reason}",
            code="TRANSACTION_CONFLICT",
            details={"operation": operation, "reason": reason},
        )


# Catalog Exceptions
class CatalogError(StockLedgerError):
    """Base exception for catalog and bill-of-materials problems."""

    pass


class CatalogItemNotFoundError(CatalogError):
    """Catalog entry not found."""

    def __init__(self, sku: str):
        super().__init__(
            f"Catalog item not found: {sku}",
            code="CATALOG_ITEM_NOT_FOUND",
            details={"sku": sku},
        )


class CatalogReferenceError(CatalogError):
    """A line item links a SKU that the catalog does not define."""

    def __init__(self, sku: str, reference_id: str):
        super().__init__(
            f"SKU '{sku}' on document {reference_id} is not in the catalog",
            code="CATALOG_REFERENCE_ERROR",
            details={"sku": sku, "reference_id": reference_id},
        )


class BOMNotDefinedError(CatalogError):
    """Production requested for an item without a bill of materials."""

    def __init__(self, sku: str):
        super().__init__(
            f"No BOM defined for {sku}",
            code="BOM_NOT_DEFINED",
            details={"sku": sku},
        )


class BOMCycleError(CatalogError):
    """Bill of materials refers back to its own product."""

    def __init__(self, sku: str, path: list[str]):
        super().__init__(
            f"BOM for {sku} is cyclic: {' -> '.join(path)}",
            code="BOM_CYCLE",
            details={"sku": sku, "path": path},
        )


# Stock Exceptions
class StockError(StockLedgerError):
    """Base exception for stock level problems."""

    pass


class ShortageError(StockError):
    """Ingredient stock cannot cover a production run."""

    def __init__(self, product_sku: str, shortages: list[dict[str, Any]]):
        skus = ", ".join(s["sku"] for s in shortages)
        super().__init__(
            f"Insufficient stock to produce {product_sku}: {skus}",
            code="INSUFFICIENT_STOCK",
            details={"product_sku": product_sku, "shortages": shortages},
        )
        self.shortages = shortages


# Validation Exceptions
class ValidationError(StockLedgerError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class ConfigurationError(StockLedgerError):
    """Configuration error."""

    pass
