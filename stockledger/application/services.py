"""
Service factory functions for dependency injection.

This module provides factory functions that wire infrastructure
implementations to core services. Use cases should import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from typing import TYPE_CHECKING

from stockledger.core.services import (
    CatalogBOMResolver,
    DocumentCommitService,
    LedgerReconciler,
)

if TYPE_CHECKING:
    from stockledger.core.interfaces import (
        ICatalogStore,
        IInventoryLedger,
        ITransactionManager,
    )


# Singleton service instances
_commit_service: DocumentCommitService | None = None
_bom_resolver: CatalogBOMResolver | None = None
_reconciler: LedgerReconciler | None = None


async def get_commit_service(
    transactions: "ITransactionManager | None" = None,
    catalog: "ICatalogStore | None" = None,
    ledger: "IInventoryLedger | None" = None,
) -> DocumentCommitService:
    """
    Get or create DocumentCommitService instance.

    The shared instance notifies the last-modified tracker after each
    commit. Services built with overrides get no listeners.

    Args:
        transactions: Optional transaction manager override
        catalog: Optional catalog store override
        ledger: Optional inventory ledger override

    Returns:
        Configured DocumentCommitService
    """
    global _commit_service

    overridden = transactions is not None or catalog is not None or ledger is not None
    if _commit_service is not None and not overridden:
        return _commit_service

    # Lazy import infrastructure
    from stockledger.infrastructure.storage.sqlite import (
        LastModifiedTracker,
        get_catalog_store,
        get_inventory_ledger,
        get_metadata_store,
        get_transaction_manager,
    )

    service = DocumentCommitService(
        transactions=transactions or await get_transaction_manager(),
        catalog=catalog or await get_catalog_store(),
        ledger=ledger or await get_inventory_ledger(),
    )

    if not overridden:
        service.add_listener(LastModifiedTracker(await get_metadata_store()))
        _commit_service = service

    return service


async def get_bom_resolver(catalog: "ICatalogStore | None" = None) -> CatalogBOMResolver:
    """Get or create the catalog/BOM resolver."""
    global _bom_resolver

    if _bom_resolver is not None and catalog is None:
        return _bom_resolver

    from stockledger.infrastructure.storage.sqlite import get_catalog_store

    resolver = CatalogBOMResolver(catalog or await get_catalog_store())
    if catalog is None:
        _bom_resolver = resolver
    return resolver


async def get_reconciler(
    transactions: "ITransactionManager | None" = None,
) -> LedgerReconciler:
    """Get or create the ledger reconciler."""
    global _reconciler

    overridden = transactions is not None
    if _reconciler is not None and not overridden:
        return _reconciler

    from stockledger.infrastructure.storage.sqlite import get_transaction_manager

    reconciler = LedgerReconciler(transactions or await get_transaction_manager())
    if not overridden:
        _reconciler = reconciler
    return reconciler


def reset_services() -> None:
    """
    Reset all singleton service instances.

    Useful for testing or when configuration changes.
    """
    global _commit_service
    global _bom_resolver
    global _reconciler

    _commit_service = None
    _bom_resolver = None
    _reconciler = None
