"""
Dependency injection container for FastAPI.

Provides store, service and use case instances to route handlers.
"""

from stockledger.application.services import (
    get_commit_service,
    get_reconciler,
)
from stockledger.application.use_cases import (
    AdjustStockUseCase,
    CompleteProductionUseCase,
    SaveCatalogItemUseCase,
    SaveExpenseUseCase,
    SaveSalesDocumentUseCase,
)
from stockledger.core.interfaces import (
    ICatalogStore,
    IDocumentStore,
    IInventoryLedger,
    IMetadataStore,
    IMovementLog,
)
from stockledger.core.services import DocumentCommitService, LedgerReconciler
from stockledger.infrastructure.storage.sqlite import (
    get_catalog_store,
    get_document_store,
    get_inventory_ledger,
    get_metadata_store,
    get_movement_log,
)


# Store dependencies
async def get_catalog() -> ICatalogStore:
    """Get catalog store."""
    return await get_catalog_store()

async def get_ledger() -> IInventoryLedger:
    """Get inventory ledger."""
    return await get_inventory_ledger()

async def get_movements() -> IMovementLog:
    """Get movement log."""
    return await get_movement_log()

async def get_documents() -> IDocumentStore:
    """Get source document store."""
    return await get_document_store()

async def get_metadata() -> IMetadataStore:
    """Get metadata store."""
    return await get_metadata_store()

# Service dependencies
async def get_commit() -> DocumentCommitService:
    """Get document commit service."""
    return await get_commit_service()

async def get_ledger_reconciler() -> LedgerReconciler:
    """Get ledger reconciler."""
    return await get_reconciler()

# Use case dependencies
def get_save_expense_use_case() -> SaveExpenseUseCase:
    """Get save expense use case."""
    return SaveExpenseUseCase()

def get_save_sales_document_use_case() -> SaveSalesDocumentUseCase:
    """Get save sales document use case."""
    return SaveSalesDocumentUseCase()

def get_complete_production_use_case() -> CompleteProductionUseCase:
    """Get complete production use case."""
    return CompleteProductionUseCase()

def get_adjust_stock_use_case() -> AdjustStockUseCase:
    """Get adjust stock use case."""
    return AdjustStockUseCase()

def get_save_catalog_item_use_case() -> SaveCatalogItemUseCase:
    """Get save catalog item use case."""
    return SaveCatalogItemUseCase()
