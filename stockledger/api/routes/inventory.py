"""Inventory ledger, movement history and manual adjustment endpoints."""

from fastapi import APIRouter, Depends, status

from stockledger.api.dependencies import (
    get_adjust_stock_use_case,
    get_documents,
    get_ledger,
    get_ledger_reconciler,
    get_metadata,
    get_movements,
)
from stockledger.application.dto.converters import (
    adjustment_to_response,
    movement_to_response,
    reconciliation_to_response,
    record_to_response,
)
from stockledger.application.dto.requests import (
    AdjustStockRequest,
    UpdateInventoryRecordRequest,
)
from stockledger.application.dto.responses import (
    AdjustmentCommitResponse,
    AdjustmentListResponse,
    ErrorResponse,
    InventoryListResponse,
    InventoryRecordResponse,
    LastModifiedResponse,
    MovementResponse,
    ReconciliationResponse,
)
from stockledger.application.use_cases.adjust_stock import AdjustStockUseCase
from stockledger.core.entities.documents import DocumentKind
from stockledger.core.exceptions import InventoryRecordNotFoundError
from stockledger.core.interfaces import (
    IDocumentStore,
    IInventoryLedger,
    IMetadataStore,
    IMovementLog,
)
from stockledger.core.services import LedgerReconciler

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get("", response_model=InventoryListResponse)
async def list_inventory(
    limit: int = 100,
    offset: int = 0,
    ledger: IInventoryLedger = Depends(get_ledger),
) -> InventoryListResponse:
    """Current stock level of every SKU."""
    records = await ledger.list_records(limit=limit, offset=offset)
    return InventoryListResponse(
        items=[record_to_response(r) for r in records],
        limit=limit,
        offset=offset,
        has_more=len(records) == limit,
    )


@router.get("/low-stock", response_model=InventoryListResponse)
async def list_low_stock(
    limit: int = 100,
    offset: int = 0,
    ledger: IInventoryLedger = Depends(get_ledger),
) -> InventoryListResponse:
    """SKUs at or below their minimum threshold."""
    records = await ledger.list_low_stock(limit=limit, offset=offset)
    return InventoryListResponse(
        items=[record_to_response(r) for r in records],
        limit=limit,
        offset=offset,
        has_more=len(records) == limit,
    )


@router.get("/movements", response_model=list[MovementResponse])
async def list_movements(
    limit: int = 100,
    offset: int = 0,
    movements: IMovementLog = Depends(get_movements),
) -> list[MovementResponse]:
    """All stock movements, newest first."""
    return [movement_to_response(m) for m in await movements.list_all(limit, offset)]


@router.get("/last-modified", response_model=LastModifiedResponse)
async def get_last_modified(
    metadata: IMetadataStore = Depends(get_metadata),
    documents: IDocumentStore = Depends(get_documents),
) -> LastModifiedResponse:
    """Change marker for sync and export collaborators."""
    return LastModifiedResponse(
        last_modified=await metadata.get_last_modified(),
        is_empty=await documents.is_empty(),
    )


@router.get("/reconciliation", response_model=ReconciliationResponse)
async def reconcile_ledger(
    reconciler: LedgerReconciler = Depends(get_ledger_reconciler),
) -> ReconciliationResponse:
    """Compare every stock level with its movement total."""
    return reconciliation_to_response(await reconciler.reconcile())


@router.post(
    "/adjustments",
    response_model=AdjustmentCommitResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def adjust_stock(
    request: AdjustStockRequest,
    use_case: AdjustStockUseCase = Depends(get_adjust_stock_use_case),
) -> AdjustmentCommitResponse:
    """Record a signed manual correction."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("/adjustments", response_model=AdjustmentListResponse)
async def list_adjustments(
    limit: int = 100,
    offset: int = 0,
    documents: IDocumentStore = Depends(get_documents),
) -> AdjustmentListResponse:
    items = await documents.list_documents(DocumentKind.ADJUSTMENT, limit, offset)
    return AdjustmentListResponse(
        items=[adjustment_to_response(a) for a in items],
        limit=limit,
        offset=offset,
        has_more=len(items) == limit,
    )


@router.get(
    "/{sku}",
    response_model=InventoryRecordResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_inventory_record(
    sku: str,
    ledger: IInventoryLedger = Depends(get_ledger),
) -> InventoryRecordResponse:
    record = await ledger.get(sku)
    if record is None:
        raise InventoryRecordNotFoundError(sku)
    return record_to_response(record)


@router.patch(
    "/{sku}",
    response_model=InventoryRecordResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_inventory_record(
    sku: str,
    request: UpdateInventoryRecordRequest,
    ledger: IInventoryLedger = Depends(get_ledger),
) -> InventoryRecordResponse:
    """Edit name, category, unit or threshold. Stock only changes through movements."""
    record = await ledger.get(sku)
    if record is None:
        raise InventoryRecordNotFoundError(sku)
    changes = request.model_dump(exclude_none=True)
    updated = await ledger.update_details(record.model_copy(update=changes))
    return record_to_response(updated)


@router.get("/{sku}/movements", response_model=list[MovementResponse])
async def get_sku_movements(
    sku: str,
    limit: int = 100,
    movements: IMovementLog = Depends(get_movements),
) -> list[MovementResponse]:
    """Movement history of one SKU, newest first."""
    return [movement_to_response(m) for m in await movements.list_for_sku(sku, limit)]
