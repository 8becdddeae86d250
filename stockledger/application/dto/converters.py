"""Entity to response DTO conversion shared by use cases and routes."""

from stockledger.application.dto.responses import (
    AdjustmentResponse,
    CatalogItemResponse,
    CommitSummary,
    ExpenseResponse,
    InventoryRecordResponse,
    LedgerDriftResponse,
    MovementResponse,
    ProductionOrderResponse,
    ReconciliationResponse,
    SalesDocumentResponse,
    ShortageResponse,
)
from stockledger.core.entities.catalog import CatalogEntry
from stockledger.core.entities.documents import (
    ExpenseDocument,
    ManualAdjustment,
    ProductionOrder,
    SalesDocument,
)
from stockledger.core.entities.inventory import InventoryRecord, Movement, StockShortage
from stockledger.core.services.document_commit import CommitResult
from stockledger.core.services.reconciliation import ReconciliationReport


def record_to_response(record: InventoryRecord) -> InventoryRecordResponse:
    return InventoryRecordResponse(
        **record.model_dump(mode="json"),
        is_low_stock=record.is_low_stock,
    )


def movement_to_response(movement: Movement) -> MovementResponse:
    return MovementResponse.model_validate(movement.model_dump(mode="json"))


def expense_to_response(document: ExpenseDocument) -> ExpenseResponse:
    return ExpenseResponse.model_validate(document.model_dump(mode="json"))


def sales_to_response(document: SalesDocument) -> SalesDocumentResponse:
    return SalesDocumentResponse.model_validate(document.model_dump(mode="json"))


def production_to_response(order: ProductionOrder) -> ProductionOrderResponse:
    return ProductionOrderResponse.model_validate(order.model_dump(mode="json"))


def adjustment_to_response(adjustment: ManualAdjustment) -> AdjustmentResponse:
    return AdjustmentResponse.model_validate(adjustment.model_dump(mode="json"))


def catalog_to_response(entry: CatalogEntry) -> CatalogItemResponse:
    return CatalogItemResponse.model_validate(entry.model_dump(mode="json"))


def shortage_to_response(shortage: StockShortage) -> ShortageResponse:
    return ShortageResponse(**shortage.to_dict())


def commit_summary(result: CommitResult) -> dict:
    """Fields of a commit response shared by every document kind."""
    return CommitSummary(
        movements=[movement_to_response(m) for m in result.movements],
        records=[record_to_response(r) for r in result.records],
        committed_at=result.committed_at,
        attempts=result.attempts,
        stock_changed=result.stock_changed,
    ).model_dump()


def reconciliation_to_response(report: ReconciliationReport) -> ReconciliationResponse:
    return ReconciliationResponse(
        checked=report.checked,
        consistent=report.is_consistent,
        drifts=[LedgerDriftResponse(**d.to_dict()) for d in report.drifts],
        generated_at=report.generated_at,
    )
