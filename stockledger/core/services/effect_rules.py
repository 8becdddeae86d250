"""
Stock effect table.

Maps a document's kind and state to the movement it produces and the sign
applied to its quantities. Documents matching no rule have no stock effect.
"""

from dataclasses import dataclass

from stockledger.core.entities.documents import (
    ExpenseDocument,
    ExpenseType,
    ManualAdjustment,
    ProductionOrder,
    ProductionStatus,
    PurchaseStatus,
    SalesDocType,
    SalesDocument,
    SalesStatus,
)
from stockledger.core.entities.inventory import MovementKind


@dataclass(frozen=True)
class StockEffect:
    """Movement kind and sign applied to a document's quantities."""

    movement_kind: MovementKind
    sign: int


RECEIPT = StockEffect(MovementKind.RECEIPT, +1)
DISPATCH = StockEffect(MovementKind.SALES_DISPATCH, -1)
RETURN = StockEffect(MovementKind.SALES_RETURN, +1)
CONSUMPTION = StockEffect(MovementKind.MANUFACTURING_CONSUMPTION, -1)
OUTPUT = StockEffect(MovementKind.MANUFACTURING_OUTPUT, +1)
ADJUSTMENT = StockEffect(MovementKind.MANUAL_ADJUSTMENT, +1)

# Issued sales documents by type; types absent here (quotation) move no stock.
SALES_EFFECTS: dict[SalesDocType, StockEffect] = {
    SalesDocType.SALES_INVOICE: DISPATCH,
    SalesDocType.DELIVERY_CHALLAN: DISPATCH,
    SalesDocType.PROFORMA: DISPATCH,
    SalesDocType.CREDIT_NOTE: RETURN,
}


def expense_effect(document: ExpenseDocument) -> StockEffect | None:
    if document.status == PurchaseStatus.CANCELLED:
        return None
    if document.type == ExpenseType.INVOICE or document.status == PurchaseStatus.RECEIVED:
        return RECEIPT
    return None


def sales_effect(document: SalesDocument) -> StockEffect | None:
    if document.status != SalesStatus.ISSUED:
        return None
    return SALES_EFFECTS.get(document.type)


def production_effects(order: ProductionOrder) -> tuple[StockEffect, StockEffect] | None:
    """(consumption, output) effects for a completed run."""
    if order.status != ProductionStatus.COMPLETED:
        return None
    return CONSUMPTION, OUTPUT


def adjustment_effect(adjustment: ManualAdjustment) -> StockEffect:
    # the user-entered quantity already carries its sign
    return ADJUSTMENT


def line_effect(document: ExpenseDocument | SalesDocument) -> StockEffect | None:
    """Effect applied to each eligible line of an expense or sales document."""
    if isinstance(document, ExpenseDocument):
        return expense_effect(document)
    return sales_effect(document)
