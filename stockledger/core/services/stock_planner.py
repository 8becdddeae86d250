"""
Movement planning.

Turns a source document into the signed movements its commit must write.
Pure functions: catalog entries are looked up by the caller and passed in,
so the same plan is produced inside and outside a transaction.
"""

from collections import Counter
from dataclasses import dataclass

from stockledger.core.entities.catalog import CatalogEntry, ItemCategory
from stockledger.core.entities.documents import (
    ExpenseDocument,
    LineItem,
    ManualAdjustment,
    ProductionOrder,
    SalesDocument,
    SourceDocument,
)
from stockledger.core.entities.inventory import MovementKind
from stockledger.core.services.bom_resolver import CatalogBOMResolver
from stockledger.core.services.effect_rules import (
    adjustment_effect,
    line_effect,
    production_effects,
)


@dataclass(frozen=True)
class PlannedMovement:
    """A movement the commit will record, plus what provisioning needs."""

    sku: str
    kind: MovementKind
    quantity: float
    name: str
    category: ItemCategory
    line_index: int | None = None
    note: str | None = None


def _fmt(quantity: float) -> str:
    return f"{quantity:g}"


def effective_quantity(document: ExpenseDocument | SalesDocument, line: LineItem) -> float:
    """Quantity a line moves; purchase lines without a quantity count as one unit."""
    if line.quantity is None:
        return 1.0 if isinstance(document, ExpenseDocument) else 0.0
    return line.quantity


def pending_lines(
    document: ExpenseDocument | SalesDocument,
) -> list[tuple[int, str, LineItem]]:
    """Linked, not yet stocked lines with a positive quantity, as (index, sku, line)."""
    pending = []
    for index, line in enumerate(document.line_items):
        sku = line.linked_sku
        if sku is None or line.is_stocked:
            continue
        if effective_quantity(document, line) <= 0:
            continue
        pending.append((index, sku, line))
    return pending


def plan_lines(
    document: ExpenseDocument | SalesDocument,
    catalog: dict[str, CatalogEntry | None],
    default_category: ItemCategory = ItemCategory.OTHER,
) -> list[PlannedMovement]:
    effect = line_effect(document)
    if effect is None:
        return []

    plan = []
    for index, sku, line in pending_lines(document):
        entry = catalog.get(sku)
        plan.append(
            PlannedMovement(
                sku=sku,
                kind=effect.movement_kind,
                quantity=effect.sign * effective_quantity(document, line),
                name=entry.name if entry else line.description,
                category=entry.category if entry else (line.category or default_category),
                line_index=index,
            )
        )
    return plan


def plan_production(
    order: ProductionOrder,
    product: CatalogEntry,
    catalog: dict[str, CatalogEntry | None],
    default_category: ItemCategory = ItemCategory.OTHER,
) -> list[PlannedMovement]:
    effects = production_effects(order)
    if effects is None or order.is_stocked:
        return []
    consumption, output = effects

    plan = []
    for sku, required in CatalogBOMResolver.required_consumption(product, order.quantity):
        entry = catalog.get(sku)
        plan.append(
            PlannedMovement(
                sku=sku,
                kind=consumption.movement_kind,
                quantity=consumption.sign * required,
                name=entry.name if entry else sku,
                category=entry.category if entry else default_category,
                note=f"Consumption for {_fmt(order.quantity)} units of {product.sku}",
            )
        )
    plan.append(
        PlannedMovement(
            sku=product.sku,
            kind=output.movement_kind,
            quantity=output.sign * order.quantity,
            name=product.name,
            category=product.category,
            note=f"Output run #{order.id[-6:]}",
        )
    )
    return plan


def plan_adjustment(adjustment: ManualAdjustment) -> list[PlannedMovement]:
    if adjustment.is_stocked:
        return []
    effect = adjustment_effect(adjustment)
    sku = adjustment.sku.strip()
    return [
        PlannedMovement(
            sku=sku,
            kind=effect.movement_kind,
            quantity=effect.sign * adjustment.quantity,
            name=adjustment.name or sku,
            category=adjustment.category,
            note=adjustment.note or "Manual stock adjustment",
        )
    ]


def mark_stocked(document: SourceDocument, plan: list[PlannedMovement]) -> SourceDocument:
    """Copy of ``document`` with the planned lines flagged as stocked."""
    updated = document.model_copy(deep=True)
    if isinstance(updated, ExpenseDocument | SalesDocument):
        for planned in plan:
            if planned.line_index is not None:
                updated.line_items[planned.line_index].is_stocked = True
    elif plan:
        updated.is_stocked = True
    return updated


def carry_stored_state(
    document: SourceDocument, stored: SourceDocument | None
) -> SourceDocument:
    """
    Copy of ``document`` with its stocked flags taken from the stored version.

    Each stocked stored line marks one line with the same SKU as stocked, so
    an edit of an applied document only moves newly linked lines. Without a
    stored version the document is returned as given.
    """
    if stored is None:
        return document

    updated = document.model_copy(deep=True)
    if isinstance(updated, ExpenseDocument | SalesDocument):
        stocked = Counter(
            line.linked_sku
            for line in stored.line_items
            if line.is_stocked and line.linked_sku
        )
        for line in updated.line_items:
            sku = line.linked_sku
            line.is_stocked = sku is not None and stocked[sku] > 0
            if line.is_stocked:
                stocked[sku] -= 1
        updated.created_at = stored.created_at
    else:
        updated.is_stocked = stored.is_stocked
        if isinstance(updated, ManualAdjustment):
            updated.created_at = stored.created_at
    return updated
