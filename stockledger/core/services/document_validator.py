"""Business validation of source documents before they are committed."""

import math

from stockledger.core.entities.documents import (
    ExpenseDocument,
    ManualAdjustment,
    ProductionOrder,
    SalesDocument,
    SourceDocument,
)
from stockledger.core.exceptions import ValidationError


def _require_text(field: str, value: str | None) -> None:
    if value is None or not value.strip():
        raise ValidationError(field, "must not be empty", value)


def _check_lines(document: ExpenseDocument | SalesDocument) -> None:
    for index, line in enumerate(document.line_items):
        _require_text(f"line_items[{index}].description", line.description)
        if line.quantity is not None and not math.isfinite(line.quantity):
            raise ValidationError(
                f"line_items[{index}].quantity", "must be a finite number", line.quantity
            )


def validate_document(document: SourceDocument) -> None:
    """
    Reject documents that cannot be committed.

    Raises:
        ValidationError: On the first offending field.
    """
    if isinstance(document, ExpenseDocument):
        _require_text("vendor_name", document.vendor_name)
        _check_lines(document)
    elif isinstance(document, SalesDocument):
        _require_text("customer_name", document.customer_name)
        _check_lines(document)
    elif isinstance(document, ProductionOrder):
        _require_text("product_sku", document.product_sku)
        if not math.isfinite(document.quantity) or document.quantity <= 0:
            raise ValidationError("quantity", "must be greater than zero", document.quantity)
    elif isinstance(document, ManualAdjustment):
        _require_text("sku", document.sku)
        if not math.isfinite(document.quantity) or document.quantity == 0:
            raise ValidationError("quantity", "must be a non-zero number", document.quantity)
