"""
Source document entities.

Every stock-affecting save starts from one of these documents. Line items
that link a catalog SKU carry an ``is_stocked`` flag recording that their
inventory effect has already been applied.
"""

import uuid
from datetime import UTC, date, datetime
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from stockledger.core.entities.catalog import ItemCategory


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(UTC)


class DocumentKind(str, Enum):
    """Closed set of source document kinds."""

    EXPENSE = "expense"
    SALES = "sales"
    PRODUCTION = "production"
    ADJUSTMENT = "adjustment"


class LineItem(BaseModel):
    """A line on an expense or sales document."""

    description: str
    amount: float = 0.0
    quantity: float | None = None
    rate: float | None = None
    hsn_code: str | None = None
    gst_percentage: float | None = None
    category: ItemCategory | None = None
    sku: str | None = None  # linked catalog SKU
    unit_of_measure: str | None = None
    is_stocked: bool = False

    @property
    def linked_sku(self) -> str | None:
        """SKU with whitespace removed, or None when the line is unlinked."""
        if self.sku is None:
            return None
        return self.sku.strip() or None


class ExpenseType(str, Enum):
    INVOICE = "invoice"
    EXPENSE = "expense"
    PURCHASE_ORDER = "purchase_order"


class PurchaseStatus(str, Enum):
    DRAFT = "draft"
    ORDERED = "ordered"
    RECEIVED = "received"
    CANCELLED = "cancelled"


class ExpenseDocument(BaseModel):
    """A scanned expense, purchase invoice or purchase order."""

    kind: Literal[DocumentKind.EXPENSE] = DocumentKind.EXPENSE
    id: str = Field(default_factory=_new_id)
    vendor_name: str = ""
    vendor_gst: str | None = None
    vendor_address: str | None = None
    doc_number: str | None = None
    document_date: date = Field(default_factory=date.today)
    total_amount: float = 0.0
    tax_amount: float = 0.0
    currency: Literal["INR"] = "INR"
    type: ExpenseType = ExpenseType.EXPENSE
    status: PurchaseStatus | None = None
    line_items: list[LineItem] = Field(default_factory=list)
    file_name: str = ""
    image_url: str | None = None
    created_by: str = ""
    created_at: datetime = Field(default_factory=_now)


class SalesDocType(str, Enum):
    SALES_INVOICE = "sales_invoice"
    CREDIT_NOTE = "credit_note"
    QUOTATION = "quotation"
    PROFORMA = "proforma"
    DELIVERY_CHALLAN = "delivery_challan"


class SalesStatus(str, Enum):
    DRAFT = "draft"
    ISSUED = "issued"
    CANCELLED = "cancelled"


class SalesDocument(BaseModel):
    """An outgoing sales document."""

    kind: Literal[DocumentKind.SALES] = DocumentKind.SALES
    id: str = Field(default_factory=_new_id)
    doc_number: str = ""
    type: SalesDocType = SalesDocType.SALES_INVOICE
    customer_name: str = ""
    customer_gst: str | None = None
    customer_address: str | None = None
    customer_state: str | None = None
    shipping_address: str | None = None
    po_number: str | None = None
    po_date: str | None = None
    document_date: date = Field(default_factory=date.today)
    line_items: list[LineItem] = Field(default_factory=list)
    total_amount: float = 0.0
    tax_amount: float = 0.0
    amount_paid: float | None = None
    balance_amount: float | None = None
    notes: str | None = None
    status: SalesStatus = SalesStatus.DRAFT
    created_by: str = ""
    created_at: datetime = Field(default_factory=_now)


class ProductionStatus(str, Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ProductionOrder(BaseModel):
    """A completed manufacturing run of a BOM product."""

    kind: Literal[DocumentKind.PRODUCTION] = DocumentKind.PRODUCTION
    id: str = Field(default_factory=_new_id)
    product_sku: str
    quantity: float
    run_date: datetime = Field(default_factory=_now)
    status: ProductionStatus = ProductionStatus.COMPLETED
    notes: str | None = None
    created_by: str = ""
    is_stocked: bool = False


class ManualAdjustment(BaseModel):
    """A user-entered signed correction of one SKU's stock."""

    kind: Literal[DocumentKind.ADJUSTMENT] = DocumentKind.ADJUSTMENT
    id: str = Field(default_factory=_new_id)
    sku: str
    name: str = ""
    category: ItemCategory = ItemCategory.OTHER
    quantity: float  # signed
    note: str | None = None
    created_by: str = ""
    created_at: datetime = Field(default_factory=_now)
    is_stocked: bool = False


SourceDocument = Annotated[
    ExpenseDocument | SalesDocument | ProductionOrder | ManualAdjustment,
    Field(discriminator="kind"),
]


def document_status(document: BaseModel) -> str | None:
    """Status value stored alongside a document for filtering."""
    if isinstance(document, ExpenseDocument):
        return (document.status or document.type).value
    if isinstance(document, SalesDocument | ProductionOrder):
        return document.status.value
    return None
