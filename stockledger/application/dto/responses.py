"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field

# --- Shared ---


class ProviderHealthResponse(BaseModel):
    """Backing service health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INSUFFICIENT_STOCK)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    details: dict[str, Any] | None = Field(
        default=None, description="Structured error context, e.g. shortages"
    )
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


class ListResponse(BaseModel):
    """Base for offset-paginated list responses."""

    limit: int
    offset: int
    has_more: bool


# --- Inventory ---


class InventoryRecordResponse(BaseModel):
    sku: str
    name: str
    category: str
    unit: str
    stock_level: float
    min_threshold: float
    is_low_stock: bool
    created_at: datetime
    last_updated: datetime


class InventoryListResponse(ListResponse):
    items: list[InventoryRecordResponse]


class MovementResponse(BaseModel):
    """A stock movement."""

    id: str
    sku: str
    kind: str
    quantity: float
    reference_id: str
    note: str | None = None
    created_at: datetime


class LedgerDriftResponse(BaseModel):
    sku: str
    stock_level: float | None
    movement_total: float
    difference: float


class ReconciliationResponse(BaseModel):
    """Ledger versus movement log comparison."""

    checked: int
    consistent: bool
    drifts: list[LedgerDriftResponse] = Field(default_factory=list)
    generated_at: datetime


class LastModifiedResponse(BaseModel):
    """Change marker polled by sync collaborators."""

    last_modified: datetime | None = None
    is_empty: bool


# --- Documents ---


class LineItemResponse(BaseModel):
    description: str
    amount: float
    quantity: float | None = None
    rate: float | None = None
    hsn_code: str | None = None
    gst_percentage: float | None = None
    category: str | None = None
    sku: str | None = None
    unit_of_measure: str | None = None
    is_stocked: bool = False


class ExpenseResponse(BaseModel):
    id: str
    vendor_name: str
    vendor_gst: str | None = None
    vendor_address: str | None = None
    doc_number: str | None = None
    document_date: date
    total_amount: float
    tax_amount: float
    currency: str
    type: str
    status: str | None = None
    line_items: list[LineItemResponse] = Field(default_factory=list)
    file_name: str = ""
    image_url: str | None = None
    created_by: str = ""
    created_at: datetime


class SalesDocumentResponse(BaseModel):
    id: str
    doc_number: str
    type: str
    customer_name: str
    customer_gst: str | None = None
    customer_address: str | None = None
    customer_state: str | None = None
    shipping_address: str | None = None
    po_number: str | None = None
    po_date: str | None = None
    document_date: date
    line_items: list[LineItemResponse] = Field(default_factory=list)
    total_amount: float
    tax_amount: float
    amount_paid: float | None = None
    balance_amount: float | None = None
    notes: str | None = None
    status: str
    created_by: str = ""
    created_at: datetime


class ProductionOrderResponse(BaseModel):
    id: str
    product_sku: str
    quantity: float
    run_date: datetime
    status: str
    notes: str | None = None
    created_by: str = ""
    is_stocked: bool


class AdjustmentResponse(BaseModel):
    id: str
    sku: str
    name: str
    category: str
    quantity: float
    note: str | None = None
    created_by: str = ""
    created_at: datetime
    is_stocked: bool


class CommitSummary(BaseModel):
    """Stock effect of a commit."""

    movements: list[MovementResponse] = Field(default_factory=list)
    records: list[InventoryRecordResponse] = Field(default_factory=list)
    committed_at: datetime
    attempts: int = 1
    stock_changed: bool = False


class ExpenseCommitResponse(CommitSummary):
    document: ExpenseResponse


class SalesCommitResponse(CommitSummary):
    document: SalesDocumentResponse


class ProductionCommitResponse(CommitSummary):
    document: ProductionOrderResponse


class AdjustmentCommitResponse(CommitSummary):
    document: AdjustmentResponse


class ExpenseListResponse(ListResponse):
    items: list[ExpenseResponse]


class SalesDocumentListResponse(ListResponse):
    items: list[SalesDocumentResponse]


class ProductionListResponse(ListResponse):
    items: list[ProductionOrderResponse]


class AdjustmentListResponse(ListResponse):
    items: list[AdjustmentResponse]


# --- Production ---


class ShortageResponse(BaseModel):
    sku: str
    required: float
    available: float
    missing: float


class ShortageCheckResponse(BaseModel):
    """Shortage preview for a production run."""

    product_sku: str
    quantity: float
    can_produce: bool
    shortages: list[ShortageResponse] = Field(default_factory=list)


# --- Catalog ---


class BOMComponentResponse(BaseModel):
    sku: str
    quantity: float


class CatalogItemResponse(BaseModel):
    """Catalog entry with its bill of materials."""

    id: str | None = None
    sku: str
    name: str
    description: str = ""
    hsn_code: str = ""
    gst_percentage: float = 0.0
    base_price: float = 0.0
    selling_price: float = 0.0
    unit_of_measure: str = "PCS"
    category: str
    kind: str
    image_url: str | None = None
    bom: list[BOMComponentResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class CatalogListResponse(ListResponse):
    items: list[CatalogItemResponse]
