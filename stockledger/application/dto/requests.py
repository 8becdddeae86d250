"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.

Stocked flags are not accepted from clients; the server carries them over
from the stored version of a document.
"""

from datetime import date

from pydantic import BaseModel, Field

from stockledger.core.entities.catalog import ItemCategory, ItemKind
from stockledger.core.entities.documents import (
    ExpenseType,
    PurchaseStatus,
    SalesDocType,
    SalesStatus,
)


class LineItemRequest(BaseModel):
    """A line on an expense or sales document."""

    description: str = Field(..., description="Line description")
    amount: float = Field(default=0.0, description="Line amount")
    quantity: float | None = Field(default=None, description="Quantity moved by this line")
    rate: float | None = Field(default=None, description="Unit rate")
    hsn_code: str | None = Field(default=None, description="HSN/SAC code")
    gst_percentage: float | None = Field(default=None, ge=0, description="GST rate")
    category: ItemCategory | None = Field(default=None, description="Item category")
    sku: str | None = Field(default=None, description="Linked catalog SKU")
    unit_of_measure: str | None = Field(default=None, description="Unit of measure")


# --- Expenses ---


class SaveExpenseRequest(BaseModel):
    """Create or update an expense, purchase invoice or purchase order."""

    id: str | None = Field(default=None, description="Existing document ID for updates")
    vendor_name: str = Field(..., description="Vendor name")
    vendor_gst: str | None = Field(default=None, description="Vendor GSTIN")
    vendor_address: str | None = Field(default=None, description="Vendor address")
    doc_number: str | None = Field(default=None, description="Vendor document number")
    document_date: date | None = Field(default=None, description="Defaults to today")
    total_amount: float = Field(default=0.0, description="Grand total")
    tax_amount: float = Field(default=0.0, description="Tax total")
    type: ExpenseType = Field(default=ExpenseType.EXPENSE, description="Document type")
    status: PurchaseStatus | None = Field(default=None, description="Purchase order status")
    line_items: list[LineItemRequest] = Field(default_factory=list)
    file_name: str = Field(default="", description="Source file name")
    image_url: str | None = Field(default=None, description="Scanned image location")
    created_by: str = Field(default="", description="Author")


# --- Sales ---


class SaveSalesDocumentRequest(BaseModel):
    """Create or update a sales document."""

    id: str | None = Field(default=None, description="Existing document ID for updates")
    doc_number: str = Field(default="", description="Sales document number")
    type: SalesDocType = Field(default=SalesDocType.SALES_INVOICE)
    customer_name: str = Field(..., description="Customer name")
    customer_gst: str | None = Field(default=None)
    customer_address: str | None = Field(default=None)
    customer_state: str | None = Field(default=None)
    shipping_address: str | None = Field(default=None)
    po_number: str | None = Field(default=None, description="Customer PO number")
    po_date: str | None = Field(default=None, description="Customer PO date")
    document_date: date | None = Field(default=None, description="Defaults to today")
    line_items: list[LineItemRequest] = Field(default_factory=list)
    total_amount: float = Field(default=0.0)
    tax_amount: float = Field(default=0.0)
    amount_paid: float | None = Field(default=None)
    balance_amount: float | None = Field(default=None)
    notes: str | None = Field(default=None)
    status: SalesStatus = Field(default=SalesStatus.DRAFT)
    created_by: str = Field(default="")


# --- Production ---


class CompleteProductionRequest(BaseModel):
    """Record a completed manufacturing run."""

    product_sku: str = Field(..., min_length=1, description="Catalog SKU of the product")
    quantity: float = Field(..., gt=0, description="Units produced")
    notes: str | None = Field(default=None)
    created_by: str = Field(default="")


class CheckShortagesRequest(BaseModel):
    """Preview ingredient shortages for a run."""

    product_sku: str = Field(..., min_length=1)
    quantity: float = Field(..., gt=0)


# --- Inventory ---


class AdjustStockRequest(BaseModel):
    """Signed manual correction of one SKU."""

    sku: str = Field(..., min_length=1, description="SKU to correct")
    quantity: float = Field(..., description="Signed delta, non-zero")
    note: str | None = Field(default=None, description="Reason for the correction")
    name: str = Field(default="", description="Name used if the SKU is new")
    category: ItemCategory | None = Field(default=None)
    created_by: str = Field(default="")


class UpdateInventoryRecordRequest(BaseModel):
    """Edit descriptive fields of an inventory record."""

    name: str | None = Field(default=None)
    category: ItemCategory | None = Field(default=None)
    unit: str | None = Field(default=None)
    min_threshold: float | None = Field(default=None, ge=0)


# --- Catalog ---


class BOMComponentRequest(BaseModel):
    sku: str = Field(..., min_length=1)
    quantity: float = Field(..., gt=0, description="Quantity per unit of the parent")


class SaveCatalogItemRequest(BaseModel):
    """Create or replace a catalog entry."""

    sku: str = Field(..., min_length=1, description="Stock keeping unit")
    name: str = Field(..., min_length=1)
    description: str = Field(default="")
    hsn_code: str = Field(default="")
    gst_percentage: float = Field(default=0.0, ge=0)
    base_price: float = Field(default=0.0, ge=0, description="Purchase cost")
    selling_price: float = Field(default=0.0, ge=0)
    unit_of_measure: str = Field(default="PCS")
    category: ItemCategory = Field(default=ItemCategory.OTHER)
    kind: ItemKind = Field(default=ItemKind.GOOD)
    image_url: str | None = Field(default=None)
    bom: list[BOMComponentRequest] = Field(default_factory=list)
