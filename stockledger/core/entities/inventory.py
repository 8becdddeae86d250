"""Inventory domain entities."""

import uuid
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from stockledger.core.entities.catalog import ItemCategory


class MovementKind(str, Enum):
    """Types of stock movements."""

    RECEIPT = "Purchase_GRN"
    SALES_DISPATCH = "Sales_Dispatch"
    SALES_RETURN = "Sale_Return"
    MANUAL_ADJUSTMENT = "Manual_Adjustment"
    MANUFACTURING_CONSUMPTION = "Manufacturing_Consumption"
    MANUFACTURING_OUTPUT = "Manufacturing_Output"


class InventoryRecord(BaseModel):
    """Current stock level for one SKU."""

    sku: str
    name: str = ""
    category: ItemCategory = ItemCategory.OTHER
    unit: str = "Units"
    stock_level: float = 0.0  # may go negative
    min_threshold: float = 5.0
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    last_updated: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_low_stock(self) -> bool:
        return self.stock_level <= self.min_threshold


class Movement(BaseModel):
    """A single immutable stock movement."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    sku: str
    kind: MovementKind
    quantity: float  # positive = inward, negative = outward
    reference_id: str  # source document ID
    note: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_inward(self) -> bool:
        return self.quantity > 0


class StockShortage(BaseModel):
    """Ingredient that cannot cover a production run."""

    sku: str
    required: float
    available: float

    @property
    def missing(self) -> float:
        return self.required - self.available

    def to_dict(self) -> dict:
        return {
            "sku": self.sku,
            "required": self.required,
            "available": self.available,
            "missing": self.missing,
        }
