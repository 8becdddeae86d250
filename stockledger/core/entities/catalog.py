"""
Catalog domain entities.

A catalog entry defines a stock-keeping unit and, for manufactured goods,
the bill of materials consumed to produce one unit of it.
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator


class ItemCategory(str, Enum):
    """Item categories shared by catalog, inventory and line items."""

    PARTS = "Parts"
    PRODUCT = "Product"
    RAW_MATERIALS = "Raw Materials"
    CONSUMABLES = "Consumables"
    SERVICE = "Service"
    OTHER = "Other"
    PURCHASE = "Purchase"
    COURIER = "Courier"
    TRANSPORTATION = "Transportation"
    PORTER = "Porter"


class ItemKind(str, Enum):
    """Whether a catalog entry is a physical good or a service."""

    GOOD = "good"
    SERVICE = "service"


class BOMComponent(BaseModel):
    """One ingredient line of a bill of materials."""

    sku: str
    quantity: float = Field(..., gt=0)  # per one unit of the parent

    @field_validator("sku")
    @classmethod
    def strip_sku(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("component sku must not be empty")
        return v


class CatalogEntry(BaseModel):
    """A stock-keeping unit in the catalog."""

    id: str | None = None
    sku: str
    name: str
    description: str = ""
    hsn_code: str = ""
    gst_percentage: float = 0.0
    base_price: float = 0.0  # purchase cost
    selling_price: float = 0.0
    unit_of_measure: str = "PCS"
    category: ItemCategory = ItemCategory.OTHER
    kind: ItemKind = ItemKind.GOOD
    image_url: str | None = None
    bom: list[BOMComponent] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("sku")
    @classmethod
    def strip_sku(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("sku must not be empty")
        return v

    @model_validator(mode="after")
    def reject_self_reference(self) -> "CatalogEntry":
        """A BOM may not list its own product as an ingredient."""
        if any(component.sku == self.sku for component in self.bom):
            raise ValueError(f"BOM of {self.sku} references itself")
        return self

    @property
    def has_bom(self) -> bool:
        return bool(self.bom)
