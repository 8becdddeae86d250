"""Tests for inventory entities."""

import pytest
from pydantic import ValidationError

from stockledger.core.entities.inventory import (
    InventoryRecord,
    Movement,
    MovementKind,
    StockShortage,
)


class TestInventoryRecord:
    def test_defaults(self):
        record = InventoryRecord(sku="CELL-A")
        assert record.stock_level == 0.0
        assert record.min_threshold == 5.0
        assert record.unit == "Units"

    def test_low_stock_at_threshold(self):
        assert InventoryRecord(sku="X", stock_level=5, min_threshold=5).is_low_stock is True
        assert InventoryRecord(sku="X", stock_level=6, min_threshold=5).is_low_stock is False

    def test_negative_stock_allowed(self):
        record = InventoryRecord(sku="X", stock_level=-3)
        assert record.stock_level == -3
        assert record.is_low_stock is True


class TestMovement:
    def test_is_frozen(self):
        movement = Movement(
            sku="CELL-A", kind=MovementKind.RECEIPT, quantity=5, reference_id="doc-1"
        )
        with pytest.raises(ValidationError):
            movement.quantity = 10

    def test_direction(self):
        inward = Movement(sku="X", kind=MovementKind.RECEIPT, quantity=1, reference_id="d")
        outward = Movement(
            sku="X", kind=MovementKind.SALES_DISPATCH, quantity=-1, reference_id="d"
        )
        assert inward.is_inward is True
        assert outward.is_inward is False

    def test_kind_values(self):
        assert MovementKind.RECEIPT.value == "Purchase_GRN"
        assert MovementKind.SALES_RETURN.value == "Sale_Return"


class TestStockShortage:
    def test_missing(self):
        shortage = StockShortage(sku="CELL-A", required=20, available=4)
        assert shortage.missing == 16
        assert shortage.to_dict() == {
            "sku": "CELL-A",
            "required": 20,
            "available": 4,
            "missing": 16,
        }
