"""Abstract interfaces for the inventory ledger and the movement log."""

from abc import ABC, abstractmethod

from stockledger.core.entities.catalog import ItemCategory
from stockledger.core.entities.inventory import InventoryRecord, Movement, MovementKind


class IInventoryLedger(ABC):
    """Current stock level per SKU, maintained incrementally."""

    @abstractmethod
    async def get(self, sku: str) -> InventoryRecord | None:
        """Get the inventory record for a SKU."""
        pass

    @abstractmethod
    async def apply_delta(
        self,
        sku: str,
        quantity: float,
        name: str,
        category: ItemCategory,
    ) -> InventoryRecord:
        """
        Add a signed delta to a SKU's stock level.

        An absent record is created with stock_level equal to the delta.
        Going negative is allowed.
        """
        pass

    @abstractmethod
    async def update_details(self, record: InventoryRecord) -> InventoryRecord:
        """Update name, category, unit and min_threshold. Never the stock level."""
        pass

    @abstractmethod
    async def list_records(
        self, limit: int = 100, offset: int = 0
    ) -> list[InventoryRecord]:
        """List inventory records with pagination."""
        pass

    @abstractmethod
    async def list_low_stock(
        self, limit: int = 100, offset: int = 0
    ) -> list[InventoryRecord]:
        """List records whose stock_level is at or below their min_threshold."""
        pass


class IMovementLog(ABC):
    """Append-only log of stock movements."""

    @abstractmethod
    async def record(
        self,
        sku: str,
        kind: MovementKind,
        quantity: float,
        reference_id: str,
        note: str | None = None,
    ) -> Movement:
        """Append a movement. Existing entries are never touched."""
        pass

    @abstractmethod
    async def list_for_sku(self, sku: str, limit: int = 100) -> list[Movement]:
        """Movements for a SKU, newest first."""
        pass

    @abstractmethod
    async def list_for_reference(self, reference_id: str) -> list[Movement]:
        """Movements written for one source document, in write order."""
        pass

    @abstractmethod
    async def list_all(self, limit: int = 100, offset: int = 0) -> list[Movement]:
        """All movements, newest first."""
        pass

    @abstractmethod
    async def sum_by_sku(self) -> dict[str, float]:
        """Signed movement total per SKU."""
        pass
