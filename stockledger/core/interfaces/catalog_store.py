"""Abstract interface for catalog storage."""

from abc import ABC, abstractmethod

from stockledger.core.entities.catalog import CatalogEntry, ItemCategory


class ICatalogStore(ABC):
    """Interface for catalog entry persistence."""

    @abstractmethod
    async def get(self, sku: str) -> CatalogEntry | None:
        """Get catalog entry by SKU. Returns None for unknown SKUs."""
        pass

    @abstractmethod
    async def save(self, entry: CatalogEntry) -> CatalogEntry:
        """Create or replace a catalog entry, including its BOM."""
        pass

    @abstractmethod
    async def delete(self, sku: str) -> bool:
        """Delete a catalog entry. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def list_entries(
        self,
        category: ItemCategory | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[CatalogEntry]:
        """List catalog entries ordered by SKU."""
        pass
