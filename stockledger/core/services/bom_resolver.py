"""
Catalog and bill-of-materials resolution.

Answers "what does producing N units of SKU X consume?" from the catalog.
Unknown SKUs resolve to None or an empty BOM; callers decide the policy.
"""

from stockledger.config import get_logger
from stockledger.core.entities.catalog import BOMComponent, CatalogEntry
from stockledger.core.interfaces.catalog_store import ICatalogStore

logger = get_logger(__name__)


class CatalogBOMResolver:
    """Read-only catalog lookups over an injected catalog store."""

    def __init__(self, catalog_store: ICatalogStore) -> None:
        self._catalog_store = catalog_store

    async def lookup(self, sku: str) -> CatalogEntry | None:
        """Catalog entry for a SKU, or None when the catalog does not know it."""
        return await self._catalog_store.get(sku)

    async def resolve_bom(self, sku: str) -> list[BOMComponent]:
        """Ordered BOM components of a SKU; empty when undefined or unknown."""
        entry = await self.lookup(sku)
        if entry is None:
            return []
        return list(entry.bom)

    @staticmethod
    def required_consumption(
        entry: CatalogEntry, run_quantity: float
    ) -> list[tuple[str, float]]:
        """
        Ingredient quantities consumed by a run of ``run_quantity`` units.

        Components listed more than once are merged, keeping first-seen order.
        """
        totals: dict[str, float] = {}
        for component in entry.bom:
            totals[component.sku] = totals.get(component.sku, 0.0) + (
                component.quantity * run_quantity
            )
        return list(totals.items())

    async def find_cycle(self, entry: CatalogEntry) -> list[str] | None:
        """
        Find a path through the BOM graph leading back to ``entry``.

        ``entry`` is checked as if it were already saved, so an edit that
        would close a loop is caught before it is written.

        Returns:
            The SKU path of the cycle, or None when the graph stays acyclic.
        """
        visited: set[str] = set()

        async def walk(sku: str, path: list[str]) -> list[str] | None:
            if sku == entry.sku:
                return path + [sku]
            if sku in visited:
                return None
            visited.add(sku)
            for component in await self.resolve_bom(sku):
                found = await walk(component.sku, path + [sku])
                if found:
                    return found
            return None

        for component in entry.bom:
            cycle = await walk(component.sku, [entry.sku])
            if cycle:
                logger.warning("bom_cycle_detected", sku=entry.sku, path=cycle)
                return cycle
        return None
