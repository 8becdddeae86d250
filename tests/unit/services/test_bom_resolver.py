"""Tests for catalog and BOM resolution."""

from unittest.mock import AsyncMock

import pytest

from stockledger.core.entities.catalog import BOMComponent, CatalogEntry
from stockledger.core.services.bom_resolver import CatalogBOMResolver


def _entry(sku: str, *components: tuple[str, float]) -> CatalogEntry:
    return CatalogEntry(
        sku=sku,
        name=sku,
        bom=[BOMComponent(sku=c, quantity=q) for c, q in components],
    )


@pytest.fixture
def catalog_store():
    """Catalog store mock backed by a dict."""
    entries: dict[str, CatalogEntry] = {}
    store = AsyncMock()
    store.get.side_effect = lambda sku: entries.get(sku)
    store.entries = entries
    return store


@pytest.fixture
def resolver(catalog_store):
    return CatalogBOMResolver(catalog_store)


class TestLookup:
    async def test_unknown_sku(self, resolver):
        assert await resolver.lookup("NOPE") is None
        assert await resolver.resolve_bom("NOPE") == []

    async def test_resolve_bom_in_order(self, resolver, catalog_store):
        catalog_store.entries["BATT-01"] = _entry("BATT-01", ("CELL-A", 4), ("WIRE", 0.5))
        bom = await resolver.resolve_bom("BATT-01")
        assert [(c.sku, c.quantity) for c in bom] == [("CELL-A", 4), ("WIRE", 0.5)]


class TestRequiredConsumption:
    def test_scales_by_run(self, battery):
        assert CatalogBOMResolver.required_consumption(battery, 5) == [("CELL-A", 20)]

    def test_fractional_runs(self):
        entry = _entry("GLUE-KIT", ("GLUE", 0.25))
        assert CatalogBOMResolver.required_consumption(entry, 2) == [("GLUE", 0.5)]


class TestFindCycle:
    async def test_acyclic(self, resolver, catalog_store):
        catalog_store.entries["CELL-A"] = _entry("CELL-A")
        assert await resolver.find_cycle(_entry("BATT-01", ("CELL-A", 4))) is None

    async def test_indirect_cycle(self, resolver, catalog_store):
        catalog_store.entries["B"] = _entry("B", ("C", 1))
        catalog_store.entries["C"] = _entry("C", ("A", 1))

        cycle = await resolver.find_cycle(_entry("A", ("B", 1)))
        assert cycle == ["A", "B", "C", "A"]

    async def test_shared_subassembly_is_not_a_cycle(self, resolver, catalog_store):
        catalog_store.entries["B"] = _entry("B", ("D", 1))
        catalog_store.entries["C"] = _entry("C", ("D", 1))
        catalog_store.entries["D"] = _entry("D")

        assert await resolver.find_cycle(_entry("A", ("B", 1), ("C", 1))) is None
