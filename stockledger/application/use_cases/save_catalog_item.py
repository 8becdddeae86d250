"""Save Catalog Item Use Case: create or replace a catalog entry and its BOM."""

from stockledger.application.dto.converters import catalog_to_response
from stockledger.application.dto.requests import SaveCatalogItemRequest
from stockledger.application.dto.responses import CatalogItemResponse
from stockledger.config import get_logger
from stockledger.core.entities.catalog import BOMComponent, CatalogEntry
from stockledger.core.exceptions import BOMCycleError
from stockledger.core.interfaces.catalog_store import ICatalogStore
from stockledger.core.services.bom_resolver import CatalogBOMResolver

logger = get_logger(__name__)


class SaveCatalogItemUseCase:
    """Save a catalog entry, rejecting BOMs that would form a cycle."""

    def __init__(
        self,
        catalog_store: ICatalogStore | None = None,
        resolver: CatalogBOMResolver | None = None,
    ):
        self._catalog_store = catalog_store
        self._resolver = resolver

    async def _get_catalog_store(self) -> ICatalogStore:
        if self._catalog_store is None:
            from stockledger.infrastructure.storage.sqlite import get_catalog_store

            self._catalog_store = await get_catalog_store()
        return self._catalog_store

    async def _get_resolver(self) -> CatalogBOMResolver:
        if self._resolver is None:
            from stockledger.application.services import get_bom_resolver

            self._resolver = await get_bom_resolver(self._catalog_store)
        return self._resolver

    async def execute(self, request: SaveCatalogItemRequest) -> CatalogEntry:
        sku = request.sku.strip()
        logger.info("save_catalog_item_started", sku=sku, bom_components=len(request.bom))

        bom = [BOMComponent(sku=c.sku, quantity=c.quantity) for c in request.bom]
        if any(component.sku == sku for component in bom):
            raise BOMCycleError(sku, [sku, sku])

        entry = CatalogEntry(
            **request.model_dump(exclude={"sku", "bom"}),
            sku=sku,
            bom=bom,
        )

        resolver = await self._get_resolver()
        cycle = await resolver.find_cycle(entry)
        if cycle:
            raise BOMCycleError(sku, cycle)

        store = await self._get_catalog_store()
        return await store.save(entry)

    def to_response(self, entry: CatalogEntry) -> CatalogItemResponse:
        return catalog_to_response(entry)
