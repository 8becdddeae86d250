"""Catalog and bill-of-materials endpoints."""

from fastapi import APIRouter, Depends, status

from stockledger.api.dependencies import get_catalog, get_save_catalog_item_use_case
from stockledger.application.dto.converters import catalog_to_response
from stockledger.application.dto.requests import SaveCatalogItemRequest
from stockledger.application.dto.responses import (
    CatalogItemResponse,
    CatalogListResponse,
    ErrorResponse,
)
from stockledger.application.use_cases.save_catalog_item import SaveCatalogItemUseCase
from stockledger.core.entities.catalog import ItemCategory
from stockledger.core.exceptions import CatalogItemNotFoundError
from stockledger.core.interfaces import ICatalogStore

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@router.get("", response_model=CatalogListResponse)
async def list_catalog(
    category: ItemCategory | None = None,
    limit: int = 100,
    offset: int = 0,
    store: ICatalogStore = Depends(get_catalog),
) -> CatalogListResponse:
    """List catalog entries, optionally filtered by category."""
    entries = await store.list_entries(category=category, limit=limit, offset=offset)
    return CatalogListResponse(
        items=[catalog_to_response(e) for e in entries],
        limit=limit,
        offset=offset,
        has_more=len(entries) == limit,
    )


@router.post(
    "",
    response_model=CatalogItemResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def save_catalog_item(
    request: SaveCatalogItemRequest,
    use_case: SaveCatalogItemUseCase = Depends(get_save_catalog_item_use_case),
) -> CatalogItemResponse:
    """Create or replace a catalog entry and its BOM."""
    entry = await use_case.execute(request)
    return use_case.to_response(entry)


@router.get(
    "/{sku}",
    response_model=CatalogItemResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_catalog_item(
    sku: str,
    store: ICatalogStore = Depends(get_catalog),
) -> CatalogItemResponse:
    entry = await store.get(sku)
    if entry is None:
        raise CatalogItemNotFoundError(sku)
    return catalog_to_response(entry)


@router.delete(
    "/{sku}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_catalog_item(
    sku: str,
    store: ICatalogStore = Depends(get_catalog),
) -> None:
    """Delete a catalog entry. Stock records and movements are kept."""
    if not await store.delete(sku):
        raise CatalogItemNotFoundError(sku)
