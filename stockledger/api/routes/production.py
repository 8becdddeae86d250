"""Manufacturing run endpoints."""

from fastapi import APIRouter, Depends, status

from stockledger.api.dependencies import (
    get_complete_production_use_case,
    get_documents,
    get_movements,
)
from stockledger.application.dto.converters import (
    movement_to_response,
    production_to_response,
)
from stockledger.application.dto.requests import (
    CheckShortagesRequest,
    CompleteProductionRequest,
)
from stockledger.application.dto.responses import (
    ErrorResponse,
    MovementResponse,
    ProductionCommitResponse,
    ProductionListResponse,
    ProductionOrderResponse,
    ShortageCheckResponse,
)
from stockledger.application.use_cases.complete_production import CompleteProductionUseCase
from stockledger.core.entities.documents import DocumentKind
from stockledger.core.exceptions import DocumentNotFoundError
from stockledger.core.interfaces import IDocumentStore, IMovementLog

router = APIRouter(prefix="/api/production", tags=["production"])


@router.post(
    "",
    response_model=ProductionCommitResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
async def complete_production(
    request: CompleteProductionRequest,
    use_case: CompleteProductionUseCase = Depends(get_complete_production_use_case),
) -> ProductionCommitResponse:
    """Consume the product's BOM ingredients and add the finished units."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post(
    "/shortages",
    response_model=ShortageCheckResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def check_shortages(
    request: CheckShortagesRequest,
    use_case: CompleteProductionUseCase = Depends(get_complete_production_use_case),
) -> ShortageCheckResponse:
    """Preview ingredient shortages for a run without writing."""
    result = await use_case.preview(request)
    return use_case.preview_to_response(result)


@router.get("", response_model=ProductionListResponse)
async def list_production_runs(
    limit: int = 100,
    offset: int = 0,
    documents: IDocumentStore = Depends(get_documents),
) -> ProductionListResponse:
    """Production history, newest first."""
    items = await documents.list_documents(DocumentKind.PRODUCTION, limit, offset)
    return ProductionListResponse(
        items=[production_to_response(o) for o in items],
        limit=limit,
        offset=offset,
        has_more=len(items) == limit,
    )


@router.get(
    "/{order_id}",
    response_model=ProductionOrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_production_run(
    order_id: str,
    documents: IDocumentStore = Depends(get_documents),
) -> ProductionOrderResponse:
    order = await documents.get(DocumentKind.PRODUCTION, order_id)
    if order is None:
        raise DocumentNotFoundError(DocumentKind.PRODUCTION.value, order_id)
    return production_to_response(order)


@router.get("/{order_id}/movements", response_model=list[MovementResponse])
async def get_production_movements(
    order_id: str,
    movements: IMovementLog = Depends(get_movements),
) -> list[MovementResponse]:
    return [movement_to_response(m) for m in await movements.list_for_reference(order_id)]
