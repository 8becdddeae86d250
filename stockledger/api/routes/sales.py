"""Sales document endpoints."""

from fastapi import APIRouter, Depends, status

from stockledger.api.dependencies import (
    get_commit,
    get_documents,
    get_movements,
    get_save_sales_document_use_case,
)
from stockledger.application.dto.converters import movement_to_response, sales_to_response
from stockledger.application.dto.requests import SaveSalesDocumentRequest
from stockledger.application.dto.responses import (
    ErrorResponse,
    MovementResponse,
    SalesCommitResponse,
    SalesDocumentListResponse,
    SalesDocumentResponse,
)
from stockledger.application.use_cases.save_sales_document import SaveSalesDocumentUseCase
from stockledger.core.entities.documents import DocumentKind
from stockledger.core.exceptions import DocumentNotFoundError
from stockledger.core.interfaces import IDocumentStore, IMovementLog
from stockledger.core.services import DocumentCommitService

router = APIRouter(prefix="/api/sales", tags=["sales"])


@router.post(
    "",
    response_model=SalesCommitResponse,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
async def save_sales_document(
    request: SaveSalesDocumentRequest,
    use_case: SaveSalesDocumentUseCase = Depends(get_save_sales_document_use_case),
) -> SalesCommitResponse:
    """Save a sales document. Issued invoices, challans and proformas dispatch
    stock; issued credit notes return it."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("", response_model=SalesDocumentListResponse)
async def list_sales_documents(
    limit: int = 100,
    offset: int = 0,
    documents: IDocumentStore = Depends(get_documents),
) -> SalesDocumentListResponse:
    items = await documents.list_documents(DocumentKind.SALES, limit, offset)
    return SalesDocumentListResponse(
        items=[sales_to_response(d) for d in items],
        limit=limit,
        offset=offset,
        has_more=len(items) == limit,
    )


@router.get(
    "/{doc_id}",
    response_model=SalesDocumentResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_sales_document(
    doc_id: str,
    documents: IDocumentStore = Depends(get_documents),
) -> SalesDocumentResponse:
    document = await documents.get(DocumentKind.SALES, doc_id)
    if document is None:
        raise DocumentNotFoundError(DocumentKind.SALES.value, doc_id)
    return sales_to_response(document)


@router.get("/{doc_id}/movements", response_model=list[MovementResponse])
async def get_sales_movements(
    doc_id: str,
    movements: IMovementLog = Depends(get_movements),
) -> list[MovementResponse]:
    return [movement_to_response(m) for m in await movements.list_for_reference(doc_id)]


@router.delete(
    "/{doc_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_sales_document(
    doc_id: str,
    service: DocumentCommitService = Depends(get_commit),
) -> None:
    """Delete the document. Movements it produced stay in the ledger."""
    await service.delete_document(DocumentKind.SALES, doc_id)
