"""Expense, purchase invoice and purchase order endpoints."""

from fastapi import APIRouter, Depends, status

from stockledger.api.dependencies import (
    get_commit,
    get_documents,
    get_movements,
    get_save_expense_use_case,
)
from stockledger.application.dto.converters import expense_to_response, movement_to_response
from stockledger.application.dto.requests import SaveExpenseRequest
from stockledger.application.dto.responses import (
    ErrorResponse,
    ExpenseCommitResponse,
    ExpenseListResponse,
    ExpenseResponse,
    MovementResponse,
)
from stockledger.application.use_cases.save_expense import SaveExpenseUseCase
from stockledger.core.entities.documents import DocumentKind
from stockledger.core.exceptions import DocumentNotFoundError
from stockledger.core.interfaces import IDocumentStore, IMovementLog
from stockledger.core.services import DocumentCommitService

router = APIRouter(prefix="/api/expenses", tags=["expenses"])


@router.post(
    "",
    response_model=ExpenseCommitResponse,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
async def save_expense(
    request: SaveExpenseRequest,
    use_case: SaveExpenseUseCase = Depends(get_save_expense_use_case),
) -> ExpenseCommitResponse:
    """Save an expense; purchase invoices and received orders add stock."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("", response_model=ExpenseListResponse)
async def list_expenses(
    limit: int = 100,
    offset: int = 0,
    documents: IDocumentStore = Depends(get_documents),
) -> ExpenseListResponse:
    items = await documents.list_documents(DocumentKind.EXPENSE, limit, offset)
    return ExpenseListResponse(
        items=[expense_to_response(d) for d in items],
        limit=limit,
        offset=offset,
        has_more=len(items) == limit,
    )


@router.get(
    "/{doc_id}",
    response_model=ExpenseResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_expense(
    doc_id: str,
    documents: IDocumentStore = Depends(get_documents),
) -> ExpenseResponse:
    document = await documents.get(DocumentKind.EXPENSE, doc_id)
    if document is None:
        raise DocumentNotFoundError(DocumentKind.EXPENSE.value, doc_id)
    return expense_to_response(document)


@router.get("/{doc_id}/movements", response_model=list[MovementResponse])
async def get_expense_movements(
    doc_id: str,
    movements: IMovementLog = Depends(get_movements),
) -> list[MovementResponse]:
    """Movements written for this expense."""
    return [movement_to_response(m) for m in await movements.list_for_reference(doc_id)]


@router.delete(
    "/{doc_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_expense(
    doc_id: str,
    service: DocumentCommitService = Depends(get_commit),
) -> None:
    """Delete the expense. Stock it already received stays in the ledger."""
    await service.delete_document(DocumentKind.EXPENSE, doc_id)
