"""Save Expense Use Case: persist an expense and receive its stocked lines."""

from datetime import date

from stockledger.application.dto.converters import commit_summary, expense_to_response
from stockledger.application.dto.requests import SaveExpenseRequest
from stockledger.application.dto.responses import ExpenseCommitResponse
from stockledger.config import get_logger
from stockledger.core.entities.documents import ExpenseDocument, LineItem
from stockledger.core.services.document_commit import CommitResult, DocumentCommitService

logger = get_logger(__name__)


class SaveExpenseUseCase:
    """
    Save an expense, purchase invoice or purchase order.

    Purchase invoices and received purchase orders add their linked lines
    to stock; other expense types are stored without stock effect.
    """

    def __init__(self, commit_service: DocumentCommitService | None = None):
        self._commit_service = commit_service

    async def _get_commit_service(self) -> DocumentCommitService:
        if self._commit_service is None:
            from stockledger.application.services import get_commit_service

            self._commit_service = await get_commit_service()
        return self._commit_service

    async def execute(self, request: SaveExpenseRequest) -> CommitResult:
        """Execute save expense use case."""
        logger.info(
            "save_expense_started",
            document_id=request.id,
            type=request.type.value,
            lines=len(request.line_items),
        )

        fields = request.model_dump(exclude={"id", "line_items", "document_date"})
        document = ExpenseDocument(
            **fields,
            **({"id": request.id} if request.id else {}),
            document_date=request.document_date or date.today(),
            line_items=[LineItem(**line.model_dump()) for line in request.line_items],
        )

        service = await self._get_commit_service()
        return await service.save_expense(document)

    def to_response(self, result: CommitResult) -> ExpenseCommitResponse:
        """Convert result to API response."""
        return ExpenseCommitResponse(
            **commit_summary(result),
            document=expense_to_response(result.document),
        )
