"""Save Sales Document Use Case: persist a sales document and move its stock."""

from datetime import date

from stockledger.application.dto.converters import commit_summary, sales_to_response
from stockledger.application.dto.requests import SaveSalesDocumentRequest
from stockledger.application.dto.responses import SalesCommitResponse
from stockledger.config import get_logger
from stockledger.core.entities.documents import LineItem, SalesDocument
from stockledger.core.services.document_commit import CommitResult, DocumentCommitService

logger = get_logger(__name__)


class SaveSalesDocumentUseCase:
    """Save a sales document; issued ones dispatch or return stock by type."""

    def __init__(self, commit_service: DocumentCommitService | None = None):
        self._commit_service = commit_service

    async def _get_commit_service(self) -> DocumentCommitService:
        if self._commit_service is None:
            from stockledger.application.services import get_commit_service

            self._commit_service = await get_commit_service()
        return self._commit_service

    async def execute(self, request: SaveSalesDocumentRequest) -> CommitResult:
        logger.info(
            "save_sales_document_started",
            document_id=request.id,
            type=request.type.value,
            status=request.status.value,
        )

        fields = request.model_dump(exclude={"id", "line_items", "document_date"})
        document = SalesDocument(
            **fields,
            **({"id": request.id} if request.id else {}),
            document_date=request.document_date or date.today(),
            line_items=[LineItem(**line.model_dump()) for line in request.line_items],
        )

        service = await self._get_commit_service()
        return await service.save_sales_document(document)

    def to_response(self, result: CommitResult) -> SalesCommitResponse:
        return SalesCommitResponse(
            **commit_summary(result),
            document=sales_to_response(result.document),
        )
