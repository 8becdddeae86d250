"""Adjust Stock Use Case: signed manual correction of one SKU."""

from stockledger.application.dto.converters import adjustment_to_response, commit_summary
from stockledger.application.dto.requests import AdjustStockRequest
from stockledger.application.dto.responses import AdjustmentCommitResponse
from stockledger.config import get_logger
from stockledger.core.services.document_commit import CommitResult, DocumentCommitService

logger = get_logger(__name__)


class AdjustStockUseCase:
    """Correct a SKU's stock through a compensating movement."""

    def __init__(self, commit_service: DocumentCommitService | None = None):
        self._commit_service = commit_service

    async def _get_commit_service(self) -> DocumentCommitService:
        if self._commit_service is None:
            from stockledger.application.services import get_commit_service

            self._commit_service = await get_commit_service()
        return self._commit_service

    async def execute(self, request: AdjustStockRequest) -> CommitResult:
        logger.info("adjust_stock_started", sku=request.sku, quantity=request.quantity)
        service = await self._get_commit_service()
        return await service.adjust_stock(
            sku=request.sku,
            quantity=request.quantity,
            note=request.note,
            name=request.name,
            category=request.category,
            created_by=request.created_by,
        )

    def to_response(self, result: CommitResult) -> AdjustmentCommitResponse:
        return AdjustmentCommitResponse(
            **commit_summary(result),
            document=adjustment_to_response(result.document),
        )
