"""Complete Production Use Case: consume BOM ingredients, add finished goods."""

from dataclasses import dataclass, field

from stockledger.application.dto.converters import (
    commit_summary,
    production_to_response,
    shortage_to_response,
)
from stockledger.application.dto.requests import (
    CheckShortagesRequest,
    CompleteProductionRequest,
)
from stockledger.application.dto.responses import (
    ProductionCommitResponse,
    ShortageCheckResponse,
)
from stockledger.config import get_logger
from stockledger.core.entities.inventory import StockShortage
from stockledger.core.services.document_commit import CommitResult, DocumentCommitService

logger = get_logger(__name__)


@dataclass
class ShortageCheckResult:
    """Shortage preview for a production run."""

    product_sku: str
    quantity: float
    shortages: list[StockShortage] = field(default_factory=list)

    @property
    def can_produce(self) -> bool:
        return not self.shortages


class CompleteProductionUseCase:
    """
    Record a completed manufacturing run.

    The run is rejected as a whole with the full shortage list when any
    ingredient cannot cover it.
    """

    def __init__(self, commit_service: DocumentCommitService | None = None):
        self._commit_service = commit_service

    async def _get_commit_service(self) -> DocumentCommitService:
        if self._commit_service is None:
            from stockledger.application.services import get_commit_service

            self._commit_service = await get_commit_service()
        return self._commit_service

    async def execute(self, request: CompleteProductionRequest) -> CommitResult:
        logger.info(
            "complete_production_started",
            product_sku=request.product_sku,
            quantity=request.quantity,
        )
        service = await self._get_commit_service()
        return await service.complete_production(
            product_sku=request.product_sku,
            quantity=request.quantity,
            notes=request.notes,
            created_by=request.created_by,
        )

    async def preview(self, request: CheckShortagesRequest) -> ShortageCheckResult:
        """Report shortages without writing anything."""
        service = await self._get_commit_service()
        shortages = await service.check_shortages(request.product_sku, request.quantity)
        return ShortageCheckResult(
            product_sku=request.product_sku,
            quantity=request.quantity,
            shortages=shortages,
        )

    def to_response(self, result: CommitResult) -> ProductionCommitResponse:
        return ProductionCommitResponse(
            **commit_summary(result),
            document=production_to_response(result.document),
        )

    @staticmethod
    def preview_to_response(result: ShortageCheckResult) -> ShortageCheckResponse:
        return ShortageCheckResponse(
            product_sku=result.product_sku,
            quantity=result.quantity,
            can_produce=result.can_produce,
            shortages=[shortage_to_response(s) for s in result.shortages],
        )
