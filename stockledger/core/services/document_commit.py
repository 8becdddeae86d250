"""
Document commit service.

Applies a source document's stock effect and persists the document as one
atomic unit of work: movements, ledger updates and the stocked copy of the
document are written in a single store transaction. Commits that lose a
write-lock race are retried as a whole.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from stockledger.config import bind_document_context, get_logger, get_settings
from stockledger.config.settings import LedgerSettings
from stockledger.core.entities.catalog import CatalogEntry, ItemCategory
from stockledger.core.entities.documents import (
    DocumentKind,
    ExpenseDocument,
    ManualAdjustment,
    ProductionOrder,
    SalesDocument,
    SourceDocument,
)
from stockledger.core.entities.inventory import InventoryRecord, Movement, StockShortage
from stockledger.core.exceptions import (
    BOMNotDefinedError,
    CatalogItemNotFoundError,
    CatalogReferenceError,
    ConfigurationError,
    DocumentNotFoundError,
    ShortageError,
    StockLedgerError,
    TransactionConflictError,
    ValidationError,
)
from stockledger.core.interfaces.catalog_store import ICatalogStore
from stockledger.core.interfaces.inventory_store import IInventoryLedger
from stockledger.core.interfaces.transaction import ITransactionManager, StoreSession
from stockledger.core.services.bom_resolver import CatalogBOMResolver
from stockledger.core.services.document_validator import validate_document
from stockledger.core.services.effect_rules import line_effect, production_effects
from stockledger.core.services.stock_planner import (
    PlannedMovement,
    carry_stored_state,
    mark_stocked,
    pending_lines,
    plan_adjustment,
    plan_lines,
    plan_production,
)

logger = get_logger(__name__)


@dataclass
class ChangeEvent:
    """Notification sent to change listeners after a successful write."""

    entity: str
    entity_id: str
    action: str  # "committed" or "deleted"
    occurred_at: datetime


ChangeListener = Callable[[ChangeEvent], Awaitable[None]]


@dataclass
class CommitResult:
    """Outcome of a document commit."""

    document: SourceDocument
    movements: list[Movement] = field(default_factory=list)
    records: list[InventoryRecord] = field(default_factory=list)
    committed_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    attempts: int = 1

    @property
    def stock_changed(self) -> bool:
        return bool(self.movements)


class DocumentCommitService:
    """
    Entry point for every stock-affecting save.

    Validation and the production shortage precheck run before any
    transaction is opened. Everything else happens inside one transaction
    obtained from the transaction manager.
    """

    def __init__(
        self,
        transactions: ITransactionManager,
        catalog: ICatalogStore,
        ledger: IInventoryLedger,
        settings: LedgerSettings | None = None,
        listeners: list[ChangeListener] | None = None,
    ):
        self._transactions = transactions
        self._catalog = catalog
        self._ledger = ledger
        self._settings = settings or get_settings().ledger
        self._listeners: list[ChangeListener] = list(listeners or [])

    def add_listener(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    @property
    def default_category(self) -> ItemCategory:
        try:
            return ItemCategory(self._settings.default_category)
        except ValueError as e:
            raise ConfigurationError(
                f"Unknown default category: {self._settings.default_category}",
                code="INVALID_DEFAULT_CATEGORY",
            ) from e

    async def commit(self, document: SourceDocument) -> CommitResult:
        """
        Apply a document's stock effect and persist it atomically.

        Returns:
            CommitResult carrying the updated copy of the document. The
            argument itself is never modified.

        Raises:
            ValidationError: Missing or invalid fields.
            ShortageError: Ingredient stock cannot cover a production run.
            CatalogItemNotFoundError: Production of an unknown product.
            BOMNotDefinedError: Production of a product without a BOM.
            CatalogReferenceError: Unknown line SKU under the reject policy.
            TransactionConflictError: Retries exhausted on lock contention.
        """
        validate_document(document)

        with bind_document_context(document.kind.value, document.id):
            logger.info("document_commit_started")
            try:
                if isinstance(document, ProductionOrder):
                    await self._precheck_production(document)

                attempts = 0

                async def attempt() -> CommitResult:
                    nonlocal attempts
                    attempts += 1
                    return await self._apply(document)

                result = await self._get_retry_decorator()(attempt)()
                result.attempts = attempts
            except StockLedgerError as e:
                logger.warning("document_commit_failed", error=e.code, message=e.message)
                raise

            logger.info(
                "document_commit_completed",
                movements=len(result.movements),
                attempts=attempts,
            )

        await self._notify(
            ChangeEvent(
                entity=document.kind.value,
                entity_id=document.id,
                action="committed",
                occurred_at=result.committed_at,
            )
        )
        return result

    async def save_expense(self, document: ExpenseDocument) -> CommitResult:
        return await self.commit(document)

    async def save_sales_document(self, document: SalesDocument) -> CommitResult:
        return await self.commit(document)

    async def complete_production(
        self,
        product_sku: str,
        quantity: float,
        notes: str | None = None,
        created_by: str = "",
    ) -> CommitResult:
        order = ProductionOrder(
            product_sku=product_sku.strip(),
            quantity=quantity,
            notes=notes,
            created_by=created_by,
        )
        return await self.commit(order)

    async def adjust_stock(
        self,
        sku: str,
        quantity: float,
        note: str | None = None,
        name: str = "",
        category: ItemCategory | None = None,
        created_by: str = "",
    ) -> CommitResult:
        """Record a signed manual correction of one SKU."""
        adjustment = ManualAdjustment(
            sku=sku.strip(),
            quantity=quantity,
            note=note,
            name=name,
            category=category or self.default_category,
            created_by=created_by,
        )
        return await self.commit(adjustment)

    async def check_shortages(
        self, product_sku: str, quantity: float
    ) -> list[StockShortage]:
        """
        Preview which ingredients cannot cover a run, without writing.

        Raises:
            CatalogItemNotFoundError: Unknown product.
            BOMNotDefinedError: Product has no BOM.
        """
        if quantity <= 0:
            raise ValidationError("quantity", "must be greater than zero", quantity)
        product = await self._production_product(self._catalog, product_sku)
        return await self._find_shortages(self._ledger, product, quantity)

    async def delete_document(self, kind: DocumentKind, doc_id: str) -> None:
        """
        Delete a stored document.

        Movements it already produced stay in the log.
        """
        async with self._transactions.transaction() as session:
            deleted = await session.documents.delete(kind, doc_id)
        if not deleted:
            raise DocumentNotFoundError(kind.value, doc_id)

        logger.info("document_deleted", document_kind=kind.value, document_id=doc_id)
        await self._notify(
            ChangeEvent(
                entity=kind.value,
                entity_id=doc_id,
                action="deleted",
                occurred_at=datetime.now(UTC),
            )
        )

    # ------------------------------------------------------------------

    async def _apply(self, document: SourceDocument) -> CommitResult:
        """One transactional attempt of the commit."""
        async with self._transactions.transaction() as session:
            # Stored flags are read under the write lock
            stored = await session.documents.get(DocumentKind(document.kind), document.id)
            document = carry_stored_state(document, stored)
            plan = await self._plan(session, document)

            movements: list[Movement] = []
            records: dict[str, InventoryRecord] = {}
            for planned in plan:
                movement = await session.movements.record(
                    sku=planned.sku,
                    kind=planned.kind,
                    quantity=planned.quantity,
                    reference_id=document.id,
                    note=planned.note,
                )
                records[planned.sku] = await session.ledger.apply_delta(
                    planned.sku, planned.quantity, planned.name, planned.category
                )
                movements.append(movement)
                logger.debug(
                    "movement_recorded",
                    sku=planned.sku,
                    kind=planned.kind.value,
                    quantity=planned.quantity,
                )

            saved = await session.documents.save(mark_stocked(document, plan))

        return CommitResult(
            document=saved,
            movements=movements,
            records=list(records.values()),
        )

    async def _plan(
        self, session: StoreSession, document: SourceDocument
    ) -> list[PlannedMovement]:
        if isinstance(document, ManualAdjustment):
            return plan_adjustment(document)

        if isinstance(document, ProductionOrder):
            if production_effects(document) is None or document.is_stocked:
                return []
            product = await self._production_product(session.catalog, document.product_sku)
            # Re-checked against rows read under the write lock
            shortages = await self._find_shortages(session.ledger, product, document.quantity)
            if shortages:
                raise ShortageError(product.sku, [s.to_dict() for s in shortages])
            entries = await self._lookup_all(
                session.catalog, [c.sku for c in product.bom]
            )
            return plan_production(document, product, entries, self.default_category)

        if line_effect(document) is None:
            return []
        skus = [sku for _, sku, _ in pending_lines(document)]
        entries = await self._lookup_all(session.catalog, skus)
        if self._settings.unknown_sku_policy == "reject":
            for sku in skus:
                if entries[sku] is None:
                    raise CatalogReferenceError(sku, document.id)
        return plan_lines(document, entries, self.default_category)

    async def _precheck_production(self, order: ProductionOrder) -> None:
        if production_effects(order) is None or order.is_stocked:
            return
        shortages = await self.check_shortages(order.product_sku, order.quantity)
        if shortages:
            logger.warning(
                "shortage_detected",
                product_sku=order.product_sku,
                shortages=[s.sku for s in shortages],
            )
            raise ShortageError(order.product_sku, [s.to_dict() for s in shortages])

    @staticmethod
    async def _production_product(catalog: ICatalogStore, product_sku: str) -> CatalogEntry:
        product = await catalog.get(product_sku.strip())
        if product is None:
            raise CatalogItemNotFoundError(product_sku)
        if not product.has_bom:
            raise BOMNotDefinedError(product.sku)
        return product

    @staticmethod
    async def _find_shortages(
        ledger: IInventoryLedger, product: CatalogEntry, run_quantity: float
    ) -> list[StockShortage]:
        shortages = []
        for sku, required in CatalogBOMResolver.required_consumption(product, run_quantity):
            record = await ledger.get(sku)
            available = record.stock_level if record else 0.0
            if available < required:
                shortages.append(
                    StockShortage(sku=sku, required=required, available=available)
                )
        return shortages

    @staticmethod
    async def _lookup_all(
        catalog: ICatalogStore, skus: list[str]
    ) -> dict[str, CatalogEntry | None]:
        entries: dict[str, CatalogEntry | None] = {}
        for sku in skus:
            if sku not in entries:
                entries[sku] = await catalog.get(sku)
        return entries

    async def _notify(self, event: ChangeEvent) -> None:
        for listener in self._listeners:
            try:
                await listener(event)
            except Exception as e:
                # The commit is already durable; a stale marker is tolerated
                logger.warning(
                    "change_listener_failed",
                    entity=event.entity,
                    entity_id=event.entity_id,
                    error=str(e),
                )

    def _get_retry_decorator(self) -> Any:
        """Get tenacity retry decorator for transaction conflicts."""
        settings = self._settings
        return retry(
            stop=stop_after_attempt(max(1, settings.commit_max_retries)),
            wait=wait_exponential(
                multiplier=settings.retry_delay,
                min=settings.retry_delay,
                max=settings.retry_delay * (settings.retry_multiplier**3),
            ),
            retry=retry_if_exception_type(TransactionConflictError),
            before_sleep=self._log_retry,
            reraise=True,
        )

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        logger.warning(
            "commit_retry",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )
