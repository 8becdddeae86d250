"""
Ledger reconciliation.

The inventory ledger is a running total of the movement log. This service
recomputes the totals from the log and reports every SKU whose stored
stock level has drifted from them.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from stockledger.config import get_logger
from stockledger.core.interfaces.transaction import ITransactionManager

logger = get_logger(__name__)

# Float sums of many movements may differ in the last bits
TOLERANCE = 1e-9


@dataclass
class LedgerDrift:
    sku: str
    stock_level: float | None  # None when the movement log has no ledger record
    movement_total: float

    @property
    def difference(self) -> float:
        return (self.stock_level or 0.0) - self.movement_total

    def to_dict(self) -> dict:
        return {
            "sku": self.sku,
            "stock_level": self.stock_level,
            "movement_total": self.movement_total,
            "difference": self.difference,
        }


@dataclass
class ReconciliationReport:
    checked: int = 0
    drifts: list[LedgerDrift] = field(default_factory=list)
    generated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_consistent(self) -> bool:
        return not self.drifts


class LedgerReconciler:
    """
    Compares ledger records against movement totals.

    Both sides are read in one read transaction, so a commit landing during
    the scan is either fully included or fully excluded.
    """

    def __init__(self, transactions: ITransactionManager, page_size: int = 500):
        self._transactions = transactions
        self._page_size = page_size

    async def reconcile(self) -> ReconciliationReport:
        async with self._transactions.read_transaction() as session:
            totals = await session.movements.sum_by_sku()

            levels: dict[str, float] = {}
            offset = 0
            while True:
                page = await session.ledger.list_records(
                    limit=self._page_size, offset=offset
                )
                for record in page:
                    levels[record.sku] = record.stock_level
                if len(page) < self._page_size:
                    break
                offset += self._page_size

        report = ReconciliationReport()
        for sku in sorted(set(levels) | set(totals)):
            report.checked += 1
            level = levels.get(sku)
            total = totals.get(sku, 0.0)
            if level is None or abs(level - total) > TOLERANCE:
                report.drifts.append(
                    LedgerDrift(sku=sku, stock_level=level, movement_total=total)
                )

        if report.drifts:
            logger.warning(
                "ledger_drift_detected",
                checked=report.checked,
                drifted=[d.sku for d in report.drifts],
            )
        else:
            logger.info("ledger_reconciled", checked=report.checked)
        return report
