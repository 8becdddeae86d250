"""
Core business logic services.

Layer-pure services that depend only on:
- stockledger/core/entities/*
- stockledger/core/interfaces/*
- stockledger/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from stockledger.core.services.bom_resolver import CatalogBOMResolver
from stockledger.core.services.document_commit import (
    ChangeEvent,
    ChangeListener,
    CommitResult,
    DocumentCommitService,
)
from stockledger.core.services.document_validator import validate_document
from stockledger.core.services.effect_rules import (
    SALES_EFFECTS,
    StockEffect,
    expense_effect,
    line_effect,
    production_effects,
    sales_effect,
)
from stockledger.core.services.reconciliation import (
    LedgerDrift,
    LedgerReconciler,
    ReconciliationReport,
)
from stockledger.core.services.stock_planner import PlannedMovement, mark_stocked

__all__ = [
    # Catalog / BOM
    "CatalogBOMResolver",
    # Commit protocol
    "ChangeEvent",
    "ChangeListener",
    "CommitResult",
    "DocumentCommitService",
    "validate_document",
    # Effect table
    "SALES_EFFECTS",
    "StockEffect",
    "expense_effect",
    "line_effect",
    "production_effects",
    "sales_effect",
    # Planning
    "PlannedMovement",
    "mark_stocked",
    # Reconciliation
    "LedgerDrift",
    "LedgerReconciler",
    "ReconciliationReport",
]
