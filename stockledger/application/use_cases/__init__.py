"""Application use cases."""

from stockledger.application.use_cases.adjust_stock import AdjustStockUseCase
from stockledger.application.use_cases.complete_production import (
    CompleteProductionUseCase,
    ShortageCheckResult,
)
from stockledger.application.use_cases.save_catalog_item import SaveCatalogItemUseCase
from stockledger.application.use_cases.save_expense import SaveExpenseUseCase
from stockledger.application.use_cases.save_sales_document import SaveSalesDocumentUseCase

__all__ = [
    "SaveExpenseUseCase",
    "SaveSalesDocumentUseCase",
    "CompleteProductionUseCase",
    "ShortageCheckResult",
    "AdjustStockUseCase",
    "SaveCatalogItemUseCase",
]
