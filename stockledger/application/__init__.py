"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection

Use cases are the only entry point for API handlers that write.
"""

from stockledger.application.services import (
    get_bom_resolver,
    get_commit_service,
    get_reconciler,
    reset_services,
)
from stockledger.application.use_cases import (
    AdjustStockUseCase,
    CompleteProductionUseCase,
    SaveCatalogItemUseCase,
    SaveExpenseUseCase,
    SaveSalesDocumentUseCase,
)

__all__ = [
    # Use Cases
    "SaveExpenseUseCase",
    "SaveSalesDocumentUseCase",
    "CompleteProductionUseCase",
    "AdjustStockUseCase",
    "SaveCatalogItemUseCase",
    # Service factories
    "get_commit_service",
    "get_bom_resolver",
    "get_reconciler",
    "reset_services",
]
