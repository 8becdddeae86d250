"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from stockledger.application.dto.requests import (
    AdjustStockRequest,
    BOMComponentRequest,
    CheckShortagesRequest,
    CompleteProductionRequest,
    LineItemRequest,
    SaveCatalogItemRequest,
    SaveExpenseRequest,
    SaveSalesDocumentRequest,
    UpdateInventoryRecordRequest,
)
from stockledger.application.dto.responses import (
    AdjustmentCommitResponse,
    AdjustmentListResponse,
    AdjustmentResponse,
    BOMComponentResponse,
    CatalogItemResponse,
    CatalogListResponse,
    CommitSummary,
    ErrorResponse,
    ExpenseCommitResponse,
    ExpenseListResponse,
    ExpenseResponse,
    HealthResponse,
    InventoryListResponse,
    InventoryRecordResponse,
    LastModifiedResponse,
    LedgerDriftResponse,
    LineItemResponse,
    ListResponse,
    MovementResponse,
    ProductionCommitResponse,
    ProductionListResponse,
    ProductionOrderResponse,
    ProviderHealthResponse,
    ReconciliationResponse,
    SalesCommitResponse,
    SalesDocumentListResponse,
    SalesDocumentResponse,
    ShortageCheckResponse,
    ShortageResponse,
)

__all__ = [
    # Requests
    "LineItemRequest",
    "SaveExpenseRequest",
    "SaveSalesDocumentRequest",
    "CompleteProductionRequest",
    "CheckShortagesRequest",
    "AdjustStockRequest",
    "UpdateInventoryRecordRequest",
    "BOMComponentRequest",
    "SaveCatalogItemRequest",
    # Responses
    "ProviderHealthResponse",
    "HealthResponse",
    "ErrorResponse",
    "ListResponse",
    "InventoryRecordResponse",
    "InventoryListResponse",
    "MovementResponse",
    "LedgerDriftResponse",
    "ReconciliationResponse",
    "LastModifiedResponse",
    "LineItemResponse",
    "ExpenseResponse",
    "SalesDocumentResponse",
    "ProductionOrderResponse",
    "AdjustmentResponse",
    "CommitSummary",
    "ExpenseCommitResponse",
    "SalesCommitResponse",
    "ProductionCommitResponse",
    "AdjustmentCommitResponse",
    "ExpenseListResponse",
    "SalesDocumentListResponse",
    "ProductionListResponse",
    "AdjustmentListResponse",
    "ShortageResponse",
    "ShortageCheckResponse",
    "BOMComponentResponse",
    "CatalogItemResponse",
    "CatalogListResponse",
]
