"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action
- details: structured context (e.g. the shortage list of a rejected run)
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from stockledger.application.dto.responses import ErrorResponse
from stockledger.config import get_logger
from stockledger.core.exceptions import (
    BOMCycleError,
    BOMNotDefinedError,
    CatalogError,
    CatalogItemNotFoundError,
    CatalogReferenceError,
    ConfigurationError,
    DocumentNotFoundError,
    InventoryRecordNotFoundError,
    ShortageError,
    StockLedgerError,
    StorageError,
    TransactionConflictError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes; subclasses before their bases
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    CatalogItemNotFoundError: status.HTTP_404_NOT_FOUND,
    DocumentNotFoundError: status.HTTP_404_NOT_FOUND,
    InventoryRecordNotFoundError: status.HTTP_404_NOT_FOUND,
    ShortageError: status.HTTP_409_CONFLICT,
    TransactionConflictError: status.HTTP_409_CONFLICT,
    CatalogReferenceError: 422,
    BOMNotDefinedError: 422,
    BOMCycleError: 422,
    CatalogError: 422,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    FileNotFoundError: status.HTTP_404_NOT_FOUND,
    ValueError: status.HTTP_400_BAD_REQUEST,
    KeyError: status.HTTP_404_NOT_FOUND,
}

# Hint messages per error code / exception type
HINT_MAP: dict[str, str] = {
    "DOCUMENT_NOT_FOUND": "Check the document ID and list documents of that kind.",
    "CATALOG_ITEM_NOT_FOUND": "Check the SKU and try GET /api/catalog to list catalog items.",
    "INVENTORY_RECORD_NOT_FOUND": "The SKU has no stock history yet. Try GET /api/inventory.",
    "INSUFFICIENT_STOCK": "Receive or adjust the listed ingredients, or reduce the run quantity.",
    "TRANSACTION_CONFLICT": "Another write held the ledger lock. Retry the request.",
    "CATALOG_REFERENCE_ERROR": "Add the SKU to the catalog before referencing it on a document.",
    "BOM_NOT_DEFINED": "Define a bill of materials for the product before producing it.",
    "BOM_CYCLE": "A BOM may not contain its own product directly or indirectly.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "ValidationError": "Check the request body fields and types.",
    "FileNotFoundError": "The requested file or resource was not found.",
    "ValueError": "A parameter value is invalid. Check the request.",
    "KeyError": "The requested key was not found.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The request conflicts with the current stock state.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
    503: "The service is temporarily unavailable. Retry later.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert exception to standardized JSON response."""
    status_code = _status_for(exc)

    # Prefer StockLedgerError.code, fall back to class name
    if isinstance(exc, StockLedgerError):
        error_code = exc.code
        message = exc.message
        details = exc.details or None
    else:
        error_code = exc.__class__.__name__
        message = str(exc)
        details = None

    request_id = getattr(request.state, "request_id", None)

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "request_error",
        request_id=request_id,
        path=request.url.path,
        status=status_code,
        error_type=error_code,
        error=message,
        traceback=traceback.format_exc() if status_code >= 500 else None,
    )

    error_response = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=_get_hint(error_code, status_code),
        details=details,
        path=request.url.path,
    )

    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Converts exceptions to standardized JSON error responses.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)

        except Exception as e:
            return build_error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(StockLedgerError)
    async def domain_exception_handler(
        request: Request,
        exc: StockLedgerError,
    ) -> JSONResponse:
        """Handle domain errors raised by use cases and stores."""
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint="Check the request body fields and types.",
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = _infer_error_code(exc.status_code, exc.detail or "")
        hint = _get_hint(error_code, exc.status_code)

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=exc.detail or "An error occurred",
                hint=hint,
                path=request.url.path,
            ).model_dump(mode="json"),
        )


def _infer_error_code(status_code: int, detail: str) -> str:
    """Infer a machine-readable error code from HTTPException detail."""
    detail_lower = detail.lower()

    if status_code == 404:
        if "document" in detail_lower:
            return "DOCUMENT_NOT_FOUND"
        if "catalog" in detail_lower:
            return "CATALOG_ITEM_NOT_FOUND"
        if "inventory" in detail_lower:
            return "INVENTORY_RECORD_NOT_FOUND"
        return "NOT_FOUND"

    if status_code == 400:
        return "BAD_REQUEST"

    if status_code == 422:
        return "UNPROCESSABLE_ENTITY"

    return "HTTP_ERROR"
