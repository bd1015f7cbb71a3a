"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Every error body has the
same shape: error, message, details and the request_id it belongs to.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import ShopLedgerException
from app.shared.context import get_request_id

logger = logging.getLogger(__name__)

# Domain error_code -> HTTP status; unlisted codes are client errors (400)
_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "VALIDATION_ERROR": 400,
    "INSUFFICIENT_STOCK": 409,
    "SYSTEM_BUSY": 503,
    "ID_ALLOCATION_FAILED": 503,
    "SCHEMA_ERROR": 500,
}

RETRY_AFTER_SECONDS = 1


def _error_response(
    status_code: int,
    error: str,
    message: Any,
    details: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body: dict[str, Any] = {"error": error, "message": message}
    if details:
        body["details"] = details
    request_id = get_request_id()
    if request_id:
        body["request_id"] = request_id
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def _shopledger_exception_handler(
    request: Request, exc: ShopLedgerException
) -> JSONResponse:
    """Map a domain exception to its status; retryable errors get Retry-After."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if exc.is_retryable:
        logger.warning("%s on %s: %s", exc.error_code, request.url.path, exc.message)
    elif status >= 500:
        logger.error("%s on %s: %s", exc.error_code, request.url.path, exc.message)
    headers = {"Retry-After": str(RETRY_AFTER_SECONDS)} if exc.is_retryable else None
    return _error_response(status, exc.error_code, exc.message, exc.details, headers)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _error_response(422, "VALIDATION_ERROR", "Request validation failed", exc.errors())


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _error_response(exc.status_code, "HTTP_ERROR", exc.detail, headers=exc.headers)


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; the exception text is exposed only in debug mode."""
    logger.exception("Unhandled exception on %s: %s", request.url.path, exc)
    detail = str(exc) if get_settings().debug else "Internal server error"
    return _error_response(500, "INTERNAL_ERROR", detail)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: ShopLedgerException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(ShopLedgerException, _shopledger_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
