"""
Error Handlers

Render every failure as {"error": {"code", "message", "details"}}.
"""

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ...domain.errors import AuthenticationError, DomainError, PartialUpdateError
from ...utils.logger import get_correlation_id, get_logger
from .correlation import CORRELATION_HEADER

logger = get_logger(__name__)


def _error_response(
    status_code: int,
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
    headers = dict(headers or {})
    correlation_id = get_correlation_id()
    if correlation_id:
        headers[CORRELATION_HEADER] = correlation_id
    
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"error": {"code": code, "message": message, "details": details or {}}}),
        headers=headers
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """
    Map a DomainError to its own HTTP status.
    
    PartialUpdateError is logged as an error even though its status is 207:
    the complaint's timeline is missing an entry until the retry succeeds.
    """
    if exc.http_status >= 500 or isinstance(exc, PartialUpdateError):
        log = logger.error
    else:
        log = logger.warning
    log(
        f"{exc.error_code}: {exc.message}",
        extra={"error_code": exc.error_code, "path": request.url.path}
    )
    
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return _error_response(exc.http_status, exc.error_code, exc.message, exc.details, headers)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Request body, path or query did not match the schema"""
    errors = [
        {"field": ".".join(str(part) for part in err.get("loc", ())), "message": err.get("msg")}
        for err in exc.errors()
    ]
    logger.warning(
        f"Request validation failed: {errors}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path}
    )
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        "Request validation failed",
        {"errors": errors}
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything unexpected: 500 with the stack trace in the error log"""
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=True,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path}
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An unexpected error occurred"
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach the handlers above to app"""
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)
