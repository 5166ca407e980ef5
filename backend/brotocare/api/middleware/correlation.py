"""
Correlation ID Middleware

Binds a correlation ID to every request and writes one log line per
request once the response is ready.
"""

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from ...utils.idgen import generate_correlation_id
from ...utils.logger import get_logger, reset_correlation_id, set_correlation_id

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-Id"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Reuses an incoming X-Correlation-Id or generates one, keeps it in the
    logging context for the duration of the request, and echoes it back.
    """
    
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or generate_correlation_id()
        token = set_correlation_id(correlation_id)
        
        start = time.perf_counter()
        status_code = None
        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            logger.info(
                f"{request.method} {request.url.path} -> {status_code}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": status_code,
                    "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                }
            )
            reset_correlation_id(token)
        
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
