"""
API Middleware Module

Modules:
    - correlation: X-Correlation-Id binding and per-request log line
    - error_handlers: DomainError, request validation and fallback handlers
"""

from .correlation import CORRELATION_HEADER, CorrelationIdMiddleware
from .error_handlers import register_error_handlers

__all__ = ["CORRELATION_HEADER", "CorrelationIdMiddleware", "register_error_handlers"]
