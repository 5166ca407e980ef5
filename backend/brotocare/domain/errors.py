"""Domain Errors - Centralized Exception Hierarchy"""
from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base domain error - all errors extend this"""
    
    error_code: str = "DOMAIN_ERROR"
    http_status: int = 400
    
    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if error_code:
            self.error_code = error_code
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert error to API response dict"""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details
            }
        }


# Authentication & Authorization Errors
class AuthenticationError(DomainError):
    """Token missing, invalid, or expired"""
    error_code = "AUTHENTICATION_ERROR"
    http_status = 401


class ForbiddenError(DomainError):
    """Principal lacks the required role"""
    error_code = "FORBIDDEN"
    http_status = 403


# Validation Errors
class ValidationError(DomainError):
    """Input validation failed"""
    error_code = "VALIDATION_ERROR"
    http_status = 400


class EmptyCommentError(ValidationError):
    """Comment text is blank"""
    error_code = "EMPTY_COMMENT"


# Not Found Errors
class NotFoundError(DomainError):
    """Resource not found, or not visible to the caller"""
    error_code = "NOT_FOUND"
    http_status = 404


class ComplaintNotFoundError(NotFoundError):
    """Complaint not found"""
    error_code = "COMPLAINT_NOT_FOUND"


# Conflict Errors
class ConflictError(DomainError):
    """Resource conflict"""
    error_code = "CONFLICT"
    http_status = 409


class InvalidTransitionError(ConflictError):
    """Target status is unknown or equal to the current status"""
    error_code = "INVALID_TRANSITION"


class ConcurrencyError(ConflictError):
    """Optimistic concurrency conflict"""
    error_code = "CONCURRENCY_CONFLICT"


# Write Outcome Errors
class PartialUpdateError(DomainError):
    """
    Status change persisted but its timeline entry was not written.
    
    The caller retries only the audit append; details carry what to append.
    """
    error_code = "PARTIAL_UPDATE"
    http_status = 207


# External Service Errors
class UpstreamUnavailableError(DomainError):
    """Backing store or identity provider failed or timed out"""
    error_code = "UPSTREAM_UNAVAILABLE"
    http_status = 503
