"""API Dependencies - Authentication and service wiring for routes"""
from functools import lru_cache
from typing import Optional
from fastapi import Header, HTTPException, status

from ..domain.models import ActorContext
from ..domain.errors import AuthenticationError
from ..services.complaint_service import ComplaintService
from ..utils.jwt import get_current_user


def _unauthorized(error: AuthenticationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=error.to_dict(),
        headers={"WWW-Authenticate": "Bearer"}
    )


async def get_current_user_dep(
    authorization: Optional[str] = Header(None)
) -> ActorContext:
    """
    Principal from the Authorization bearer token.
    
    Only identity is established here; roles are checked by the service on
    each call.
    
    Raises:
        HTTPException: 401 if the header is missing or the token is invalid
    """
    try:
        return get_current_user(authorization)
    except AuthenticationError as e:
        raise _unauthorized(e)


@lru_cache
def get_complaint_service_dep() -> ComplaintService:
    """
    Complaint service wired to the MongoDB repositories.
    
    Built on first use and shared across requests: the repositories and
    engine components hold no per-request state.
    """
    return ComplaintService()
