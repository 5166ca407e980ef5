"""
Access Routes

Lets front ends ask which role the caller currently holds.
"""

from fastapi import APIRouter, Depends

from ..deps import get_current_user_dep, get_complaint_service_dep
from ...domain.models import ActorContext, AccessInfo
from ...services.complaint_service import ComplaintService

router = APIRouter()


@router.get("/access", response_model=AccessInfo)
async def check_access(
    actor: ActorContext = Depends(get_current_user_dep),
    service: ComplaintService = Depends(get_complaint_service_dep)
):
    """Current role of the caller, looked up fresh"""
    return service.check_access(actor)
