"""
Admin Routes

Complaint triage for administrators. The role is checked against the role
table on every call.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from ..deps import get_current_user_dep, get_complaint_service_dep
from ...domain.models import ActorContext, AdminComplaintsView, ComplaintFilters
from ...domain.enums import ComplaintCategory, ComplaintPriority, ComplaintStatus
from ...services.complaint_service import ComplaintService
from ...utils.logger import get_logger
from .schemas import (
    UpdateStatusRequest, UpdateStatusResponse,
    RetryTimelineRequest, RetryTimelineResponse
)

logger = get_logger(__name__)
router = APIRouter()


@router.get("/complaints", response_model=AdminComplaintsView)
async def list_complaints(
    category: Optional[ComplaintCategory] = Query(None, description="Filter by category"),
    status: Optional[ComplaintStatus] = Query(None, description="Filter by status"),
    priority: Optional[ComplaintPriority] = Query(None, description="Filter by priority"),
    actor: ActorContext = Depends(get_current_user_dep),
    service: ComplaintService = Depends(get_complaint_service_dep)
):
    """
    Admin dashboard
    
    All complaints with the filing student's profile. Filters are exact
    match and combined with AND. Summary counts cover every complaint.
    """
    filters = ComplaintFilters(category=category, status=status, priority=priority)
    return await service.list_for_admin(actor, filters)


@router.patch("/complaints/{complaint_id}/status", response_model=UpdateStatusResponse)
async def update_status(
    complaint_id: str,
    request: UpdateStatusRequest,
    actor: ActorContext = Depends(get_current_user_dep),
    service: ComplaintService = Depends(get_complaint_service_dep)
):
    """
    Change a complaint's status
    
    A timeline entry is written when a note is supplied. Responds 207
    PARTIAL_UPDATE if the status was saved but the entry was not.
    """
    entry_id = service.update_status(actor, complaint_id, request.status, request.note)
    
    logger.info(
        f"Status update by admin: {request.status}",
        extra={"complaint_id": complaint_id, "user_id": actor.user_id, "status": request.status}
    )
    return UpdateStatusResponse(complaint_id=complaint_id, status=request.status, entry_id=entry_id)


@router.post("/complaints/{complaint_id}/timeline/retry", response_model=RetryTimelineResponse)
async def retry_timeline(
    complaint_id: str,
    request: RetryTimelineRequest,
    actor: ActorContext = Depends(get_current_user_dep),
    service: ComplaintService = Depends(get_complaint_service_dep)
):
    """Write the timeline entry of a status change that returned PARTIAL_UPDATE"""
    entry_id = service.retry_timeline_append(actor, complaint_id, request.status, request.note)
    return RetryTimelineResponse(entry_id=entry_id)
