"""
Complaint Routes

Endpoints for students filing and following complaints. Detail, comment
and timeline reads are shared with admins.
"""

from typing import List
from fastapi import APIRouter, Depends, status

from ..deps import get_current_user_dep, get_complaint_service_dep
from ...domain.models import (
    ActorContext, Complaint, ComplaintDetail, EnrichedComment, StudentComplaintsView,
    TimelineEntry
)
from ...services.complaint_service import ComplaintService
from .schemas import (
    SubmitComplaintRequest, SubmitComplaintResponse,
    PostCommentRequest, PostCommentResponse
)

router = APIRouter()


@router.post("/", response_model=SubmitComplaintResponse, status_code=status.HTTP_201_CREATED)
async def submit_complaint(
    request: SubmitComplaintRequest,
    actor: ActorContext = Depends(get_current_user_dep),
    service: ComplaintService = Depends(get_complaint_service_dep)
):
    """
    File a new complaint
    
    The complaint starts in `submitted` and is owned by the caller.
    """
    complaint_id = service.submit_complaint(
        actor=actor,
        title=request.title,
        description=request.description,
        category=request.category,
        priority=request.priority,
        attachment_url=request.attachment_url
    )
    return SubmitComplaintResponse(complaint_id=complaint_id)


@router.get("/mine", response_model=StudentComplaintsView)
async def list_my_complaints(
    actor: ActorContext = Depends(get_current_user_dep),
    service: ComplaintService = Depends(get_complaint_service_dep)
):
    """List the caller's complaints split into active and closed"""
    return service.list_for_student(actor)


@router.get("/{complaint_id}", response_model=Complaint)
async def get_complaint(
    complaint_id: str,
    actor: ActorContext = Depends(get_current_user_dep),
    service: ComplaintService = Depends(get_complaint_service_dep)
):
    """Get one complaint"""
    return service.get_complaint(actor, complaint_id)


@router.get("/{complaint_id}/detail", response_model=ComplaintDetail)
async def get_complaint_detail(
    complaint_id: str,
    actor: ActorContext = Depends(get_current_user_dep),
    service: ComplaintService = Depends(get_complaint_service_dep)
):
    """
    Get complaint details
    
    Returns the complaint with its owner's profile, the full comment
    thread and the status timeline.
    """
    return await service.get_complaint_detail(actor, complaint_id)


@router.get("/{complaint_id}/comments", response_model=List[EnrichedComment])
async def list_comments(
    complaint_id: str,
    actor: ActorContext = Depends(get_current_user_dep),
    service: ComplaintService = Depends(get_complaint_service_dep)
):
    """List comments, oldest first"""
    return await service.list_comments(actor, complaint_id)


@router.post(
    "/{complaint_id}/comments",
    response_model=PostCommentResponse,
    status_code=status.HTTP_201_CREATED
)
async def post_comment(
    complaint_id: str,
    request: PostCommentRequest,
    actor: ActorContext = Depends(get_current_user_dep),
    service: ComplaintService = Depends(get_complaint_service_dep)
):
    """Add a comment; admin attribution comes from the caller's current role"""
    comment_id = service.post_comment(actor, complaint_id, request.comment)
    return PostCommentResponse(comment_id=comment_id)


@router.get("/{complaint_id}/timeline", response_model=List[TimelineEntry])
async def list_timeline(
    complaint_id: str,
    actor: ActorContext = Depends(get_current_user_dep),
    service: ComplaintService = Depends(get_complaint_service_dep)
):
    """List timeline entries, oldest first"""
    return service.list_timeline(actor, complaint_id)
