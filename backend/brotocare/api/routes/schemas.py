"""
Complaint Schemas

Request and response models for complaint API endpoints.
"""

from typing import Optional
from pydantic import BaseModel, Field

from ...domain.enums import ComplaintCategory, ComplaintPriority


# =============================================================================
# Complaint Schemas
# =============================================================================

class SubmitComplaintRequest(BaseModel):
    """Request to file a complaint"""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=5000)
    category: ComplaintCategory
    priority: ComplaintPriority
    attachment_url: Optional[str] = Field(None, max_length=2048, description="Reference returned by file storage")


class SubmitComplaintResponse(BaseModel):
    """Response after filing a complaint"""
    complaint_id: str


# =============================================================================
# Comment Schemas
# =============================================================================

class PostCommentRequest(BaseModel):
    """Request to comment on a complaint"""
    comment: str = Field(..., max_length=2000)


class PostCommentResponse(BaseModel):
    """Response after posting a comment"""
    comment_id: str


# =============================================================================
# Status Schemas
# =============================================================================

class UpdateStatusRequest(BaseModel):
    """Request to move a complaint to another status"""
    # Plain string: unknown values are rejected as invalid transitions
    status: str = Field(..., max_length=50)
    note: Optional[str] = Field(None, max_length=2000)


class UpdateStatusResponse(BaseModel):
    """Response after a status change"""
    complaint_id: str
    status: str
    entry_id: Optional[str] = Field(None, description="Timeline entry written for this change, if any")


class RetryTimelineRequest(BaseModel):
    """Request to write the timeline entry a partial update left out"""
    status: str = Field(..., max_length=50)
    note: Optional[str] = Field(None, max_length=2000)


class RetryTimelineResponse(BaseModel):
    """Response after the timeline entry was written"""
    entry_id: str
