"""Domain Models - Pydantic schemas for all entities"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict, computed_field

from .enums import ComplaintStatus, ComplaintCategory, ComplaintPriority, UserRole


# ============================================================================
# Identity
# ============================================================================

class ActorContext(BaseModel):
    """Authenticated principal supplied by the identity provider"""
    model_config = ConfigDict(extra="forbid")
    
    user_id: str = Field(..., description="Principal identifier (token subject)")
    email: Optional[str] = Field(None, description="Email claim, informational only")


class RoleAssignment(BaseModel):
    """Row of the identity provider's role table"""
    model_config = ConfigDict(extra="ignore")
    
    user_id: str
    role: UserRole


class Profile(BaseModel):
    """Display profile of a student or administrator (read-only here)"""
    model_config = ConfigDict(extra="ignore")
    
    user_id: str
    first_name: str
    last_name: str
    student_id: Optional[str] = None
    batch_number: Optional[str] = None
    brotocare_id: Optional[str] = None
    
    @computed_field
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


# ============================================================================
# Complaint Lifecycle
# ============================================================================

class Complaint(BaseModel):
    """A grievance filed by a student"""
    model_config = ConfigDict(extra="ignore")
    
    complaint_id: str = Field(..., description="Unique complaint ID")
    user_id: str = Field(..., description="Filing student")
    title: str
    description: str
    category: ComplaintCategory
    priority: ComplaintPriority
    status: ComplaintStatus = Field(default=ComplaintStatus.SUBMITTED)
    attachment_url: Optional[str] = Field(None, description="Opaque file storage reference")
    created_at: datetime
    updated_at: datetime
    resolved_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    version: int = Field(default=1, description="Optimistic concurrency version")


class TimelineEntry(BaseModel):
    """Status change recorded in the complaint's audit timeline (immutable)"""
    model_config = ConfigDict(extra="ignore", frozen=True)
    
    entry_id: str
    complaint_id: str
    status: ComplaintStatus
    note: Optional[str] = None
    created_by: str
    created_at: datetime


class Comment(BaseModel):
    """Remark on a complaint; is_admin is captured when posted and never recomputed"""
    model_config = ConfigDict(extra="ignore", frozen=True)
    
    comment_id: str
    complaint_id: str
    user_id: str
    comment: str
    is_admin: bool
    created_at: datetime


# ============================================================================
# Read Projections
# ============================================================================

class EnrichedComplaint(Complaint):
    """Complaint joined with the owner's profile (None when unresolvable)"""
    profile: Optional[Profile] = None


class EnrichedComment(Comment):
    """Comment joined with the author's profile"""
    profile: Optional[Profile] = None
    
    @computed_field
    @property
    def author_label(self) -> str:
        if self.is_admin:
            return "ADMIN"
        if self.profile:
            return self.profile.full_name
        return "Student"


class ComplaintFilters(BaseModel):
    """Exact-match admin dashboard filters; unset fields match everything"""
    category: Optional[ComplaintCategory] = None
    status: Optional[ComplaintStatus] = None
    priority: Optional[ComplaintPriority] = None
    
    def matches(self, complaint: Complaint) -> bool:
        if self.category is not None and complaint.category != self.category:
            return False
        if self.status is not None and complaint.status != self.status:
            return False
        if self.priority is not None and complaint.priority != self.priority:
            return False
        return True


class AdminSummary(BaseModel):
    """Dashboard counters"""
    total: int = 0
    active: int = 0
    resolved: int = 0
    high_priority: int = 0


class StudentComplaintsView(BaseModel):
    """A student's own complaints split by whether they are still open"""
    active: List[Complaint] = Field(default_factory=list)
    closed: List[Complaint] = Field(default_factory=list)


class AdminComplaintsView(BaseModel):
    """Filtered, enriched complaint list plus summary over all complaints"""
    complaints: List[EnrichedComplaint] = Field(default_factory=list)
    summary: AdminSummary = Field(default_factory=AdminSummary)


class ComplaintDetail(BaseModel):
    """Everything the complaint detail page shows"""
    complaint: EnrichedComplaint
    comments: List[EnrichedComment] = Field(default_factory=list)
    timeline: List[TimelineEntry] = Field(default_factory=list)


class AccessInfo(BaseModel):
    """Role lookup result for the calling principal"""
    user_id: str
    role: Optional[UserRole] = None
    is_admin: bool = False
    is_student: bool = False
