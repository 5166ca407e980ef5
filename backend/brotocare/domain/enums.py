"""Domain Enumerations - All status and type definitions"""
from enum import Enum


class ComplaintStatus(str, Enum):
    """Complaint lifecycle status"""
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    IN_PROCESS = "in_process"
    RESOLVED = "resolved"
    CLOSED = "closed"
    
    @property
    def is_finished(self) -> bool:
        """Resolved and closed complaints leave the active list"""
        return self in (ComplaintStatus.RESOLVED, ComplaintStatus.CLOSED)


class ComplaintCategory(str, Enum):
    """What the grievance is about"""
    ACADEMIC = "academic"
    HOSTEL = "hostel"
    FACULTY_BEHAVIOUR = "faculty_behaviour"
    INFRASTRUCTURE = "infrastructure"
    OTHER = "other"


class ComplaintPriority(str, Enum):
    """Priority chosen by the student at submission"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class UserRole(str, Enum):
    """Roles held in the identity provider's role_assignments table"""
    STUDENT = "student"
    ADMIN = "admin"
