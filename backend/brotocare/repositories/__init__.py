"""Repository modules - Data access layer"""
from .mongo_client import get_database, get_collection
from .complaint_repo import ComplaintRepository
from .timeline_repo import TimelineRepository
from .comment_repo import CommentRepository
from .role_repo import RoleRepository
from .profile_repo import ProfileRepository

__all__ = [
    "get_database",
    "get_collection",
    "ComplaintRepository",
    "TimelineRepository",
    "CommentRepository",
    "RoleRepository",
    "ProfileRepository",
]
