"""Service modules - Business logic layer"""
from .complaint_service import ComplaintService

__all__ = [
    "ComplaintService",
]
