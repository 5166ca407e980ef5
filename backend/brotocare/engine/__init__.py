"""Complaint lifecycle and audit core"""
from .role_gate import RoleGate
from .profile_enricher import ProfileEnricher
from .timeline_ledger import TimelineLedger
from .comment_thread import CommentThread
from .lifecycle import ComplaintLifecycleManager

__all__ = [
    "RoleGate",
    "ProfileEnricher",
    "TimelineLedger",
    "CommentThread",
    "ComplaintLifecycleManager",
]
