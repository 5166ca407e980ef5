"""HTTP layer: routes, request dependencies and middleware"""
from .deps import get_current_user_dep, get_complaint_service_dep

__all__ = ["get_current_user_dep", "get_complaint_service_dep"]
