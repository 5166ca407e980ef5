"""API Routes module"""
from fastapi import APIRouter

from .complaints import router as complaints_router
from .admin import router as admin_router
from .access import router as access_router

# Main API router
api_router = APIRouter()

api_router.include_router(complaints_router, prefix="/complaints", tags=["Complaints"])
api_router.include_router(admin_router, prefix="/admin", tags=["Admin"])
api_router.include_router(access_router, prefix="/me", tags=["Access"])

__all__ = ["api_router"]
