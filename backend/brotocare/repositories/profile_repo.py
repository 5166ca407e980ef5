"""Profile Repository - Async lookups of display profiles"""
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorCollection

from .mongo_client import get_async_database, translate_store_errors
from ..domain.models import Profile
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ProfileRepository:
    """Read-only access to profiles, used by the enrichment fan-out"""
    
    def __init__(self):
        self._profiles: AsyncIOMotorCollection = get_async_database()["profiles"]
    
    @translate_store_errors
    async def get_profile(self, user_id: str) -> Optional[Profile]:
        """Get profile by user ID, None if the user has no profile"""
        doc = await self._profiles.find_one({"user_id": user_id})
        if doc:
            doc.pop("_id", None)
            return Profile.model_validate(doc)
        return None
