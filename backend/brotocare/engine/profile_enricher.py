"""Profile Enricher - Concurrent fan-out of profile lookups"""
import asyncio
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar
from pydantic import ValidationError as SchemaError

from ..config.settings import settings
from ..domain.models import (
    Profile, Complaint, Comment, EnrichedComplaint, EnrichedComment
)
from ..domain.errors import DomainError
from ..repositories.profile_repo import ProfileRepository
from ..utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class ProfileEnricher:
    """
    Pairs each row with the profile of the user it references.
    
    All lookups for a call run concurrently and are gathered positionally,
    so output[i] always belongs to input[i] whatever order the lookups
    finish in. A lookup that fails, times out, or finds nothing yields None
    for its own row and never affects the others.
    """
    
    def __init__(
        self,
        profile_repo: Optional[ProfileRepository] = None,
        concurrency: Optional[int] = None,
        timeout_seconds: Optional[float] = None
    ):
        self._repo = profile_repo or ProfileRepository()
        self._concurrency = settings.profile_lookup_concurrency if concurrency is None else concurrency
        self._timeout = settings.profile_lookup_timeout_seconds if timeout_seconds is None else timeout_seconds
        if self._concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {self._concurrency}")
        if self._timeout <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {self._timeout}")
    
    async def enrich(
        self,
        rows: Sequence[T],
        key: Callable[[T], str]
    ) -> List[Tuple[T, Optional[Profile]]]:
        """Resolve key(row) for every row concurrently"""
        if not rows:
            return []
        
        # Created per call: a semaphore binds to the running event loop
        semaphore = asyncio.Semaphore(self._concurrency)
        profiles = await asyncio.gather(
            *(self._lookup(key(row), semaphore) for row in rows)
        )
        
        missing = sum(1 for p in profiles if p is None)
        logger.debug(
            f"Enriched {len(rows)} rows, {missing} without profile",
            extra={"rows": len(rows), "resolved": len(rows) - missing}
        )
        return list(zip(rows, profiles))
    
    async def _lookup(self, user_id: str, semaphore: asyncio.Semaphore) -> Optional[Profile]:
        async with semaphore:
            try:
                return await asyncio.wait_for(self._repo.get_profile(user_id), self._timeout)
            except asyncio.TimeoutError:
                logger.warning("Profile lookup timed out", extra={"user_id": user_id})
            except (DomainError, SchemaError) as e:
                logger.warning(
                    f"Profile lookup failed: {e}",
                    extra={"user_id": user_id, "error_code": getattr(e, "error_code", "INVALID_PROFILE")}
                )
            except Exception:
                logger.error(
                    "Profile lookup raised unexpectedly",
                    exc_info=True,
                    extra={"user_id": user_id, "error_code": "LOOKUP_FAILED"}
                )
        return None
    
    async def enrich_complaints(self, complaints: Sequence[Complaint]) -> List[EnrichedComplaint]:
        """Attach the owner's profile to each complaint"""
        pairs = await self.enrich(complaints, key=lambda c: c.user_id)
        return [
            EnrichedComplaint(**complaint.model_dump(), profile=profile)
            for complaint, profile in pairs
        ]
    
    async def enrich_comments(self, comments: Sequence[Comment]) -> List[EnrichedComment]:
        """Attach the author's profile to each comment"""
        pairs = await self.enrich(comments, key=lambda c: c.user_id)
        return [
            EnrichedComment(**comment.model_dump(), profile=profile)
            for comment, profile in pairs
        ]
