"""Timeline Repository - Data access for complaint timeline entries"""
from typing import List, Optional
from pymongo.client_session import ClientSession
from pymongo.collection import Collection
from pymongo import ASCENDING

from .mongo_client import get_collection, translate_store_errors
from ..domain.models import TimelineEntry
from ..utils.logger import get_logger

logger = get_logger(__name__)


class TimelineRepository:
    """Repository for timeline entries (append-only: no update or delete)"""
    
    def __init__(self):
        self._timeline: Collection = get_collection("complaint_timeline")
    
    @translate_store_errors
    def append_entry(
        self,
        entry: TimelineEntry,
        session: Optional[ClientSession] = None
    ) -> TimelineEntry:
        """Insert a timeline entry"""
        # Driver-assigned ObjectId _id breaks created_at ties in insertion order
        doc = entry.model_dump()
        
        self._timeline.insert_one(doc, session=session)
        logger.info(
            f"Appended timeline entry: {entry.status.value}",
            extra={
                "complaint_id": entry.complaint_id,
                "entry_id": entry.entry_id,
                "user_id": entry.created_by
            }
        )
        return entry
    
    @translate_store_errors
    def list_for_complaint(self, complaint_id: str) -> List[TimelineEntry]:
        """Entries for a complaint, oldest first"""
        cursor = self._timeline.find({"complaint_id": complaint_id}).sort(
            [("created_at", ASCENDING), ("_id", ASCENDING)]
        )
        
        entries = []
        for doc in cursor:
            doc.pop("_id", None)
            entries.append(TimelineEntry.model_validate(doc))
        return entries
