"""Timeline Ledger - Append-only status history per complaint"""
from typing import List, Optional
from pymongo.client_session import ClientSession

from ..domain.models import TimelineEntry
from ..domain.enums import ComplaintStatus
from ..repositories.timeline_repo import TimelineRepository
from ..utils.idgen import generate_timeline_entry_id
from ..utils.time import utc_now


class TimelineLedger:
    """
    Append and read timeline entries.
    
    No update or delete: a correction is a new entry. Appends come only
    from the lifecycle manager.
    """
    
    def __init__(self, timeline_repo: Optional[TimelineRepository] = None):
        self._repo = timeline_repo or TimelineRepository()
    
    def append(
        self,
        complaint_id: str,
        status: ComplaintStatus,
        note: Optional[str],
        author_id: str,
        session: Optional[ClientSession] = None
    ) -> TimelineEntry:
        """Record one status event with a fresh timestamp"""
        entry = TimelineEntry(
            entry_id=generate_timeline_entry_id(),
            complaint_id=complaint_id,
            status=status,
            note=note,
            created_by=author_id,
            created_at=utc_now()
        )
        return self._repo.append_entry(entry, session=session)
    
    def list_for(self, complaint_id: str) -> List[TimelineEntry]:
        """All entries for a complaint, oldest first"""
        return self._repo.list_for_complaint(complaint_id)
