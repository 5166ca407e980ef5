"""Complaint Repository - Data access for complaints"""
from typing import Any, Dict, List, Optional
from pymongo.client_session import ClientSession
from pymongo.collection import Collection
from pymongo import DESCENDING, ReturnDocument

from .mongo_client import get_collection, translate_store_errors
from ..domain.models import Complaint
from ..domain.errors import ComplaintNotFoundError, ConcurrencyError
from ..utils.time import utc_now
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ComplaintRepository:
    """Repository for complaint documents (never hard-deleted)"""
    
    def __init__(self):
        self._complaints: Collection = get_collection("complaints")
    
    @translate_store_errors
    def create_complaint(
        self,
        complaint: Complaint,
        session: Optional[ClientSession] = None
    ) -> Complaint:
        """Insert a new complaint"""
        # Keep datetimes native so MongoDB sorts them as dates
        doc = complaint.model_dump()
        doc["_id"] = complaint.complaint_id
        
        self._complaints.insert_one(doc, session=session)
        logger.info(
            f"Created complaint: {complaint.complaint_id}",
            extra={"complaint_id": complaint.complaint_id, "user_id": complaint.user_id}
        )
        return complaint
    
    @translate_store_errors
    def get_complaint(self, complaint_id: str) -> Optional[Complaint]:
        """Get complaint by ID"""
        doc = self._complaints.find_one({"complaint_id": complaint_id})
        if doc:
            doc.pop("_id", None)
            return Complaint.model_validate(doc)
        return None
    
    def get_complaint_or_raise(self, complaint_id: str) -> Complaint:
        """Get complaint by ID or raise error"""
        complaint = self.get_complaint(complaint_id)
        if not complaint:
            raise ComplaintNotFoundError(
                f"Complaint {complaint_id} not found",
                details={"complaint_id": complaint_id}
            )
        return complaint
    
    @translate_store_errors
    def update_complaint(
        self,
        complaint_id: str,
        updates: Dict[str, Any],
        expected_version: int,
        session: Optional[ClientSession] = None
    ) -> Complaint:
        """Apply updates if the stored version still matches, bumping it"""
        updates["updated_at"] = utc_now()
        updates["version"] = expected_version + 1
        
        result = self._complaints.find_one_and_update(
            {"complaint_id": complaint_id, "version": expected_version},
            {"$set": updates},
            return_document=ReturnDocument.AFTER,
            session=session
        )
        
        if result is None:
            exists = self._complaints.find_one({"complaint_id": complaint_id}, session=session)
            if exists:
                raise ConcurrencyError(
                    f"Complaint {complaint_id} was modified. Please refresh and try again.",
                    details={"complaint_id": complaint_id, "expected_version": expected_version}
                )
            raise ComplaintNotFoundError(
                f"Complaint {complaint_id} not found",
                details={"complaint_id": complaint_id}
            )
        
        result.pop("_id", None)
        logger.info(f"Updated complaint: {complaint_id}", extra={"complaint_id": complaint_id})
        return Complaint.model_validate(result)
    
    @translate_store_errors
    def list_by_owner(self, user_id: str) -> List[Complaint]:
        """All complaints filed by one student, newest first"""
        cursor = self._complaints.find({"user_id": user_id}).sort("created_at", DESCENDING)
        
        complaints = []
        for doc in cursor:
            doc.pop("_id", None)
            complaints.append(Complaint.model_validate(doc))
        return complaints
    
    @translate_store_errors
    def list_all(self) -> List[Complaint]:
        """All complaints system-wide, newest first"""
        cursor = self._complaints.find({}).sort("created_at", DESCENDING)
        
        complaints = []
        for doc in cursor:
            doc.pop("_id", None)
            complaints.append(Complaint.model_validate(doc))
        return complaints
