"""Role Repository - Point lookups against the identity provider's role table"""
from typing import Optional
from pydantic import ValidationError as SchemaError
from pymongo.collection import Collection

from .mongo_client import get_collection, translate_store_errors
from ..domain.enums import UserRole
from ..domain.models import RoleAssignment
from ..utils.logger import get_logger

logger = get_logger(__name__)


class RoleRepository:
    """Read-only access to role_assignments"""
    
    def __init__(self):
        self._roles: Collection = get_collection("role_assignments")
    
    @translate_store_errors
    def has_role(self, user_id: str, role: UserRole) -> bool:
        """True if a (user_id, role) row exists"""
        doc = self._roles.find_one({"user_id": user_id, "role": role.value}, {"_id": 1})
        return doc is not None
    
    @translate_store_errors
    def get_role(self, user_id: str) -> Optional[UserRole]:
        """The principal's role, admin winning if several rows exist"""
        roles = set()
        for doc in self._roles.find({"user_id": user_id}, {"_id": 0, "user_id": 1, "role": 1}):
            try:
                roles.add(RoleAssignment.model_validate(doc).role)
            except SchemaError:
                logger.warning(
                    f"Ignoring unknown role value: {doc.get('role')}",
                    extra={"user_id": user_id}
                )
        
        if UserRole.ADMIN in roles:
            return UserRole.ADMIN
        if UserRole.STUDENT in roles:
            return UserRole.STUDENT
        return None
