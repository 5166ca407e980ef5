"""Role Gate - Stateless role checks against the role assignment table"""
from typing import Optional

from ..domain.models import ActorContext
from ..domain.enums import UserRole
from ..domain.errors import ForbiddenError
from ..repositories.role_repo import RoleRepository
from ..utils.logger import get_logger

logger = get_logger(__name__)


class RoleGate:
    """
    Answers "does principal P hold role R?"
    
    Every call is a fresh lookup. Nothing is cached on the gate or on the
    actor, since assignments may change between requests.
    """
    
    def __init__(self, role_repo: Optional[RoleRepository] = None):
        self._repo = role_repo or RoleRepository()
    
    def has_role(self, actor: ActorContext, role: UserRole) -> bool:
        """False when no assignment row exists; store failures propagate"""
        return self._repo.has_role(actor.user_id, role)
    
    def role_of(self, actor: ActorContext) -> Optional[UserRole]:
        """The role relevant to this system, or None"""
        return self._repo.get_role(actor.user_id)
    
    def require_role(self, actor: ActorContext, role: UserRole) -> None:
        """Raise ForbiddenError unless the actor holds role"""
        if not self.has_role(actor, role):
            logger.warning(
                f"Denied: {role.value} role required",
                extra={"user_id": actor.user_id}
            )
            raise ForbiddenError(
                f"{role.value.capitalize()} access required",
                details={"required_role": role.value}
            )
    
    def require_any_role(self, actor: ActorContext) -> UserRole:
        """Return the actor's role, raising ForbiddenError if there is none"""
        role = self.role_of(actor)
        if role is None:
            logger.warning("Denied: no role assignment", extra={"user_id": actor.user_id})
            raise ForbiddenError("No role assigned to this account")
        return role
