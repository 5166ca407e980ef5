"""Complaint Lifecycle Manager - Status state machine and audited transitions"""
from typing import Any, Callable, Dict, Optional, Tuple, Type, TypeVar
from enum import Enum
from pymongo.client_session import ClientSession
from pymongo.errors import PyMongoError

from ..config.settings import settings
from ..domain.models import ActorContext, Complaint, TimelineEntry
from ..domain.enums import (
    ComplaintStatus, ComplaintCategory, ComplaintPriority, UserRole
)
from ..domain.errors import (
    ComplaintNotFoundError, InvalidTransitionError, PartialUpdateError,
    UpstreamUnavailableError, ValidationError
)
from ..repositories.complaint_repo import ComplaintRepository
from ..repositories.mongo_client import start_session
from ..utils.idgen import generate_complaint_id
from ..utils.time import utc_now
from ..utils.logger import get_logger
from .role_gate import RoleGate
from .timeline_ledger import TimelineLedger

logger = get_logger(__name__)

E = TypeVar("E", bound=Enum)
R = TypeVar("R")

SessionFactory = Callable[[], ClientSession]


def _parse_enum(enum_cls: Type[E], value: Any, field: str) -> E:
    """Coerce a raw value into enum_cls, raising ValidationError"""
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(
            f"Invalid {field}: {value!r}",
            details={"field": field, "allowed": [m.value for m in enum_cls]}
        )


def _clean_note(note: Optional[str]) -> Optional[str]:
    if note is None:
        return None
    note = note.strip()
    return note or None


class ComplaintLifecycleManager:
    """
    Owns complaint creation and every change to `status`.

    Rules:
    - Only admins change status; any state may move to any other state
    - Moving to the current status is rejected before anything is written
    - First entry to resolved/closed stamps resolved_at/closed_at, and a
      stamp is never cleared afterwards
    - A transition with a note appends one timeline entry; without a note
      it appends none unless audit_every_transition is on
    - Students only ever see complaints they filed; a complaint they cannot
      see is reported exactly like one that does not exist

    With transactions enabled the status write and the timeline append
    commit together. Otherwise the status is written first and a failed
    append surfaces as PartialUpdateError, which the caller resolves with
    retry_timeline_append.
    """

    def __init__(
        self,
        complaint_repo: Optional[ComplaintRepository] = None,
        ledger: Optional[TimelineLedger] = None,
        role_gate: Optional[RoleGate] = None,
        audit_every_transition: Optional[bool] = None,
        transactions_enabled: Optional[bool] = None,
        session_factory: Optional[SessionFactory] = None
    ):
        self.complaint_repo = complaint_repo or ComplaintRepository()
        self.ledger = ledger or TimelineLedger()
        self.role_gate = role_gate or RoleGate()
        self.audit_every_transition = (
            settings.timeline_on_every_transition
            if audit_every_transition is None else audit_every_transition
        )
        self.transactions_enabled = (
            settings.mongo_transactions_enabled
            if transactions_enabled is None else transactions_enabled
        )
        self._session_factory = session_factory or start_session

    # =========================================================================
    # Submission
    # =========================================================================

    def submit(
        self,
        actor: ActorContext,
        title: str,
        description: str,
        category: Any,
        priority: Any,
        attachment_url: Optional[str] = None
    ) -> Complaint:
        """File a new complaint owned by actor, starting in `submitted`"""
        self.role_gate.require_role(actor, UserRole.STUDENT)

        if not title or not title.strip():
            raise ValidationError("Title is required", details={"field": "title"})
        if not description or not description.strip():
            raise ValidationError("Description is required", details={"field": "description"})
        category = _parse_enum(ComplaintCategory, category, "category")
        priority = _parse_enum(ComplaintPriority, priority, "priority")

        now = utc_now()
        complaint = Complaint(
            complaint_id=generate_complaint_id(),
            user_id=actor.user_id,
            title=title.strip(),
            description=description.strip(),
            category=category,
            priority=priority,
            status=ComplaintStatus.SUBMITTED,
            attachment_url=attachment_url,
            created_at=now,
            updated_at=now
        )

        def write(session: Optional[ClientSession]) -> Complaint:
            return self.complaint_repo.create_complaint(complaint, session=session)

        def audit(session: Optional[ClientSession]) -> TimelineEntry:
            return self.ledger.append(
                complaint.complaint_id, ComplaintStatus.SUBMITTED, None, actor.user_id,
                session=session
            )

        created, _ = self._write_with_audit(write, audit, complaint.complaint_id, ComplaintStatus.SUBMITTED, None)
        logger.info(
            f"Complaint submitted: {created.title}",
            extra={"complaint_id": created.complaint_id, "user_id": actor.user_id}
        )
        return created

    # =========================================================================
    # Scoped Reads
    # =========================================================================

    def get_with_role(self, actor: ActorContext, complaint_id: str) -> Tuple[Complaint, UserRole]:
        """Fetch a complaint the actor may see, plus the actor's current role"""
        role = self.role_gate.require_any_role(actor)

        complaint = self.complaint_repo.get_complaint(complaint_id)
        if complaint is None or (role != UserRole.ADMIN and complaint.user_id != actor.user_id):
            raise ComplaintNotFoundError(
                f"Complaint {complaint_id} not found",
                details={"complaint_id": complaint_id}
            )
        return complaint, role

    def get(self, actor: ActorContext, complaint_id: str) -> Complaint:
        """Fetch a complaint the actor may see"""
        complaint, _ = self.get_with_role(actor, complaint_id)
        return complaint

    # =========================================================================
    # Transitions
    # =========================================================================

    def transition(
        self,
        actor: ActorContext,
        complaint_id: str,
        new_status: Any,
        note: Optional[str] = None
    ) -> Tuple[Complaint, Optional[TimelineEntry]]:
        """
        Move a complaint to new_status on behalf of an admin.

        Returns the updated complaint and the appended timeline entry, or
        None when no entry was due.

        Raises:
            ForbiddenError: actor is not an admin
            InvalidTransitionError: unknown status, or equal to the current one
            ComplaintNotFoundError: no such complaint
            ConcurrencyError: complaint changed between read and write
            PartialUpdateError: status saved, timeline append failed
            UpstreamUnavailableError: store failure, or a failed transaction
        """
        self.role_gate.require_role(actor, UserRole.ADMIN)
        target = self._parse_status(new_status)

        complaint = self.complaint_repo.get_complaint_or_raise(complaint_id)
        if complaint.status == target:
            raise InvalidTransitionError(
                f"Complaint is already {target.value}",
                details={"complaint_id": complaint_id, "status": target.value}
            )

        updates = self._build_updates(complaint, target)
        note = _clean_note(note)
        append_entry = note is not None or self.audit_every_transition

        def write(session: Optional[ClientSession]) -> Complaint:
            return self.complaint_repo.update_complaint(
                complaint_id, updates, expected_version=complaint.version, session=session
            )

        def audit(session: Optional[ClientSession]) -> TimelineEntry:
            return self.ledger.append(complaint_id, target, note, actor.user_id, session=session)

        updated, entry = self._write_with_audit(
            write, audit if append_entry else None, complaint_id, target, note
        )

        logger.info(
            f"Status changed {complaint.status.value} -> {target.value}",
            extra={
                "complaint_id": complaint_id,
                "user_id": actor.user_id,
                "status": target.value,
                "previous_status": complaint.status.value,
                "entry_id": entry.entry_id if entry else None
            }
        )
        return updated, entry

    def retry_timeline_append(
        self,
        actor: ActorContext,
        complaint_id: str,
        status: Any,
        note: Optional[str] = None
    ) -> TimelineEntry:
        """Complete the audit trail of a transition that raised PartialUpdateError"""
        self.role_gate.require_role(actor, UserRole.ADMIN)
        target = self._parse_status(status)

        complaint = self.complaint_repo.get_complaint_or_raise(complaint_id)
        if complaint.status != target:
            raise InvalidTransitionError(
                f"Complaint is no longer {target.value}",
                details={
                    "complaint_id": complaint_id,
                    "status": target.value,
                    "current_status": complaint.status.value
                }
            )
        note = _clean_note(note)
        entries = self.ledger.list_for(complaint_id)
        if entries and entries[-1].status == target and entries[-1].note == note:
            raise InvalidTransitionError(
                "Timeline entry for this status change is already recorded",
                details={"complaint_id": complaint_id, "status": target.value, "entry_id": entries[-1].entry_id}
            )
        return self.ledger.append(complaint_id, target, note, actor.user_id)

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _parse_status(value: Any) -> ComplaintStatus:
        try:
            return ComplaintStatus(value)
        except ValueError:
            raise InvalidTransitionError(
                f"Unknown status: {value!r}",
                details={"status": value, "allowed": [s.value for s in ComplaintStatus]}
            )

    @staticmethod
    def _build_updates(complaint: Complaint, target: ComplaintStatus) -> Dict[str, Any]:
        updates: Dict[str, Any] = {"status": target.value}
        if target == ComplaintStatus.RESOLVED and complaint.resolved_at is None:
            updates["resolved_at"] = utc_now()
        elif target == ComplaintStatus.CLOSED and complaint.closed_at is None:
            updates["closed_at"] = utc_now()
        return updates

    def _write_with_audit(
        self,
        write: Callable[[Optional[ClientSession]], R],
        audit: Optional[Callable[[Optional[ClientSession]], TimelineEntry]],
        complaint_id: str,
        status: ComplaintStatus,
        note: Optional[str]
    ) -> Tuple[R, Optional[TimelineEntry]]:
        """Run the primary write and its timeline append as one unit"""
        if self.transactions_enabled:
            def callback(session: ClientSession) -> Tuple[R, Optional[TimelineEntry]]:
                result = write(session)
                return result, audit(session) if audit else None

            try:
                with self._session_factory() as session:
                    return session.with_transaction(callback)
            except PyMongoError as e:
                logger.error(
                    f"Transaction failed: {e}",
                    extra={"complaint_id": complaint_id, "status": status.value}
                )
                raise UpstreamUnavailableError(
                    "Backing store unavailable during the write transaction",
                    details={"complaint_id": complaint_id, "operation": "transaction"}
                ) from e

        result = write(None)
        if audit is None:
            return result, None

        try:
            return result, audit(None)
        except UpstreamUnavailableError as e:
            logger.error(
                "Status saved but timeline append failed",
                extra={"complaint_id": complaint_id, "status": status.value}
            )
            raise PartialUpdateError(
                "Status updated but the timeline entry was not recorded; retry the timeline append",
                details={"complaint_id": complaint_id, "status": status.value, "note": note}
            ) from e
