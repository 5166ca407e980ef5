"""Complaint Service - Operations exposed to the API layer"""
from typing import Any, List, Optional

from ..domain.models import (
    ActorContext, Complaint, TimelineEntry, EnrichedComment, ComplaintFilters,
    StudentComplaintsView, AdminComplaintsView, AdminSummary, ComplaintDetail,
    AccessInfo
)
from ..domain.enums import ComplaintPriority, UserRole
from ..repositories.complaint_repo import ComplaintRepository
from ..engine.role_gate import RoleGate
from ..engine.profile_enricher import ProfileEnricher
from ..engine.timeline_ledger import TimelineLedger
from ..engine.comment_thread import CommentThread
from ..engine.lifecycle import ComplaintLifecycleManager
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ComplaintService:
    """Service for complaint operations"""

    def __init__(
        self,
        complaint_repo: Optional[ComplaintRepository] = None,
        role_gate: Optional[RoleGate] = None,
        enricher: Optional[ProfileEnricher] = None,
        ledger: Optional[TimelineLedger] = None,
        thread: Optional[CommentThread] = None,
        lifecycle: Optional[ComplaintLifecycleManager] = None
    ):
        self.complaint_repo = complaint_repo or ComplaintRepository()
        self.role_gate = role_gate or RoleGate()
        self.enricher = enricher or ProfileEnricher()
        self.ledger = ledger or TimelineLedger()
        self.thread = thread or CommentThread(enricher=self.enricher)
        self.lifecycle = lifecycle or ComplaintLifecycleManager(
            complaint_repo=self.complaint_repo,
            ledger=self.ledger,
            role_gate=self.role_gate
        )

    # =========================================================================
    # Student Operations
    # =========================================================================

    def submit_complaint(
        self,
        actor: ActorContext,
        title: str,
        description: str,
        category: Any,
        priority: Any,
        attachment_url: Optional[str] = None
    ) -> str:
        """File a complaint, returning its ID"""
        complaint = self.lifecycle.submit(
            actor=actor,
            title=title,
            description=description,
            category=category,
            priority=priority,
            attachment_url=attachment_url
        )
        return complaint.complaint_id

    def list_for_student(self, actor: ActorContext) -> StudentComplaintsView:
        """The caller's complaints, split into active and closed, newest first"""
        self.role_gate.require_role(actor, UserRole.STUDENT)

        view = StudentComplaintsView()
        for complaint in self._newest_first(self.complaint_repo.list_by_owner(actor.user_id)):
            if complaint.status.is_finished:
                view.closed.append(complaint)
            else:
                view.active.append(complaint)
        return view

    # =========================================================================
    # Shared Reads
    # =========================================================================

    def get_complaint(self, actor: ActorContext, complaint_id: str) -> Complaint:
        """Get one complaint the caller owns, or any complaint for admins"""
        return self.lifecycle.get(actor, complaint_id)

    def list_timeline(self, actor: ActorContext, complaint_id: str) -> List[TimelineEntry]:
        """Timeline entries of a visible complaint, oldest first"""
        self.lifecycle.get(actor, complaint_id)
        return self.ledger.list_for(complaint_id)

    async def list_comments(self, actor: ActorContext, complaint_id: str) -> List[EnrichedComment]:
        """Full comment thread of a visible complaint, oldest first"""
        self.lifecycle.get(actor, complaint_id)
        return await self.thread.list_for(complaint_id)

    def post_comment(self, actor: ActorContext, complaint_id: str, text: str) -> str:
        """Comment on a visible complaint; is_admin reflects the caller's role right now"""
        _, role = self.lifecycle.get_with_role(actor, complaint_id)
        comment = self.thread.append(
            complaint_id=complaint_id,
            author_id=actor.user_id,
            text=text,
            is_admin_author=role == UserRole.ADMIN
        )
        logger.info(
            "Comment posted",
            extra={
                "complaint_id": complaint_id,
                "comment_id": comment.comment_id,
                "user_id": actor.user_id,
                "is_admin": comment.is_admin
            }
        )
        return comment.comment_id

    async def get_complaint_detail(self, actor: ActorContext, complaint_id: str) -> ComplaintDetail:
        """Complaint with owner profile, enriched comments and timeline"""
        complaint = self.lifecycle.get(actor, complaint_id)

        enriched = await self.enricher.enrich_complaints([complaint])
        comments = await self.thread.list_for(complaint_id)
        timeline = self.ledger.list_for(complaint_id)

        return ComplaintDetail(complaint=enriched[0], comments=comments, timeline=timeline)

    def check_access(self, actor: ActorContext) -> AccessInfo:
        """Report the caller's current role"""
        role = self.role_gate.role_of(actor)
        return AccessInfo(
            user_id=actor.user_id,
            role=role,
            is_admin=role == UserRole.ADMIN,
            is_student=role == UserRole.STUDENT
        )

    # =========================================================================
    # Admin Operations
    # =========================================================================

    async def list_for_admin(
        self,
        actor: ActorContext,
        filters: Optional[ComplaintFilters] = None
    ) -> AdminComplaintsView:
        """
        All complaints with owner profiles, filtered, plus dashboard counts.

        Filters run after enrichment against the complaint's own fields, so
        a missing profile never hides a complaint. Summary counts cover all
        complaints, not just the filtered ones.
        """
        self.role_gate.require_role(actor, UserRole.ADMIN)
        filters = filters or ComplaintFilters()

        complaints = self._newest_first(self.complaint_repo.list_all())
        enriched = await self.enricher.enrich_complaints(complaints)

        return AdminComplaintsView(
            complaints=[c for c in enriched if filters.matches(c)],
            summary=self._summarize(complaints)
        )

    def update_status(
        self,
        actor: ActorContext,
        complaint_id: str,
        new_status: Any,
        note: Optional[str] = None
    ) -> Optional[str]:
        """Change status; returns the new timeline entry ID, if one was written"""
        _, entry = self.lifecycle.transition(actor, complaint_id, new_status, note)
        return entry.entry_id if entry else None

    def retry_timeline_append(
        self,
        actor: ActorContext,
        complaint_id: str,
        status: Any,
        note: Optional[str] = None
    ) -> str:
        """Record the timeline entry a PartialUpdateError left out"""
        entry = self.lifecycle.retry_timeline_append(actor, complaint_id, status, note)
        return entry.entry_id

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _newest_first(complaints: List[Complaint]) -> List[Complaint]:
        return sorted(complaints, key=lambda c: c.created_at, reverse=True)

    @staticmethod
    def _summarize(complaints: List[Complaint]) -> AdminSummary:
        summary = AdminSummary(total=len(complaints))
        for complaint in complaints:
            if complaint.status.is_finished:
                summary.resolved += 1
            else:
                summary.active += 1
            if complaint.priority == ComplaintPriority.HIGH:
                summary.high_priority += 1
        return summary
