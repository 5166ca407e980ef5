"""Comment Thread - Append-only remarks with role attribution fixed at post time"""
from typing import List, Optional

from ..domain.models import Comment, EnrichedComment
from ..domain.errors import EmptyCommentError
from ..repositories.comment_repo import CommentRepository
from ..utils.idgen import generate_comment_id
from ..utils.time import utc_now
from .profile_enricher import ProfileEnricher


class CommentThread:
    """Comments on a complaint; readers see the whole thread unredacted"""
    
    def __init__(
        self,
        comment_repo: Optional[CommentRepository] = None,
        enricher: Optional[ProfileEnricher] = None
    ):
        self._repo = comment_repo or CommentRepository()
        self._enricher = enricher or ProfileEnricher()
    
    def append(
        self,
        complaint_id: str,
        author_id: str,
        text: str,
        is_admin_author: bool
    ) -> Comment:
        """
        Add a comment.
        
        is_admin_author must come from the author's authenticated role at
        the time of posting; it is stored as-is and never re-derived.
        """
        if text is None or not text.strip():
            raise EmptyCommentError(
                "Comment text cannot be empty",
                details={"complaint_id": complaint_id}
            )
        
        comment = Comment(
            comment_id=generate_comment_id(),
            complaint_id=complaint_id,
            user_id=author_id,
            comment=text.strip(),
            is_admin=is_admin_author,
            created_at=utc_now()
        )
        return self._repo.append_comment(comment)
    
    async def list_for(self, complaint_id: str) -> List[EnrichedComment]:
        """All comments, oldest first, each with its author's profile"""
        comments = self._repo.list_for_complaint(complaint_id)
        return await self._enricher.enrich_comments(comments)
