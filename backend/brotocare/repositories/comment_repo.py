"""Comment Repository - Data access for complaint comments"""
from typing import List
from pymongo.collection import Collection
from pymongo import ASCENDING

from .mongo_client import get_collection, translate_store_errors
from ..domain.models import Comment
from ..utils.logger import get_logger

logger = get_logger(__name__)


class CommentRepository:
    """Repository for complaint comments (append-only)"""
    
    def __init__(self):
        self._comments: Collection = get_collection("complaint_comments")
    
    @translate_store_errors
    def append_comment(self, comment: Comment) -> Comment:
        """Insert a comment"""
        doc = comment.model_dump()  # ObjectId _id orders same-millisecond comments
        
        self._comments.insert_one(doc)
        logger.info(
            f"Added comment: {comment.comment_id}",
            extra={
                "complaint_id": comment.complaint_id,
                "comment_id": comment.comment_id,
                "user_id": comment.user_id,
                "is_admin": comment.is_admin
            }
        )
        return comment
    
    @translate_store_errors
    def list_for_complaint(self, complaint_id: str) -> List[Comment]:
        """Comments on a complaint, oldest first"""
        cursor = self._comments.find({"complaint_id": complaint_id}).sort(
            [("created_at", ASCENDING), ("_id", ASCENDING)]
        )
        
        comments = []
        for doc in cursor:
            doc.pop("_id", None)
            comments.append(Comment.model_validate(doc))
        return comments
