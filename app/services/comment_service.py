from typing import Dict, Optional

from bson import ObjectId

from app.models.comment import Comment, CommentRepository
from app.models.like import LikeRepository
from app.models.video import VideoRepository
from app.pipelines.comment import video_comments_plan
from app.pipelines.pagination import PageRequest
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils import ensure_owner


class CommentService:

    def __init__(self, db):
        self.comments = CommentRepository(db)
        self.videos = VideoRepository(db)
        self.likes = LikeRepository(db)

    def _get_owned_comment(self, comment_id: ObjectId, caller_id: ObjectId) -> Comment:
        comment = self.comments.find_by_id(comment_id)
        if not comment:
            raise BusinessError(APIError.COMMENT_NOT_FOUND)
        ensure_owner(caller_id, comment, APIError.COMMENT_FORBIDDEN)
        return comment

    def get_video_comments(self, video_id: ObjectId, viewer_id: Optional[ObjectId], page_request: PageRequest,
                           sort_by: Optional[str] = None, sort_type: Optional[str] = None) -> Dict:
        if not self.videos.exists(video_id):
            raise BusinessError(APIError.VIDEO_NOT_FOUND)
        return self.comments.find_page(video_comments_plan(video_id, viewer_id, sort_by, sort_type), page_request)

    def add_comment(self, video_id: ObjectId, owner_id: ObjectId, content: str) -> Dict:
        if not content or not content.strip():
            raise BusinessError(APIError.MISSING_FIELD, "content is required")
        if not self.videos.exists(video_id):
            raise BusinessError(APIError.VIDEO_NOT_FOUND)

        comment = self.comments.insert(Comment(content=content.strip(), video=video_id, owner=owner_id))
        return comment.to_dict()

    def update_comment(self, comment_id: ObjectId, caller_id: ObjectId, content: str) -> Dict:
        if not content or not content.strip():
            raise BusinessError(APIError.MISSING_FIELD, "content is required")

        self._get_owned_comment(comment_id, caller_id)
        return self.comments.update_content(comment_id, content.strip())

    def delete_comment(self, comment_id: ObjectId, caller_id: ObjectId):
        self._get_owned_comment(comment_id, caller_id)
        self.likes.delete_for('comment', comment_id)
        self.comments.delete_by_id(comment_id)
