from typing import Dict

from bson import ObjectId

from app.models.comment import CommentRepository
from app.models.like import LikeRepository
from app.models.tweet import TweetRepository
from app.models.video import VideoRepository
from app.pipelines.pagination import PageRequest
from app.pipelines.video import liked_videos_plan
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError


class LikeService:

    def __init__(self, db):
        self.likes = LikeRepository(db)
        #NOTE: like 대상별 (존재 확인용 repository, not found 에러)
        self.targets = {
            'video': (VideoRepository(db), APIError.VIDEO_NOT_FOUND),
            'comment': (CommentRepository(db), APIError.COMMENT_NOT_FOUND),
            'tweet': (TweetRepository(db), APIError.TWEET_NOT_FOUND)
        }

    def _toggle(self, target_field: str, target_id: ObjectId, user_id: ObjectId) -> Dict:
        repository, not_found = self.targets[target_field]
        if not repository.exists(target_id):
            raise BusinessError(not_found)

        result = self.likes.toggle(target_field, target_id, user_id)
        return {
            'isLiked': result.active,
            'likesCount': self.likes.count_for(target_field, target_id)
        }

    def toggle_video_like(self, video_id: ObjectId, user_id: ObjectId) -> Dict:
        return self._toggle('video', video_id, user_id)

    def toggle_comment_like(self, comment_id: ObjectId, user_id: ObjectId) -> Dict:
        return self._toggle('comment', comment_id, user_id)

    def toggle_tweet_like(self, tweet_id: ObjectId, user_id: ObjectId) -> Dict:
        return self._toggle('tweet', tweet_id, user_id)

    def get_liked_videos(self, user_id: ObjectId, page_request: PageRequest) -> Dict:
        return self.likes.find_page(liked_videos_plan(user_id), page_request)
