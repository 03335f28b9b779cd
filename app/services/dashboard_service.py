from typing import Dict, Optional

from bson import ObjectId

from app.models.like import LikeRepository
from app.models.subscription import SubscriptionRepository
from app.models.user import UserRepository
from app.models.video import VideoRepository
from app.pipelines.dashboard import channel_video_totals_pipeline
from app.pipelines.pagination import PageRequest
from app.pipelines.video import channel_videos_plan
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils import is_owner
from common.utils.logging_utils import get_logger

logger = get_logger('dashboard_service')


class DashboardService:

    def __init__(self, db):
        self.videos = VideoRepository(db)
        self.users = UserRepository(db)
        self.likes = LikeRepository(db)
        self.subscriptions = SubscriptionRepository(db)

    def get_channel_stats(self, channel_id: ObjectId) -> Dict:
        """
        채널 통계. 각 값은 서로 다른 쿼리로 계산되므로 동시 쓰기 중에는 시점이 어긋날 수 있다.

        Returns:
            {totalVideos, totalViews, totalSubscribers, totalLikes}
        """
        totals = self.videos.aggregate_one(channel_video_totals_pipeline(channel_id)) or {}
        video_ids = self.videos.find_ids_by_owner(channel_id)

        stats = {
            'totalVideos': totals.get('totalVideos', 0),
            'totalViews': totals.get('totalViews', 0),
            'totalSubscribers': self.subscriptions.count_subscribers(channel_id),
            'totalLikes': self.likes.count_for_any('video', video_ids)
        }
        logger.debug(f"Channel stats for {channel_id}: {stats}")
        return stats

    def get_channel_videos(self, channel_id: ObjectId, caller_id: Optional[ObjectId], page_request: PageRequest,
                           sort_by: Optional[str] = None, sort_type: Optional[str] = None) -> Dict:
        if not self.users.exists(channel_id):
            raise BusinessError(APIError.CHANNEL_NOT_FOUND)

        include_unpublished = is_owner(caller_id, {'owner': channel_id})
        plan = channel_videos_plan(channel_id, caller_id, include_unpublished, sort_by, sort_type)
        return self.videos.find_page(plan, page_request)
