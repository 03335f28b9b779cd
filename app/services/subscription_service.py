from typing import Dict, Optional

from bson import ObjectId

from app.models.subscription import SubscriptionRepository
from app.models.user import UserRepository
from app.pipelines.pagination import PageRequest
from app.pipelines.subscription import channel_subscribers_plan, subscribed_channels_plan
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError


class SubscriptionService:

    def __init__(self, db):
        self.subscriptions = SubscriptionRepository(db)
        self.users = UserRepository(db)

    def toggle_subscription(self, channel_id: ObjectId, subscriber_id: ObjectId) -> Dict:
        if str(channel_id) == str(subscriber_id):
            raise BusinessError(APIError.SUBSCRIBE_SELF)
        if not self.users.exists(channel_id):
            raise BusinessError(APIError.CHANNEL_NOT_FOUND)

        result = self.subscriptions.toggle(subscriber_id, channel_id)
        return {
            'isSubscribed': result.active,
            'subscribersCount': self.subscriptions.count_subscribers(channel_id)
        }

    def get_channel_subscribers(self, channel_id: ObjectId, viewer_id: Optional[ObjectId],
                                page_request: PageRequest) -> Dict:
        if not self.users.exists(channel_id):
            raise BusinessError(APIError.CHANNEL_NOT_FOUND)
        return self.subscriptions.find_page(channel_subscribers_plan(channel_id, viewer_id), page_request)

    def get_subscribed_channels(self, subscriber_id: ObjectId, viewer_id: Optional[ObjectId],
                                page_request: PageRequest) -> Dict:
        if not self.users.exists(subscriber_id):
            raise BusinessError(APIError.USER_NOT_FOUND)
        return self.subscriptions.find_page(subscribed_channels_plan(subscriber_id, viewer_id), page_request)
