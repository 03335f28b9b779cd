from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

from bson import ObjectId

from app.models.base import BaseRepository, ToggleResult, utc_now
from common.utils.logging_utils import get_logger

logger = get_logger('subscription_repository')


@dataclass
class Subscription:
    subscriber: ObjectId  # 구독하는 사용자
    channel: ObjectId  # 구독 대상 채널(사용자)
    id: Optional[ObjectId] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict:
        doc = {
            'subscriber': self.subscriber,
            'channel': self.channel,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at
        }
        if self.id is not None:
            doc['_id'] = self.id
        return doc

    @classmethod
    def from_dict(cls, data: Dict) -> 'Subscription':
        return cls(
            id=data.get('_id'),
            subscriber=data['subscriber'],
            channel=data['channel'],
            created_at=data.get('createdAt', utc_now()),
            updated_at=data.get('updatedAt', utc_now())
        )


class SubscriptionRepository(BaseRepository):

    COLLECTION_NAME = 'subscriptions'

    def ensure_indexes(self):
        self.collection.create_index([('channel', 1), ('createdAt', -1)])
        self.collection.create_index([('subscriber', 1), ('createdAt', -1)])

    def find_subscription(self, subscriber_id: ObjectId, channel_id: ObjectId) -> Optional[Subscription]:
        doc = self.collection.find_one({'subscriber': subscriber_id, 'channel': channel_id})
        return Subscription.from_dict(doc) if doc else None

    def insert(self, subscription: Subscription) -> Subscription:
        result = self.collection.insert_one(subscription.to_dict())
        subscription.id = result.inserted_id
        return subscription

    def toggle(self, subscriber_id: ObjectId, channel_id: ObjectId) -> ToggleResult:
        #NOTE: find-then-act. LikeRepository.toggle과 동일한 경쟁 조건을 가진다
        existing = self.find_subscription(subscriber_id, channel_id)

        if existing:
            self.delete_by_id(existing.id)
            logger.debug(f"Unsubscribed: {subscriber_id} -> {channel_id}")
            return ToggleResult(active=False, document_id=existing.id)

        subscription = self.insert(Subscription(subscriber=subscriber_id, channel=channel_id))
        logger.debug(f"Subscribed: {subscriber_id} -> {channel_id}")
        return ToggleResult(active=True, document_id=subscription.id)

    def count_subscribers(self, channel_id: ObjectId) -> int:
        return self.collection.count_documents({'channel': channel_id})
