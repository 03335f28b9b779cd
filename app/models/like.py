from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from bson import ObjectId

from app.models.base import BaseRepository, ToggleResult, utc_now
from common.utils.logging_utils import get_logger

logger = get_logger('like_repository')

LIKE_TARGETS = ('video', 'comment', 'tweet')


@dataclass
class Like:
    """video, comment, tweet 중 정확히 하나만 설정된다"""
    liked_by: ObjectId
    target_field: str
    target_id: ObjectId
    id: Optional[ObjectId] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        if self.target_field not in LIKE_TARGETS:
            raise ValueError(f"Unknown like target: {self.target_field}")

    def to_dict(self) -> Dict:
        doc = {
            self.target_field: self.target_id,
            'likedBy': self.liked_by,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at
        }
        if self.id is not None:
            doc['_id'] = self.id
        return doc

    @classmethod
    def from_dict(cls, data: Dict) -> 'Like':
        target_field = next(name for name in LIKE_TARGETS if data.get(name) is not None)
        return cls(
            id=data.get('_id'),
            liked_by=data['likedBy'],
            target_field=target_field,
            target_id=data[target_field],
            created_at=data.get('createdAt', utc_now()),
            updated_at=data.get('updatedAt', utc_now())
        )


class LikeRepository(BaseRepository):

    COLLECTION_NAME = 'likes'

    def ensure_indexes(self):
        self.collection.create_index([('likedBy', 1), ('createdAt', -1)])
        for target in LIKE_TARGETS:
            self.collection.create_index(target, sparse=True)

    def find_like(self, target_field: str, target_id: ObjectId, user_id: ObjectId) -> Optional[Like]:
        doc = self.collection.find_one({target_field: target_id, 'likedBy': user_id})
        return Like.from_dict(doc) if doc else None

    def insert(self, like: Like) -> Like:
        result = self.collection.insert_one(like.to_dict())
        like.id = result.inserted_id
        return like

    def toggle(self, target_field: str, target_id: ObjectId, user_id: ObjectId) -> ToggleResult:
        #NOTE: find-then-act. 동시 요청 시 중복 생성 가능 (unique 제약 없음)
        existing = self.find_like(target_field, target_id, user_id)

        if existing:
            self.delete_by_id(existing.id)
            logger.debug(f"Like removed: {target_field}={target_id} by {user_id}")
            return ToggleResult(active=False, document_id=existing.id)

        like = self.insert(Like(liked_by=user_id, target_field=target_field, target_id=target_id))
        logger.debug(f"Like added: {target_field}={target_id} by {user_id}")
        return ToggleResult(active=True, document_id=like.id)

    def count_for(self, target_field: str, target_id: ObjectId) -> int:
        return self.collection.count_documents({target_field: target_id})

    def count_for_any(self, target_field: str, target_ids: List[ObjectId]) -> int:
        if not target_ids:
            return 0
        return self.collection.count_documents({target_field: {'$in': target_ids}})

    def delete_for(self, target_field: str, target_id: ObjectId) -> int:
        return self.collection.delete_many({target_field: target_id}).deleted_count

    def delete_for_any(self, target_field: str, target_ids: List[ObjectId]) -> int:
        if not target_ids:
            return 0
        return self.collection.delete_many({target_field: {'$in': target_ids}}).deleted_count
