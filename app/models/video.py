from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Set

from bson import ObjectId
from pymongo import ReturnDocument

from app.models.base import BaseRepository, utc_now
from common.utils.logging_utils import get_logger

logger = get_logger('video_repository')


@dataclass
class Video:
    title: str
    description: str
    video_file: str
    thumbnail: str
    owner: ObjectId
    duration: float = 0.0
    views: int = 0
    is_published: bool = True
    id: Optional[ObjectId] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict:
        doc = {
            'title': self.title,
            'description': self.description,
            'videoFile': self.video_file,
            'thumbnail': self.thumbnail,
            'owner': self.owner,
            'duration': self.duration,
            'views': self.views,
            'isPublished': self.is_published,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at
        }
        if self.id is not None:
            doc['_id'] = self.id
        return doc

    @classmethod
    def from_dict(cls, data: Dict) -> 'Video':
        return cls(
            id=data.get('_id'),
            title=data['title'],
            description=data.get('description', ''),
            video_file=data['videoFile'],
            thumbnail=data.get('thumbnail', ''),
            owner=data['owner'],
            duration=data.get('duration', 0.0),
            views=data.get('views', 0),
            is_published=data.get('isPublished', True),
            created_at=data.get('createdAt', utc_now()),
            updated_at=data.get('updatedAt', utc_now())
        )


class VideoRepository(BaseRepository):

    COLLECTION_NAME = 'videos'

    def ensure_indexes(self):
        self.collection.create_index([('owner', 1), ('createdAt', -1)])
        self.collection.create_index([('isPublished', 1), ('createdAt', -1)])

    def insert(self, video: Video) -> Video:
        result = self.collection.insert_one(video.to_dict())
        video.id = result.inserted_id
        logger.info(f"Video published: {video.id} by {video.owner}")
        return video

    def find_by_id(self, video_id: ObjectId) -> Optional[Video]:
        doc = self.collection.find_one({'_id': video_id})
        return Video.from_dict(doc) if doc else None

    def find_ids_by_owner(self, owner_id: ObjectId) -> List[ObjectId]:
        return [doc['_id'] for doc in self.collection.find({'owner': owner_id}, {'_id': 1})]

    def find_visible_ids(self, video_ids: List[ObjectId], viewer_id: Optional[ObjectId]) -> Set[ObjectId]:
        """video_ids 중 현재 남아 있고 viewer가 볼 수 있는(공개 또는 본인 소유) 영상 id"""
        visibility = [{'isPublished': True}]
        if viewer_id is not None:
            visibility.append({'owner': viewer_id})
        query = {'_id': {'$in': list(video_ids)}, '$or': visibility}
        return {doc['_id'] for doc in self.collection.find(query, {'_id': 1})}

    def increment_views(self, video_id: ObjectId) -> bool:
        result = self.collection.update_one({'_id': video_id}, {'$inc': {'views': 1}})
        return result.matched_count == 1

    def update_fields(self, video_id: ObjectId, fields: Dict) -> Optional[Dict]:
        return self.collection.find_one_and_update(
            {'_id': video_id},
            self._touch({'$set': dict(fields)}),
            return_document=ReturnDocument.AFTER
        )
