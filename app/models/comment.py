from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

from bson import ObjectId
from pymongo import ReturnDocument

from app.models.base import BaseRepository, utc_now


@dataclass
class Comment:
    content: str
    video: ObjectId
    owner: ObjectId
    id: Optional[ObjectId] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict:
        doc = {
            'content': self.content,
            'video': self.video,
            'owner': self.owner,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at
        }
        if self.id is not None:
            doc['_id'] = self.id
        return doc

    @classmethod
    def from_dict(cls, data: Dict) -> 'Comment':
        return cls(
            id=data.get('_id'),
            content=data['content'],
            video=data['video'],
            owner=data['owner'],
            created_at=data.get('createdAt', utc_now()),
            updated_at=data.get('updatedAt', utc_now())
        )


class CommentRepository(BaseRepository):

    COLLECTION_NAME = 'comments'

    def ensure_indexes(self):
        self.collection.create_index([('video', 1), ('createdAt', -1)])

    def insert(self, comment: Comment) -> Comment:
        result = self.collection.insert_one(comment.to_dict())
        comment.id = result.inserted_id
        return comment

    def find_by_id(self, comment_id: ObjectId) -> Optional[Comment]:
        doc = self.collection.find_one({'_id': comment_id})
        return Comment.from_dict(doc) if doc else None

    def update_content(self, comment_id: ObjectId, content: str) -> Optional[Dict]:
        return self.collection.find_one_and_update(
            {'_id': comment_id},
            self._touch({'$set': {'content': content}}),
            return_document=ReturnDocument.AFTER
        )

    def delete_by_video(self, video_id: ObjectId) -> int:
        return self.collection.delete_many({'video': video_id}).deleted_count
