from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

from bson import ObjectId
from pymongo import ReturnDocument

from app.models.base import BaseRepository, utc_now


@dataclass
class Tweet:
    content: str
    owner: ObjectId
    id: Optional[ObjectId] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict:
        doc = {
            'content': self.content,
            'owner': self.owner,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at
        }
        if self.id is not None:
            doc['_id'] = self.id
        return doc

    @classmethod
    def from_dict(cls, data: Dict) -> 'Tweet':
        return cls(
            id=data.get('_id'),
            content=data['content'],
            owner=data['owner'],
            created_at=data.get('createdAt', utc_now()),
            updated_at=data.get('updatedAt', utc_now())
        )


class TweetRepository(BaseRepository):

    COLLECTION_NAME = 'tweets'

    def ensure_indexes(self):
        self.collection.create_index([('owner', 1), ('createdAt', -1)])

    def insert(self, tweet: Tweet) -> Tweet:
        result = self.collection.insert_one(tweet.to_dict())
        tweet.id = result.inserted_id
        return tweet

    def find_by_id(self, tweet_id: ObjectId) -> Optional[Tweet]:
        doc = self.collection.find_one({'_id': tweet_id})
        return Tweet.from_dict(doc) if doc else None

    def update_content(self, tweet_id: ObjectId, content: str) -> Optional[Dict]:
        return self.collection.find_one_and_update(
            {'_id': tweet_id},
            self._touch({'$set': {'content': content}}),
            return_document=ReturnDocument.AFTER
        )
