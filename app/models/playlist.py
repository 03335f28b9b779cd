from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from bson import ObjectId
from pymongo import ReturnDocument

from app.models.base import BaseRepository, utc_now


@dataclass
class Playlist:
    name: str
    description: str
    owner: ObjectId
    videos: List[ObjectId] = field(default_factory=list)
    id: Optional[ObjectId] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def contains(self, video_id: ObjectId) -> bool:
        return any(str(v) == str(video_id) for v in self.videos)

    def to_dict(self) -> Dict:
        doc = {
            'name': self.name,
            'description': self.description,
            'owner': self.owner,
            'videos': list(self.videos),
            'createdAt': self.created_at,
            'updatedAt': self.updated_at
        }
        if self.id is not None:
            doc['_id'] = self.id
        return doc

    @classmethod
    def from_dict(cls, data: Dict) -> 'Playlist':
        return cls(
            id=data.get('_id'),
            name=data['name'],
            description=data.get('description', ''),
            owner=data['owner'],
            videos=list(data.get('videos', [])),
            created_at=data.get('createdAt', utc_now()),
            updated_at=data.get('updatedAt', utc_now())
        )


class PlaylistRepository(BaseRepository):

    COLLECTION_NAME = 'playlists'

    def ensure_indexes(self):
        self.collection.create_index([('owner', 1), ('createdAt', -1)])

    def insert(self, playlist: Playlist) -> Playlist:
        result = self.collection.insert_one(playlist.to_dict())
        playlist.id = result.inserted_id
        return playlist

    def find_by_id(self, playlist_id: ObjectId) -> Optional[Playlist]:
        doc = self.collection.find_one({'_id': playlist_id})
        return Playlist.from_dict(doc) if doc else None

    def add_video(self, playlist_id: ObjectId, video_id: ObjectId) -> Optional[Dict]:
        return self.collection.find_one_and_update(
            {'_id': playlist_id},
            self._touch({'$addToSet': {'videos': video_id}}),
            return_document=ReturnDocument.AFTER
        )

    def remove_video(self, playlist_id: ObjectId, video_id: ObjectId) -> Optional[Dict]:
        return self.collection.find_one_and_update(
            {'_id': playlist_id},
            self._touch({'$pull': {'videos': video_id}}),
            return_document=ReturnDocument.AFTER
        )

    def remove_video_everywhere(self, video_id: ObjectId) -> int:
        result = self.collection.update_many({'videos': video_id}, {'$pull': {'videos': video_id}})
        return result.modified_count

    def update_fields(self, playlist_id: ObjectId, fields: Dict) -> Optional[Dict]:
        return self.collection.find_one_and_update(
            {'_id': playlist_id},
            self._touch({'$set': dict(fields)}),
            return_document=ReturnDocument.AFTER
        )
