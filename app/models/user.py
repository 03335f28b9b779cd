from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from werkzeug.security import generate_password_hash, check_password_hash

from app.models.base import BaseRepository, utc_now
from common.utils.logging_utils import get_logger

logger = get_logger('user_repository')

PUBLIC_USER_PROJECTION = {'password': 0, 'refreshToken': 0}


@dataclass
class User:
    username: str
    email: str
    fullname: str
    avatar: str
    password: str = ''
    cover_image: str = ''
    watch_history: List[ObjectId] = field(default_factory=list)
    refresh_token: Optional[str] = None
    id: Optional[ObjectId] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def set_password(self, raw_password: str):
        self.password = generate_password_hash(raw_password)

    def check_password(self, raw_password: str) -> bool:
        if not self.password or raw_password is None:
            return False
        return check_password_hash(self.password, raw_password)

    def to_dict(self) -> Dict:
        """MongoDB 도큐먼트로 변환"""
        doc = {
            'username': self.username,
            'email': self.email,
            'fullname': self.fullname,
            'avatar': self.avatar,
            'coverImage': self.cover_image,
            'password': self.password,
            'watchHistory': list(self.watch_history),
            'createdAt': self.created_at,
            'updatedAt': self.updated_at
        }
        if self.refresh_token:
            doc['refreshToken'] = self.refresh_token
        if self.id is not None:
            doc['_id'] = self.id
        return doc

    def to_public_dict(self) -> Dict:
        """password, refreshToken을 제외한 응답용 dict"""
        doc = self.to_dict()
        doc.pop('password', None)
        doc.pop('refreshToken', None)
        return doc

    @classmethod
    def from_dict(cls, data: Dict) -> 'User':
        """MongoDB 도큐먼트에서 객체 생성"""
        return cls(
            id=data.get('_id'),
            username=data['username'],
            email=data['email'],
            fullname=data.get('fullname', ''),
            avatar=data.get('avatar', ''),
            cover_image=data.get('coverImage', ''),
            password=data.get('password', ''),
            watch_history=list(data.get('watchHistory', [])),
            refresh_token=data.get('refreshToken'),
            created_at=data.get('createdAt', utc_now()),
            updated_at=data.get('updatedAt', utc_now())
        )


class UserRepository(BaseRepository):

    COLLECTION_NAME = 'users'

    def ensure_indexes(self):
        self.collection.create_index('username', unique=True)
        self.collection.create_index('email', unique=True)

    def insert(self, user: User) -> User:
        result = self.collection.insert_one(user.to_dict())
        user.id = result.inserted_id
        logger.info(f"User created: {user.id} ({user.username})")
        return user

    def find_by_id(self, user_id) -> Optional[User]:
        if not isinstance(user_id, ObjectId):
            if not ObjectId.is_valid(str(user_id)):
                return None
            user_id = ObjectId(str(user_id))
        doc = self.collection.find_one({'_id': user_id})
        return User.from_dict(doc) if doc else None

    def find_by_username(self, username: str) -> Optional[User]:
        doc = self.collection.find_one({'username': username.lower()})
        return User.from_dict(doc) if doc else None

    def find_by_username_or_email(self, username: Optional[str] = None, email: Optional[str] = None) -> Optional[User]:
        conditions = []
        if username:
            conditions.append({'username': username.lower()})
        if email:
            conditions.append({'email': email})
        if not conditions:
            return None

        doc = self.collection.find_one({'$or': conditions})
        return User.from_dict(doc) if doc else None

    def find_public_by_id(self, user_id: ObjectId) -> Optional[Dict]:
        return self.collection.find_one({'_id': user_id}, PUBLIC_USER_PROJECTION)

    def set_refresh_token(self, user_id: ObjectId, refresh_token: str):
        self.collection.update_one(
            {'_id': user_id},
            self._touch({'$set': {'refreshToken': refresh_token}})
        )

    def unset_refresh_token(self, user_id: ObjectId):
        self.collection.update_one(
            {'_id': user_id},
            self._touch({'$unset': {'refreshToken': ''}})
        )

    def update_password(self, user_id: ObjectId, password_hash: str):
        self.collection.update_one(
            {'_id': user_id},
            self._touch({'$set': {'password': password_hash}})
        )

    def update_fields(self, user_id: ObjectId, fields: Dict) -> Optional[Dict]:
        return self.collection.find_one_and_update(
            {'_id': user_id},
            self._touch({'$set': dict(fields)}),
            projection=PUBLIC_USER_PROJECTION,
            return_document=ReturnDocument.AFTER
        )

    def add_to_watch_history(self, user_id: ObjectId, video_id: ObjectId):
        self.collection.update_one(
            {'_id': user_id},
            {'$addToSet': {'watchHistory': video_id}}
        )

    def get_watch_history_ids(self, user_id: ObjectId) -> List[ObjectId]:
        doc = self.collection.find_one({'_id': user_id}, {'watchHistory': 1})
        return list(doc.get('watchHistory', [])) if doc else []
