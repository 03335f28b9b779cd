from datetime import datetime, timezone
from typing import Dict, Optional

from bson import ObjectId

from app.models.user import User, UserRepository
from app.models.video import VideoRepository
from app.pipelines.pagination import PageRequest, build_page, page_slice
from app.pipelines.user import channel_profile_pipeline
from app.pipelines.video import videos_by_ids_pipeline
from common.decorator.auth_decorators import BLACKLIST_KEY_PREFIX
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils import create_access_token, create_refresh_token, decode_token
from common.utils.logging_utils import get_logger

logger = get_logger('user_service')


class UserService:

    def __init__(self, db, media_storage=None, redis_client=None):
        self.users = UserRepository(db)
        self.videos = VideoRepository(db)
        self.media_storage = media_storage
        self.redis_client = redis_client

    def _get_user(self, user_id: ObjectId) -> User:
        user = self.users.find_by_id(user_id)
        if not user:
            raise BusinessError(APIError.USER_NOT_FOUND)
        return user

    def _issue_tokens(self, user: User) -> Dict:
        access_token = create_access_token(user)
        refresh_token = create_refresh_token(user)
        #NOTE: 사용자당 refresh token은 하나. 마지막 로그인이 이전 토큰을 무효화한다
        self.users.set_refresh_token(user.id, refresh_token)
        return {
            'accessToken': access_token,
            'refreshToken': refresh_token
        }

    def register(self, fullname: str, email: str, username: str, password: str,
                 avatar_file, cover_image_file=None) -> Dict:
        if not all(value and value.strip() for value in (fullname, email, username, password)):
            raise BusinessError(APIError.MISSING_FIELD, "All fields are required")

        if self.users.find_by_username_or_email(username=username, email=email):
            raise BusinessError(APIError.USER_ALREADY_EXISTS)

        if avatar_file is None:
            raise BusinessError(APIError.AVATAR_REQUIRED)

        avatar = self.media_storage.upload(avatar_file)
        cover_image = self.media_storage.upload(cover_image_file) if cover_image_file else None

        user = User(
            username=username.strip().lower(),
            email=email.strip(),
            fullname=fullname.strip(),
            avatar=avatar.url,
            cover_image=cover_image.url if cover_image else ''
        )
        user.set_password(password)
        self.users.insert(user)

        created = self.users.find_public_by_id(user.id)
        if not created:
            raise BusinessError(APIError.INTERNAL_SERVER_ERROR, "Something went wrong while registering the user")
        return created

    def login(self, password: str, username: Optional[str] = None, email: Optional[str] = None) -> Dict:
        if not username and not email:
            raise BusinessError(APIError.USERNAME_OR_EMAIL_REQUIRED)

        user = self.users.find_by_username_or_email(username=username, email=email)
        if not user:
            raise BusinessError(APIError.USER_NOT_FOUND)

        if not user.check_password(password):
            raise BusinessError(APIError.AUTH_INVALID_PASSWORD)

        tokens = self._issue_tokens(user)
        logger.info(f"User logged in: {user.id}")

        return {
            'user': self.users.find_public_by_id(user.id),
            **tokens
        }

    def logout(self, user_id: ObjectId, access_token: Optional[str] = None):
        self.users.unset_refresh_token(user_id)

        if not access_token:
            return

        if self.redis_client is None:
            logger.warning("Redis 사용 불가, 토큰 블랙리스트 기능 비활성화")
            return

        payload = decode_token(access_token)
        exp_timestamp = payload.get('exp')
        if exp_timestamp:
            ttl_seconds = int(exp_timestamp - datetime.now(timezone.utc).timestamp())

            #NOTE: 만료 시간이 남아있으면 블랙리스트에 추가
            if ttl_seconds > 0:
                self.redis_client.setex(f"{BLACKLIST_KEY_PREFIX}{access_token}", ttl_seconds, "1")

    def refresh_access_token(self, incoming_refresh_token: Optional[str]) -> Dict:
        if not incoming_refresh_token:
            raise BusinessError(APIError.AUTH_UNAUTHORIZED)

        payload = decode_token(incoming_refresh_token, invalid_error=APIError.AUTH_INVALID_REFRESH_TOKEN)
        if payload.get('type') != 'refresh':
            raise BusinessError(APIError.AUTH_INVALID_REFRESH_TOKEN)

        user = self.users.find_by_id(payload.get('sub'))
        if not user:
            raise BusinessError(APIError.AUTH_INVALID_REFRESH_TOKEN)

        if incoming_refresh_token != user.refresh_token:
            logger.warning(f"Refresh token mismatch for user {user.id}")
            raise BusinessError(APIError.AUTH_REFRESH_TOKEN_REUSED)

        return self._issue_tokens(user)

    def change_password(self, user_id: ObjectId, old_password: str, new_password: str):
        user = self._get_user(user_id)

        if not user.check_password(old_password):
            raise BusinessError(APIError.AUTH_WRONG_OLD_PASSWORD)

        user.set_password(new_password)
        self.users.update_password(user.id, user.password)

    def get_current_user(self, user_id: ObjectId) -> Dict:
        user = self.users.find_public_by_id(user_id)
        if not user:
            raise BusinessError(APIError.USER_NOT_FOUND)
        return user

    def update_account(self, user_id: ObjectId, fullname: Optional[str] = None,
                       email: Optional[str] = None) -> Dict:
        fields = {}
        if fullname:
            fields['fullname'] = fullname.strip()
        if email:
            existing = self.users.find_by_username_or_email(email=email.strip())
            if existing and existing.id != user_id:
                raise BusinessError(APIError.USER_ALREADY_EXISTS)
            fields['email'] = email.strip()

        if not fields:
            raise BusinessError(APIError.MISSING_FIELD, "fullname or email is required")

        updated = self.users.update_fields(user_id, fields)
        if not updated:
            raise BusinessError(APIError.USER_NOT_FOUND)
        return updated

    def _replace_image(self, user_id: ObjectId, file_storage, field_name: str, missing_error: APIError) -> Dict:
        if file_storage is None:
            raise BusinessError(missing_error)

        user = self._get_user(user_id)
        old_url = user.avatar if field_name == 'avatar' else user.cover_image

        uploaded = self.media_storage.upload(file_storage)
        updated = self.users.update_fields(user_id, {field_name: uploaded.url})

        self.media_storage.delete_quietly(old_url)
        return updated

    def update_avatar(self, user_id: ObjectId, avatar_file) -> Dict:
        return self._replace_image(user_id, avatar_file, 'avatar', APIError.AVATAR_REQUIRED)

    def update_cover_image(self, user_id: ObjectId, cover_image_file) -> Dict:
        return self._replace_image(user_id, cover_image_file, 'coverImage', APIError.MISSING_FIELD)

    def get_channel_profile(self, username: str, viewer_id: Optional[ObjectId]) -> Dict:
        if not username or not username.strip():
            raise BusinessError(APIError.MISSING_FIELD, "username is missing")

        channel = self.users.aggregate_one(channel_profile_pipeline(username.strip(), viewer_id))
        if not channel:
            raise BusinessError(APIError.CHANNEL_NOT_FOUND)
        return channel

    def get_watch_history(self, user_id: ObjectId, page_request: PageRequest) -> Dict:
        """최근 시청 순. 삭제되었거나 볼 수 없는 영상은 페이지를 자르기 전에 제외한다"""
        history_ids = list(reversed(self.users.get_watch_history_ids(user_id)))
        visible = self.videos.find_visible_ids(history_ids, user_id)
        history_ids = [video_id for video_id in history_ids if video_id in visible]

        page_ids = page_slice(history_ids, page_request)
        if not page_ids:
            return build_page([], len(history_ids), page_request)

        by_id = {doc['_id']: doc for doc in self.videos.aggregate(videos_by_ids_pipeline(page_ids, user_id))}
        ordered = [by_id[video_id] for video_id in page_ids if video_id in by_id]

        return build_page(ordered, len(history_ids), page_request)
