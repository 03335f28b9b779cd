from typing import Dict, List, Optional

from bson import ObjectId

from app.models.comment import CommentRepository
from app.models.like import LikeRepository
from app.models.playlist import PlaylistRepository
from app.models.user import UserRepository
from app.models.video import Video, VideoRepository
from app.pipelines.pagination import PageRequest
from app.pipelines.video import all_videos_plan, next_videos_pipeline, video_detail_pipeline
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils import ensure_owner, is_owner
from common.utils.logging_utils import get_logger

logger = get_logger('video_service')


class VideoService:

    def __init__(self, db, media_storage=None):
        self.videos = VideoRepository(db)
        self.users = UserRepository(db)
        self.comments = CommentRepository(db)
        self.likes = LikeRepository(db)
        self.playlists = PlaylistRepository(db)
        self.media_storage = media_storage

    def _get_video(self, video_id: ObjectId) -> Video:
        video = self.videos.find_by_id(video_id)
        if not video:
            raise BusinessError(APIError.VIDEO_NOT_FOUND)
        return video

    def _get_owned_video(self, video_id: ObjectId, caller_id: ObjectId) -> Video:
        video = self._get_video(video_id)
        ensure_owner(caller_id, video, APIError.VIDEO_FORBIDDEN)
        return video

    def get_all_videos(self, viewer_id: Optional[ObjectId], page_request: PageRequest,
                       query: Optional[str] = None, user_id: Optional[ObjectId] = None,
                       sort_by: Optional[str] = None, sort_type: Optional[str] = None) -> Dict:
        plan = all_videos_plan(viewer_id, query=query, owner_id=user_id, sort_by=sort_by, sort_type=sort_type)
        return self.videos.find_page(plan, page_request)

    def publish_video(self, owner_id: ObjectId, title: str, description: str,
                      video_file, thumbnail_file) -> Dict:
        if not title or not title.strip() or not description or not description.strip():
            raise BusinessError(APIError.MISSING_FIELD, "title and description are required")

        if video_file is None or thumbnail_file is None:
            raise BusinessError(APIError.VIDEO_FILES_REQUIRED)

        uploaded_video = self.media_storage.upload(video_file)
        uploaded_thumbnail = self.media_storage.upload(thumbnail_file)

        video = self.videos.insert(Video(
            title=title.strip(),
            description=description.strip(),
            video_file=uploaded_video.url,
            thumbnail=uploaded_thumbnail.url,
            owner=owner_id,
            duration=uploaded_video.duration
        ))
        return video.to_dict()

    def get_video_by_id(self, video_id: ObjectId, viewer_id: Optional[ObjectId]) -> Dict:
        """조회 1회당 views를 정확히 1 증가시키고, 로그인 사용자는 시청 기록에 추가한다"""
        video = self._get_video(video_id)

        #NOTE: 비공개 영상은 소유자 외에는 존재하지 않는 것으로 취급
        if not video.is_published and not is_owner(viewer_id, video):
            raise BusinessError(APIError.VIDEO_NOT_FOUND)

        if not self.videos.increment_views(video_id):
            raise BusinessError(APIError.VIDEO_NOT_FOUND)

        if viewer_id is not None:
            self.users.add_to_watch_history(viewer_id, video_id)

        detail = self.videos.aggregate_one(video_detail_pipeline(video_id, viewer_id))
        if not detail:
            raise BusinessError(APIError.VIDEO_NOT_FOUND)
        return detail

    def update_video(self, video_id: ObjectId, caller_id: ObjectId, title: Optional[str] = None,
                     description: Optional[str] = None, thumbnail_file=None) -> Dict:
        video = self._get_owned_video(video_id, caller_id)

        fields = {}
        if title and title.strip():
            fields['title'] = title.strip()
        if description and description.strip():
            fields['description'] = description.strip()
        if thumbnail_file is not None:
            fields['thumbnail'] = self.media_storage.upload(thumbnail_file).url

        if not fields:
            raise BusinessError(APIError.MISSING_FIELD, "Nothing to update")

        updated = self.videos.update_fields(video_id, fields)

        if 'thumbnail' in fields:
            self.media_storage.delete_quietly(video.thumbnail)
        return updated

    def delete_video(self, video_id: ObjectId, caller_id: ObjectId):
        """레코드와 연관 데이터를 먼저 지우고 미디어를 삭제한다. 미디어 삭제 실패는 되돌리지 않는다"""
        video = self._get_owned_video(video_id, caller_id)

        comment_ids = [doc['_id'] for doc in self.comments.collection.find({'video': video_id}, {'_id': 1})]
        self.likes.delete_for_any('comment', comment_ids)
        self.likes.delete_for('video', video_id)
        self.comments.delete_by_video(video_id)
        self.playlists.remove_video_everywhere(video_id)
        self.videos.delete_by_id(video_id)
        logger.info(f"Video deleted: {video_id} ({len(comment_ids)} comments)")

        self.media_storage.delete(video.video_file, resource_type='video')
        self.media_storage.delete(video.thumbnail, resource_type='image')

    def toggle_publish_status(self, video_id: ObjectId, caller_id: ObjectId) -> Dict:
        video = self._get_owned_video(video_id, caller_id)
        return self.videos.update_fields(video_id, {'isPublished': not video.is_published})

    def get_next_videos(self, video_id: ObjectId, viewer_id: Optional[ObjectId] = None) -> List[Dict]:
        if not self.videos.exists(video_id):
            raise BusinessError(APIError.VIDEO_NOT_FOUND)
        return self.videos.aggregate(next_videos_pipeline(video_id, viewer_id))
