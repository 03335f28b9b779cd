from typing import Dict, Optional

from bson import ObjectId

from app.models.playlist import Playlist, PlaylistRepository
from app.models.user import UserRepository
from app.models.video import VideoRepository
from app.pipelines.pagination import PageRequest
from app.pipelines.playlist import playlist_detail_pipeline, user_playlists_plan
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils import ensure_owner, is_owner


class PlaylistService:

    def __init__(self, db):
        self.playlists = PlaylistRepository(db)
        self.videos = VideoRepository(db)
        self.users = UserRepository(db)

    def _get_playlist(self, playlist_id: ObjectId) -> Playlist:
        playlist = self.playlists.find_by_id(playlist_id)
        if not playlist:
            raise BusinessError(APIError.PLAYLIST_NOT_FOUND)
        return playlist

    def _get_owned_playlist(self, playlist_id: ObjectId, caller_id: ObjectId) -> Playlist:
        playlist = self._get_playlist(playlist_id)
        ensure_owner(caller_id, playlist, APIError.PLAYLIST_FORBIDDEN)
        return playlist

    def create_playlist(self, owner_id: ObjectId, name: str, description: str = '') -> Dict:
        if not name or not name.strip():
            raise BusinessError(APIError.PLAYLIST_FIELDS_REQUIRED)

        playlist = self.playlists.insert(Playlist(
            name=name.strip(),
            description=(description or '').strip(),
            owner=owner_id
        ))
        return playlist.to_dict()

    def get_user_playlists(self, user_id: ObjectId, page_request: PageRequest,
                           sort_by: Optional[str] = None, sort_type: Optional[str] = None) -> Dict:
        if not self.users.exists(user_id):
            raise BusinessError(APIError.USER_NOT_FOUND)
        return self.playlists.find_page(user_playlists_plan(user_id, sort_by, sort_type), page_request)

    def get_playlist_by_id(self, playlist_id: ObjectId, viewer_id: Optional[ObjectId]) -> Dict:
        playlist = self._get_playlist(playlist_id)

        detail = self.playlists.aggregate_one(
            playlist_detail_pipeline(playlist_id, include_unpublished=is_owner(viewer_id, playlist))
        )
        if not detail:
            raise BusinessError(APIError.PLAYLIST_NOT_FOUND)
        return detail

    def add_video_to_playlist(self, playlist_id: ObjectId, video_id: ObjectId, caller_id: ObjectId) -> Dict:
        playlist = self._get_owned_playlist(playlist_id, caller_id)

        if not self.videos.exists(video_id):
            raise BusinessError(APIError.VIDEO_NOT_FOUND)
        if playlist.contains(video_id):
            raise BusinessError(APIError.PLAYLIST_VIDEO_EXISTS)

        return self.playlists.add_video(playlist_id, video_id)

    def remove_video_from_playlist(self, playlist_id: ObjectId, video_id: ObjectId, caller_id: ObjectId) -> Dict:
        playlist = self._get_owned_playlist(playlist_id, caller_id)

        if not playlist.contains(video_id):
            raise BusinessError(APIError.PLAYLIST_VIDEO_MISSING)

        return self.playlists.remove_video(playlist_id, video_id)

    def update_playlist(self, playlist_id: ObjectId, caller_id: ObjectId, name: Optional[str] = None,
                        description: Optional[str] = None) -> Dict:
        fields = {}
        if name and name.strip():
            fields['name'] = name.strip()
        if description and description.strip():
            fields['description'] = description.strip()

        if not fields:
            raise BusinessError(APIError.PLAYLIST_FIELDS_REQUIRED)

        self._get_owned_playlist(playlist_id, caller_id)
        return self.playlists.update_fields(playlist_id, fields)

    def delete_playlist(self, playlist_id: ObjectId, caller_id: ObjectId):
        self._get_owned_playlist(playlist_id, caller_id)
        self.playlists.delete_by_id(playlist_id)
