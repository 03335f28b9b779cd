from flask import g
from flask_smorest import Blueprint

from app.schemas.common_schema import ListQuerySchema, MessageResponseSchema
from app.schemas.playlist import (
    CreatePlaylistRequestSchema, PlaylistDetailResponseSchema, PlaylistPageResponseSchema,
    PlaylistResponseSchema, UpdatePlaylistRequestSchema
)
from app.services.playlist_service import PlaylistService
from common.decorator.auth_decorators import guest_allowed, login_required
from common.extensions import get_mongo_db
from common.utils import api_response, to_object_id

playlist_blueprint = Blueprint(
    'playlists',
    __name__,
    url_prefix='/api/v1/playlist',
    description='재생목록 API'
)


def _playlist_service():
    return PlaylistService(get_mongo_db())


@playlist_blueprint.route('/', methods=['POST'])
@login_required
@playlist_blueprint.arguments(CreatePlaylistRequestSchema)
@playlist_blueprint.response(201, PlaylistResponseSchema)
@playlist_blueprint.doc(security=[{"BearerAuth": []}])
def create_playlist(data):
    playlist = _playlist_service().create_playlist(g.user_id, data['name'], data.get('description'))
    return api_response(playlist, "Playlist created successfully", 201)


@playlist_blueprint.route('/user/<user_id>', methods=['GET'])
@guest_allowed
@playlist_blueprint.arguments(ListQuerySchema, location='query')
@playlist_blueprint.response(200, PlaylistPageResponseSchema)
@playlist_blueprint.doc(security=[{"BearerAuth": []}])
def get_user_playlists(args, user_id):
    playlists = _playlist_service().get_user_playlists(
        to_object_id(user_id),
        args['page_request'],
        sort_by=args.get('sortBy'),
        sort_type=args.get('sortType')
    )
    return api_response(playlists, "User playlists fetched successfully")


@playlist_blueprint.route('/<playlist_id>', methods=['GET'])
@guest_allowed
@playlist_blueprint.response(200, PlaylistDetailResponseSchema)
@playlist_blueprint.doc(security=[{"BearerAuth": []}])
def get_playlist_by_id(playlist_id):
    playlist = _playlist_service().get_playlist_by_id(to_object_id(playlist_id), g.user_id)
    return api_response(playlist, "Playlist fetched successfully")


@playlist_blueprint.route('/add/<video_id>/<playlist_id>', methods=['PATCH'])
@login_required
@playlist_blueprint.response(200, PlaylistResponseSchema)
@playlist_blueprint.doc(security=[{"BearerAuth": []}])
def add_video_to_playlist(video_id, playlist_id):
    playlist = _playlist_service().add_video_to_playlist(
        to_object_id(playlist_id), to_object_id(video_id), g.user_id
    )
    return api_response(playlist, "Video added to playlist successfully")


@playlist_blueprint.route('/remove/<video_id>/<playlist_id>', methods=['PATCH'])
@login_required
@playlist_blueprint.response(200, PlaylistResponseSchema)
@playlist_blueprint.doc(security=[{"BearerAuth": []}])
def remove_video_from_playlist(video_id, playlist_id):
    playlist = _playlist_service().remove_video_from_playlist(
        to_object_id(playlist_id), to_object_id(video_id), g.user_id
    )
    return api_response(playlist, "Video removed from playlist successfully")


@playlist_blueprint.route('/<playlist_id>', methods=['PATCH'])
@login_required
@playlist_blueprint.arguments(UpdatePlaylistRequestSchema)
@playlist_blueprint.response(200, PlaylistResponseSchema)
@playlist_blueprint.doc(security=[{"BearerAuth": []}])
def update_playlist(data, playlist_id):
    playlist = _playlist_service().update_playlist(
        to_object_id(playlist_id), g.user_id, data.get('name'), data.get('description')
    )
    return api_response(playlist, "Playlist updated successfully")


@playlist_blueprint.route('/<playlist_id>', methods=['DELETE'])
@login_required
@playlist_blueprint.response(200, MessageResponseSchema)
@playlist_blueprint.doc(security=[{"BearerAuth": []}])
def delete_playlist(playlist_id):
    _playlist_service().delete_playlist(to_object_id(playlist_id), g.user_id)
    return api_response({}, "Playlist deleted successfully")
