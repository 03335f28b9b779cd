from flask import g
from flask_smorest import Blueprint

from app.schemas.common_schema import MessageResponseSchema
from app.schemas.video import (
    PublishVideoFilesSchema, PublishVideoFormSchema, UpdateVideoFilesSchema, UpdateVideoFormSchema,
    VideoDetailResponseSchema, VideoListQuerySchema, VideoListResponseSchema, VideoPageResponseSchema,
    VideoResponseSchema
)
from app.services.video_service import VideoService
from common.decorator.auth_decorators import guest_allowed, login_optional, login_required
from common.extensions import get_media_storage, get_mongo_db
from common.utils import api_response, to_object_id
from common.enum.error_code import APIError

video_blueprint = Blueprint(
    'videos',
    __name__,
    url_prefix='/api/v1/videos',
    description='영상 업로드/조회/관리 API'
)


def _video_service():
    return VideoService(get_mongo_db(), get_media_storage())


def _video_id(video_id):
    return to_object_id(video_id, APIError.INVALID_ID, "Invalid video id")


@video_blueprint.route('/', methods=['GET'])
@login_optional
@video_blueprint.arguments(VideoListQuerySchema, location='query')
@video_blueprint.response(200, VideoPageResponseSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def get_all_videos(args):
    user_id = args.get('userId')
    videos = _video_service().get_all_videos(
        g.user_id,
        args['page_request'],
        query=args.get('query'),
        user_id=to_object_id(user_id) if user_id else None,
        sort_by=args.get('sortBy'),
        sort_type=args.get('sortType')
    )
    return api_response(videos, "Videos fetched successfully")


@video_blueprint.route('/', methods=['POST'])
@login_required
@video_blueprint.arguments(PublishVideoFormSchema, location='form')
@video_blueprint.arguments(PublishVideoFilesSchema, location='files')
@video_blueprint.response(201, VideoResponseSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def publish_video(form, files):
    video = _video_service().publish_video(
        g.user_id,
        form['title'],
        form['description'],
        files.get('videoFile'),
        files.get('thumbnail')
    )
    return api_response(video, "Video published successfully", 201)


@video_blueprint.route('/<video_id>', methods=['GET'])
@guest_allowed
@video_blueprint.response(200, VideoDetailResponseSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def get_video_by_id(video_id):
    video = _video_service().get_video_by_id(_video_id(video_id), g.user_id)
    return api_response(video, "Video fetched successfully")


@video_blueprint.route('/<video_id>', methods=['PATCH'])
@login_required
@video_blueprint.arguments(UpdateVideoFormSchema, location='form')
@video_blueprint.arguments(UpdateVideoFilesSchema, location='files')
@video_blueprint.response(200, VideoResponseSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def update_video(form, files, video_id):
    video = _video_service().update_video(
        _video_id(video_id),
        g.user_id,
        title=form.get('title'),
        description=form.get('description'),
        thumbnail_file=files.get('thumbnail')
    )
    return api_response(video, "Video updated successfully")


@video_blueprint.route('/<video_id>', methods=['DELETE'])
@login_required
@video_blueprint.response(200, MessageResponseSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def delete_video(video_id):
    _video_service().delete_video(_video_id(video_id), g.user_id)
    return api_response({}, "Video deleted successfully")


@video_blueprint.route('/toggle/publish/<video_id>', methods=['PATCH'])
@login_required
@video_blueprint.response(200, VideoResponseSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def toggle_publish_status(video_id):
    video = _video_service().toggle_publish_status(_video_id(video_id), g.user_id)
    return api_response(video, "Publish status toggled successfully")


@video_blueprint.route('/next/<video_id>', methods=['GET'])
@login_optional
@video_blueprint.response(200, VideoListResponseSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def get_next_videos(video_id):
    videos = _video_service().get_next_videos(_video_id(video_id), g.user_id)
    return api_response(videos, "Next videos fetched successfully")
