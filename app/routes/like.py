from flask import g
from flask_smorest import Blueprint

from app.schemas.common_schema import PageQuerySchema
from app.schemas.like import ToggleLikeResponseSchema
from app.schemas.video import VideoPageResponseSchema
from app.services.like_service import LikeService
from common.decorator.auth_decorators import login_required
from common.extensions import get_mongo_db
from common.utils import api_response, to_object_id

like_blueprint = Blueprint(
    'likes',
    __name__,
    url_prefix='/api/v1/likes',
    description='좋아요 토글 API'
)


def _like_service():
    return LikeService(get_mongo_db())


@like_blueprint.route('/toggle/v/<video_id>', methods=['POST'])
@login_required
@like_blueprint.response(200, ToggleLikeResponseSchema)
@like_blueprint.doc(security=[{"BearerAuth": []}])
def toggle_video_like(video_id):
    result = _like_service().toggle_video_like(to_object_id(video_id), g.user_id)
    return api_response(result, "Video like toggled successfully")


@like_blueprint.route('/toggle/c/<comment_id>', methods=['POST'])
@login_required
@like_blueprint.response(200, ToggleLikeResponseSchema)
@like_blueprint.doc(security=[{"BearerAuth": []}])
def toggle_comment_like(comment_id):
    result = _like_service().toggle_comment_like(to_object_id(comment_id), g.user_id)
    return api_response(result, "Comment like toggled successfully")


@like_blueprint.route('/toggle/t/<tweet_id>', methods=['POST'])
@login_required
@like_blueprint.response(200, ToggleLikeResponseSchema)
@like_blueprint.doc(security=[{"BearerAuth": []}])
def toggle_tweet_like(tweet_id):
    result = _like_service().toggle_tweet_like(to_object_id(tweet_id), g.user_id)
    return api_response(result, "Tweet like toggled successfully")


@like_blueprint.route('/videos', methods=['GET'])
@login_required
@like_blueprint.arguments(PageQuerySchema, location='query')
@like_blueprint.response(200, VideoPageResponseSchema)
@like_blueprint.doc(security=[{"BearerAuth": []}])
def get_liked_videos(args):
    videos = _like_service().get_liked_videos(g.user_id, args['page_request'])
    return api_response(videos, "Liked videos fetched successfully")
