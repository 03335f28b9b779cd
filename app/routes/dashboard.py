from flask import g
from flask_smorest import Blueprint

from app.schemas.dashboard import ChannelStatsResponseSchema, ChannelVideosQuerySchema
from app.schemas.video import VideoPageResponseSchema
from app.services.dashboard_service import DashboardService
from common.decorator.auth_decorators import login_required
from common.extensions import get_mongo_db
from common.utils import api_response, to_object_id

dashboard_blueprint = Blueprint(
    'dashboard',
    __name__,
    url_prefix='/api/v1/dashboard',
    description='채널 대시보드 API'
)


def _dashboard_service():
    return DashboardService(get_mongo_db())


@dashboard_blueprint.route('/stats', methods=['GET'])
@login_required
@dashboard_blueprint.response(200, ChannelStatsResponseSchema)
@dashboard_blueprint.doc(security=[{"BearerAuth": []}])
def get_channel_stats():
    stats = _dashboard_service().get_channel_stats(g.user_id)
    return api_response(stats, "Channel stats fetched successfully")


@dashboard_blueprint.route('/videos', methods=['GET'])
@login_required
@dashboard_blueprint.arguments(ChannelVideosQuerySchema, location='query')
@dashboard_blueprint.response(200, VideoPageResponseSchema)
@dashboard_blueprint.doc(security=[{"BearerAuth": []}])
def get_channel_videos(args):
    channel_id = to_object_id(args['channelId']) if args.get('channelId') else g.user_id
    videos = _dashboard_service().get_channel_videos(
        channel_id,
        g.user_id,
        args['page_request'],
        sort_by=args.get('sortBy'),
        sort_type=args.get('sortType')
    )
    return api_response(videos, "Channel videos fetched successfully")
