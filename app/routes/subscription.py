from flask import g
from flask_smorest import Blueprint

from app.schemas.common_schema import PageQuerySchema
from app.schemas.subscription import ChannelPageResponseSchema, ToggleSubscriptionResponseSchema
from app.services.subscription_service import SubscriptionService
from common.decorator.auth_decorators import guest_allowed, login_required
from common.extensions import get_mongo_db
from common.utils import api_response, to_object_id

subscription_blueprint = Blueprint(
    'subscriptions',
    __name__,
    url_prefix='/api/v1/subscriptions',
    description='채널 구독 API'
)


def _subscription_service():
    return SubscriptionService(get_mongo_db())


@subscription_blueprint.route('/c/<channel_id>', methods=['POST'])
@login_required
@subscription_blueprint.response(200, ToggleSubscriptionResponseSchema)
@subscription_blueprint.doc(security=[{"BearerAuth": []}])
def toggle_subscription(channel_id):
    result = _subscription_service().toggle_subscription(to_object_id(channel_id), g.user_id)
    return api_response(result, "Subscription toggled successfully")


@subscription_blueprint.route('/c/<channel_id>', methods=['GET'])
@guest_allowed
@subscription_blueprint.arguments(PageQuerySchema, location='query')
@subscription_blueprint.response(200, ChannelPageResponseSchema)
@subscription_blueprint.doc(security=[{"BearerAuth": []}])
def get_channel_subscribers(args, channel_id):
    subscribers = _subscription_service().get_channel_subscribers(
        to_object_id(channel_id), g.user_id, args['page_request']
    )
    return api_response(subscribers, "Subscribers fetched successfully")


@subscription_blueprint.route('/u/<subscriber_id>', methods=['GET'])
@guest_allowed
@subscription_blueprint.arguments(PageQuerySchema, location='query')
@subscription_blueprint.response(200, ChannelPageResponseSchema)
@subscription_blueprint.doc(security=[{"BearerAuth": []}])
def get_subscribed_channels(args, subscriber_id):
    channels = _subscription_service().get_subscribed_channels(
        to_object_id(subscriber_id), g.user_id, args['page_request']
    )
    return api_response(channels, "Subscribed channels fetched successfully")
