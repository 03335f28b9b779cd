from flask import g
from flask_smorest import Blueprint

from app.schemas.common_schema import ContentRequestSchema, ListQuerySchema, MessageResponseSchema
from app.schemas.tweet import TweetPageResponseSchema, TweetResponseSchema
from app.services.tweet_service import TweetService
from common.decorator.auth_decorators import guest_allowed, login_required
from common.extensions import get_mongo_db
from common.utils import api_response, to_object_id

tweet_blueprint = Blueprint(
    'tweets',
    __name__,
    url_prefix='/api/v1/tweets',
    description='채널 게시글 API'
)


def _tweet_service():
    return TweetService(get_mongo_db())


@tweet_blueprint.route('/', methods=['POST'])
@login_required
@tweet_blueprint.arguments(ContentRequestSchema)
@tweet_blueprint.response(201, TweetResponseSchema)
@tweet_blueprint.doc(security=[{"BearerAuth": []}])
def create_tweet(data):
    tweet = _tweet_service().create_tweet(g.user_id, data['content'])
    return api_response(tweet, "Tweet created successfully", 201)


@tweet_blueprint.route('/user/<user_id>', methods=['GET'])
@guest_allowed
@tweet_blueprint.arguments(ListQuerySchema, location='query')
@tweet_blueprint.response(200, TweetPageResponseSchema)
@tweet_blueprint.doc(security=[{"BearerAuth": []}])
def get_user_tweets(args, user_id):
    tweets = _tweet_service().get_user_tweets(
        to_object_id(user_id),
        g.user_id,
        args['page_request'],
        sort_by=args.get('sortBy'),
        sort_type=args.get('sortType')
    )
    return api_response(tweets, "Tweets fetched successfully")


@tweet_blueprint.route('/<tweet_id>', methods=['PATCH'])
@login_required
@tweet_blueprint.arguments(ContentRequestSchema)
@tweet_blueprint.response(200, TweetResponseSchema)
@tweet_blueprint.doc(security=[{"BearerAuth": []}])
def update_tweet(data, tweet_id):
    tweet = _tweet_service().update_tweet(to_object_id(tweet_id), g.user_id, data['content'])
    return api_response(tweet, "Tweet updated successfully")


@tweet_blueprint.route('/<tweet_id>', methods=['DELETE'])
@login_required
@tweet_blueprint.response(200, MessageResponseSchema)
@tweet_blueprint.doc(security=[{"BearerAuth": []}])
def delete_tweet(tweet_id):
    _tweet_service().delete_tweet(to_object_id(tweet_id), g.user_id)
    return api_response({}, "Tweet deleted successfully")
