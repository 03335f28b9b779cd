from flask import g
from flask_smorest import Blueprint

from app.schemas.comment import CommentPageResponseSchema, CommentResponseSchema
from app.schemas.common_schema import ContentRequestSchema, ListQuerySchema, MessageResponseSchema
from app.services.comment_service import CommentService
from common.decorator.auth_decorators import guest_allowed, login_required
from common.extensions import get_mongo_db
from common.utils import api_response, to_object_id

comment_blueprint = Blueprint(
    'comments',
    __name__,
    url_prefix='/api/v1/comments',
    description='영상 댓글 API'
)


def _comment_service():
    return CommentService(get_mongo_db())


@comment_blueprint.route('/<video_id>', methods=['GET'])
@guest_allowed
@comment_blueprint.arguments(ListQuerySchema, location='query')
@comment_blueprint.response(200, CommentPageResponseSchema)
@comment_blueprint.doc(security=[{"BearerAuth": []}])
def get_video_comments(args, video_id):
    comments = _comment_service().get_video_comments(
        to_object_id(video_id),
        g.user_id,
        args['page_request'],
        sort_by=args.get('sortBy'),
        sort_type=args.get('sortType')
    )
    return api_response(comments, "Comments fetched successfully")


@comment_blueprint.route('/<video_id>', methods=['POST'])
@login_required
@comment_blueprint.arguments(ContentRequestSchema)
@comment_blueprint.response(201, CommentResponseSchema)
@comment_blueprint.doc(security=[{"BearerAuth": []}])
def add_comment(data, video_id):
    comment = _comment_service().add_comment(to_object_id(video_id), g.user_id, data['content'])
    return api_response(comment, "Comment added successfully", 201)


@comment_blueprint.route('/c/<comment_id>', methods=['PATCH'])
@login_required
@comment_blueprint.arguments(ContentRequestSchema)
@comment_blueprint.response(200, CommentResponseSchema)
@comment_blueprint.doc(security=[{"BearerAuth": []}])
def update_comment(data, comment_id):
    comment = _comment_service().update_comment(to_object_id(comment_id), g.user_id, data['content'])
    return api_response(comment, "Comment updated successfully")


@comment_blueprint.route('/c/<comment_id>', methods=['DELETE'])
@login_required
@comment_blueprint.response(200, MessageResponseSchema)
@comment_blueprint.doc(security=[{"BearerAuth": []}])
def delete_comment(comment_id):
    _comment_service().delete_comment(to_object_id(comment_id), g.user_id)
    return api_response({}, "Comment deleted successfully")
