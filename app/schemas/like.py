from marshmallow import Schema, fields

from app.schemas.common_schema import EnvelopeSchema


class ToggleLikeSchema(Schema):
    isLiked = fields.Boolean(required=True, metadata={'description': '토글 이후 좋아요 상태'})
    likesCount = fields.Integer(required=True, metadata={'description': '토글 이후 좋아요 수'})


class ToggleLikeResponseSchema(EnvelopeSchema):
    data = fields.Nested(ToggleLikeSchema)
