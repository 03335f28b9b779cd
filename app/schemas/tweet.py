from marshmallow import Schema, fields

from app.schemas.common_schema import EnvelopeSchema, OwnerSchema, PageSchema


class TweetSchema(Schema):
    id = fields.String(attribute='_id', data_key='_id', metadata={'description': '게시글 ID'})
    content = fields.String(metadata={'description': '게시글 내용'})
    owner = fields.String(metadata={'description': '작성자 ID'})
    createdAt = fields.DateTime()
    updatedAt = fields.DateTime()


class TweetDetailSchema(TweetSchema):
    owner = fields.Nested(OwnerSchema, allow_none=True)
    likesCount = fields.Integer(metadata={'description': '좋아요 수'})
    isLiked = fields.Boolean(metadata={'description': '조회자 좋아요 여부 (guest는 항상 false)'})


class TweetPageSchema(PageSchema):
    docs = fields.List(fields.Nested(TweetDetailSchema))


class TweetResponseSchema(EnvelopeSchema):
    data = fields.Nested(TweetSchema)


class TweetPageResponseSchema(EnvelopeSchema):
    data = fields.Nested(TweetPageSchema)
