from marshmallow import Schema, fields

from app.schemas.common_schema import EnvelopeSchema, OwnerSchema, PageSchema


class CommentSchema(Schema):
    id = fields.String(attribute='_id', data_key='_id', metadata={'description': '댓글 ID'})
    content = fields.String(metadata={'description': '댓글 내용'})
    video = fields.String(metadata={'description': '영상 ID'})
    owner = fields.String(metadata={'description': '작성자 ID'})
    createdAt = fields.DateTime()
    updatedAt = fields.DateTime()


class CommentDetailSchema(CommentSchema):
    owner = fields.Nested(OwnerSchema, allow_none=True, metadata={'description': '작성자 정보'})
    likesCount = fields.Integer(metadata={'description': '좋아요 수'})
    isLiked = fields.Boolean(metadata={'description': '조회자 좋아요 여부 (guest는 항상 false)'})


class CommentPageSchema(PageSchema):
    docs = fields.List(fields.Nested(CommentDetailSchema))


class CommentResponseSchema(EnvelopeSchema):
    data = fields.Nested(CommentSchema)


class CommentPageResponseSchema(EnvelopeSchema):
    data = fields.Nested(CommentPageSchema)
