from marshmallow import Schema, fields, validate

from app.schemas.common_schema import EnvelopeSchema, OwnerSchema, PageSchema
from app.schemas.video import VideoSummarySchema


class PlaylistSchema(Schema):
    id = fields.String(attribute='_id', data_key='_id', metadata={'description': '재생목록 ID'})
    name = fields.String(metadata={'description': '이름'})
    description = fields.String(metadata={'description': '설명'})
    owner = fields.String(metadata={'description': '소유자 ID'})
    videos = fields.List(fields.String(), metadata={'description': '영상 ID 목록'})
    createdAt = fields.DateTime()
    updatedAt = fields.DateTime()


class PlaylistSummarySchema(PlaylistSchema):
    owner = fields.Nested(OwnerSchema, allow_none=True)
    totalVideos = fields.Integer(metadata={'description': '영상 수'})


class PlaylistDetailSchema(PlaylistSummarySchema):
    videos = fields.List(fields.Nested(VideoSummarySchema), metadata={'description': '영상 목록'})
    totalViews = fields.Integer(metadata={'description': '영상 조회수 합계'})


class PlaylistPageSchema(PageSchema):
    docs = fields.List(fields.Nested(PlaylistSummarySchema))


class CreatePlaylistRequestSchema(Schema):
    name = fields.String(required=True, validate=validate.Length(min=1), metadata={'description': '이름'})
    description = fields.String(load_default='', metadata={'description': '설명'})


class UpdatePlaylistRequestSchema(Schema):
    name = fields.String(metadata={'description': '이름'})
    description = fields.String(metadata={'description': '설명'})


class PlaylistResponseSchema(EnvelopeSchema):
    data = fields.Nested(PlaylistSchema)


class PlaylistDetailResponseSchema(EnvelopeSchema):
    data = fields.Nested(PlaylistDetailSchema)


class PlaylistPageResponseSchema(EnvelopeSchema):
    data = fields.Nested(PlaylistPageSchema)
