from marshmallow import Schema, fields

from app.schemas.common_schema import EnvelopeSchema, PageSchema
from app.schemas.video import VideoSchema


class ToggleSubscriptionSchema(Schema):
    isSubscribed = fields.Boolean(required=True, metadata={'description': '토글 이후 구독 상태'})
    subscribersCount = fields.Integer(required=True, metadata={'description': '토글 이후 채널 구독자 수'})


class ChannelSchema(Schema):
    id = fields.String(attribute='_id', data_key='_id', metadata={'description': '채널(사용자) ID'})
    username = fields.String()
    fullname = fields.String()
    avatar = fields.String()
    subscribersCount = fields.Integer(metadata={'description': '구독자 수'})
    isSubscribed = fields.Boolean(metadata={'description': '조회자 구독 여부 (guest는 항상 false)'})
    subscribedAt = fields.DateTime(metadata={'description': '구독 시각'})
    latestVideo = fields.Nested(VideoSchema, allow_none=True, metadata={'description': '최신 공개 영상'})


class ChannelPageSchema(PageSchema):
    docs = fields.List(fields.Nested(ChannelSchema))


class ToggleSubscriptionResponseSchema(EnvelopeSchema):
    data = fields.Nested(ToggleSubscriptionSchema)


class ChannelPageResponseSchema(EnvelopeSchema):
    data = fields.Nested(ChannelPageSchema)
