from marshmallow import Schema, fields

from app.schemas.common_schema import EnvelopeSchema
from app.schemas.video import VideoListQuerySchema


class ChannelStatsSchema(Schema):
    totalVideos = fields.Integer(metadata={'description': '업로드한 영상 수 (비공개 포함)'})
    totalViews = fields.Integer(metadata={'description': '전체 영상 조회수 합계'})
    totalSubscribers = fields.Integer(metadata={'description': '구독자 수'})
    totalLikes = fields.Integer(metadata={'description': '전체 영상이 받은 좋아요 수'})


class ChannelVideosQuerySchema(VideoListQuerySchema):
    channelId = fields.String(metadata={'description': '조회할 채널 ID (기본: 본인)'})


class ChannelStatsResponseSchema(EnvelopeSchema):
    data = fields.Nested(ChannelStatsSchema)
