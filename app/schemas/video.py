from marshmallow import Schema, fields, validate, EXCLUDE
from flask_smorest.fields import Upload

from app.schemas.common_schema import (
    BASE_SORT_FIELDS, EnvelopeSchema, ListQuerySchema, OwnerSchema, PageSchema
)


class VideoSchema(Schema):
    id = fields.String(attribute='_id', data_key='_id', metadata={'description': '영상 ID'})
    title = fields.String(metadata={'description': '제목'})
    description = fields.String(metadata={'description': '설명'})
    videoFile = fields.String(metadata={'description': '영상 파일 URL'})
    thumbnail = fields.String(metadata={'description': '썸네일 URL'})
    duration = fields.Float(metadata={'description': '영상 길이 (초)'})
    views = fields.Integer(metadata={'description': '조회수'})
    isPublished = fields.Boolean(metadata={'description': '공개 여부'})
    owner = fields.String(metadata={'description': '업로더 ID'})
    createdAt = fields.DateTime()
    updatedAt = fields.DateTime()


class VideoSummarySchema(VideoSchema):
    owner = fields.Nested(OwnerSchema, allow_none=True, metadata={'description': '업로더 정보'})
    likesCount = fields.Integer(metadata={'description': '좋아요 수'})
    isLiked = fields.Boolean(metadata={'description': '조회자 좋아요 여부 (guest는 항상 false)'})
    commentsCount = fields.Integer(metadata={'description': '댓글 수'})
    likedAt = fields.DateTime(metadata={'description': '좋아요 누른 시각 (좋아요 목록에서만)'})


class VideoDetailSchema(VideoSummarySchema):
    subscribersCount = fields.Integer(metadata={'description': '업로더 채널 구독자 수'})
    isSubscribed = fields.Boolean(metadata={'description': '조회자의 업로더 구독 여부 (guest는 항상 false)'})


class VideoPageSchema(PageSchema):
    docs = fields.List(fields.Nested(VideoSummarySchema))


class VideoListQuerySchema(ListQuerySchema):
    sortBy = fields.String(
        validate=validate.OneOf(BASE_SORT_FIELDS + ['title', 'views', 'duration']),
        metadata={'description': '정렬 필드 (기본 createdAt)'}
    )
    query = fields.String(metadata={'description': '제목 검색어 (대소문자 무시)'})
    userId = fields.String(metadata={'description': '업로더 ID로 필터'})


class PublishVideoFormSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    title = fields.String(required=True, validate=validate.Length(min=1), metadata={'description': '제목'})
    description = fields.String(required=True, validate=validate.Length(min=1), metadata={'description': '설명'})


class PublishVideoFilesSchema(Schema):
    videoFile = Upload(metadata={'description': '영상 파일'})
    thumbnail = Upload(metadata={'description': '썸네일 이미지'})


class UpdateVideoFormSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    title = fields.String(metadata={'description': '제목'})
    description = fields.String(metadata={'description': '설명'})


class UpdateVideoFilesSchema(Schema):
    thumbnail = Upload(metadata={'description': '새 썸네일 이미지'})


class VideoResponseSchema(EnvelopeSchema):
    data = fields.Nested(VideoSchema)


class VideoDetailResponseSchema(EnvelopeSchema):
    data = fields.Nested(VideoDetailSchema)


class VideoPageResponseSchema(EnvelopeSchema):
    data = fields.Nested(VideoPageSchema)


class VideoListResponseSchema(EnvelopeSchema):
    data = fields.List(fields.Nested(VideoSummarySchema))
