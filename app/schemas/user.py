from marshmallow import Schema, fields, validate, EXCLUDE
from flask_smorest.fields import Upload

from app.schemas.common_schema import EnvelopeSchema
from app.schemas.video import VideoPageSchema


class UserSchema(Schema):
    id = fields.String(attribute='_id', data_key='_id', metadata={'description': '사용자 ID'})
    username = fields.String(metadata={'description': '사용자명 (소문자)'})
    email = fields.Email(metadata={'description': '이메일'})
    fullname = fields.String(metadata={'description': '이름'})
    avatar = fields.String(metadata={'description': '프로필 이미지 URL'})
    coverImage = fields.String(metadata={'description': '커버 이미지 URL'})
    watchHistory = fields.List(fields.String(), metadata={'description': '시청한 영상 ID 목록'})
    createdAt = fields.DateTime(metadata={'description': '가입일'})
    updatedAt = fields.DateTime()


class ChannelProfileSchema(Schema):
    id = fields.String(attribute='_id', data_key='_id', metadata={'description': '채널(사용자) ID'})
    username = fields.String()
    fullname = fields.String()
    avatar = fields.String()
    coverImage = fields.String()
    subscribersCount = fields.Integer(metadata={'description': '구독자 수'})
    channelsSubscribedToCount = fields.Integer(metadata={'description': '이 채널이 구독 중인 채널 수'})
    isSubscribed = fields.Boolean(metadata={'description': '조회자 구독 여부 (guest는 항상 false)'})
    createdAt = fields.DateTime()


class RegisterFormSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    fullname = fields.String(required=True, validate=validate.Length(min=1), metadata={'description': '이름'})
    email = fields.Email(required=True, metadata={'description': '이메일'})
    username = fields.String(required=True, validate=validate.Length(min=1), metadata={'description': '사용자명'})
    password = fields.String(required=True, validate=validate.Length(min=1), metadata={'description': '비밀번호'})


class RegisterFilesSchema(Schema):
    avatar = Upload(metadata={'description': '프로필 이미지 (필수)'})
    coverImage = Upload(metadata={'description': '커버 이미지'})


class LoginRequestSchema(Schema):
    username = fields.String(metadata={'description': '사용자명 (username 또는 email 중 하나)'})
    email = fields.String(metadata={'description': '이메일'})
    password = fields.String(required=True, metadata={'description': '비밀번호'})


class RefreshTokenRequestSchema(Schema):
    refreshToken = fields.String(metadata={'description': '리프레시 토큰 (쿠키가 없을 때)'})


class ChangePasswordRequestSchema(Schema):
    oldPassword = fields.String(required=True, metadata={'description': '현재 비밀번호'})
    newPassword = fields.String(required=True, validate=validate.Length(min=1), metadata={'description': '새 비밀번호'})


class UpdateAccountRequestSchema(Schema):
    fullname = fields.String(metadata={'description': '이름'})
    email = fields.Email(metadata={'description': '이메일'})


class AvatarFilesSchema(Schema):
    avatar = Upload(metadata={'description': '새 프로필 이미지'})


class CoverImageFilesSchema(Schema):
    coverImage = Upload(metadata={'description': '새 커버 이미지'})


class TokenSchema(Schema):
    accessToken = fields.String(metadata={'description': 'JWT 액세스 토큰'})
    refreshToken = fields.String(metadata={'description': 'JWT 리프레시 토큰'})


class LoginDataSchema(TokenSchema):
    user = fields.Nested(UserSchema)


class UserResponseSchema(EnvelopeSchema):
    data = fields.Nested(UserSchema)


class LoginResponseSchema(EnvelopeSchema):
    data = fields.Nested(LoginDataSchema)


class TokenResponseSchema(EnvelopeSchema):
    data = fields.Nested(TokenSchema)


class ChannelProfileResponseSchema(EnvelopeSchema):
    data = fields.Nested(ChannelProfileSchema)


class WatchHistoryResponseSchema(EnvelopeSchema):
    data = fields.Nested(VideoPageSchema)
