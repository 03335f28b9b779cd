"""
Utils package
유틸리티 함수들을 모아둔 패키지

- jwt_utils: JWT 토큰 생성 및 검증
- object_id: ObjectId 검증/변환
- ownership: 소유자 권한 판정
- response: 공통 응답 envelope
- media_storage: Cloudinary 업로드/삭제
"""

from common.utils.jwt_utils import (
    decode_token,
    create_access_token,
    create_refresh_token
)
from common.utils.object_id import to_object_id
from common.utils.ownership import is_owner, ensure_owner
from common.utils.response import api_response

__all__ = [
    'decode_token',
    'create_access_token',
    'create_refresh_token',
    'to_object_id',
    'is_owner',
    'ensure_owner',
    'api_response'
]
