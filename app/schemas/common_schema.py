from marshmallow import Schema, fields, validate, post_load

from app.pipelines.pagination import PageRequest

DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100

BASE_SORT_FIELDS = ['createdAt', 'updatedAt']


class EnvelopeSchema(Schema):
    statusCode = fields.Integer(required=True, metadata={'description': 'HTTP 상태 코드'})
    data = fields.Raw(allow_none=True, metadata={'description': '응답 데이터'})
    message = fields.String(metadata={'description': '안내 메시지'})
    success = fields.Boolean(metadata={'description': '성공 여부 (statusCode < 400)'})


class MessageResponseSchema(EnvelopeSchema):
    data = fields.Dict(allow_none=True, metadata={'description': '빈 객체'})


class HealthcheckResponseSchema(EnvelopeSchema):
    data = fields.String(metadata={'description': '서비스 상태'})


class OwnerSchema(Schema):
    id = fields.String(attribute='_id', data_key='_id', metadata={'description': '사용자 ID'})
    username = fields.String(metadata={'description': '사용자명 (소문자)'})
    fullname = fields.String(metadata={'description': '이름'})
    avatar = fields.String(metadata={'description': '프로필 이미지 URL'})


class PageSchema(Schema):
    """하위 클래스에서 docs 필드를 리소스 스키마로 지정한다"""
    docs = fields.List(fields.Dict())
    totalDocs = fields.Integer(metadata={'description': '필터 조건에 맞는 전체 개수'})
    limit = fields.Integer(metadata={'description': '페이지 크기'})
    page = fields.Integer(metadata={'description': '현재 페이지 (1부터 시작)'})
    totalPages = fields.Integer(metadata={'description': '전체 페이지 수 (최소 1)'})
    pagingCounter = fields.Integer(metadata={'description': '현재 페이지 첫 항목의 순번'})
    hasPrevPage = fields.Boolean()
    hasNextPage = fields.Boolean()
    prevPage = fields.Integer(allow_none=True)
    nextPage = fields.Integer(allow_none=True)


class PageQuerySchema(Schema):
    page = fields.Integer(
        load_default=1,
        validate=validate.Range(min=1),
        metadata={'description': '페이지 번호 (1부터 시작)'}
    )
    limit = fields.Integer(
        load_default=DEFAULT_PAGE_LIMIT,
        validate=validate.Range(min=1, max=MAX_PAGE_LIMIT),
        metadata={'description': f'페이지 크기 (1~{MAX_PAGE_LIMIT})'}
    )

    @post_load
    def attach_page_request(self, data, **kwargs):
        data['page_request'] = PageRequest(page=data.pop('page'), limit=data.pop('limit'))
        return data


class ListQuerySchema(PageQuerySchema):
    sortBy = fields.String(
        validate=validate.OneOf(BASE_SORT_FIELDS),
        metadata={'description': '정렬 필드 (기본 createdAt)'}
    )
    sortType = fields.String(
        metadata={'description': 'asc면 오름차순, 그 외 내림차순'}
    )


class ContentRequestSchema(Schema):
    content = fields.String(
        required=True,
        validate=validate.Length(min=1),
        metadata={'description': '본문'}
    )
