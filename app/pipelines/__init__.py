"""
Aggregation query builder

리소스별 pipeline을 조립하는 순수 함수 모음. 실행은 각 Repository가 담당한다.

- pagination: PageRequest, QueryPlan, $facet 기반 페이지 계산
- stages: owner join, likes/subscribers 파생 필드, 정렬
- video / comment / tweet / playlist / subscription / user / dashboard: 리소스별 계획
"""

from app.pipelines.pagination import PageRequest, QueryPlan, build_page, paginate, page_slice
from app.pipelines.stages import (
    like_stages, owner_lookup, sort_spec, subscriber_stages, viewer_flag
)

__all__ = [
    'PageRequest',
    'QueryPlan',
    'build_page',
    'paginate',
    'page_slice',
    'like_stages',
    'owner_lookup',
    'sort_spec',
    'subscriber_stages',
    'viewer_flag'
]
