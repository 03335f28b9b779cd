import math
from dataclasses import dataclass, field
from typing import Dict, List, Sequence


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = 10

    def __post_init__(self):
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.limit < 1:
            raise ValueError(f"limit must be >= 1, got {self.limit}")

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class QueryPlan:
    """
    페이지네이션 가능한 조회 계획.

    filter_stages: 결과 집합(=totalDocs)을 결정하는 단계
    sort: 정렬 키. page 경계는 이 정렬 기준으로 고정된다
    page_stages: 잘라낸 한 페이지에만 적용하는 join/파생 필드 단계
    """
    filter_stages: List[Dict]
    sort: Dict[str, int]
    page_stages: List[Dict] = field(default_factory=list)

    def to_pipeline(self, page_request: PageRequest) -> List[Dict]:
        return [
            *self.filter_stages,
            {'$sort': dict(self.sort)},
            {
                '$facet': {
                    'metadata': [{'$count': 'totalDocs'}],
                    'docs': [
                        {'$skip': page_request.skip},
                        {'$limit': page_request.limit},
                        *self.page_stages
                    ]
                }
            }
        ]


def build_page(docs: List[Dict], total_docs: int, page_request: PageRequest) -> Dict:
    page = page_request.page
    limit = page_request.limit
    total_pages = max(1, math.ceil(total_docs / limit))
    has_prev_page = page > 1
    has_next_page = page < total_pages

    return {
        'docs': docs,
        'totalDocs': total_docs,
        'limit': limit,
        'page': page,
        'totalPages': total_pages,
        'pagingCounter': page_request.skip + 1,
        'hasPrevPage': has_prev_page,
        'hasNextPage': has_next_page,
        'prevPage': page - 1 if has_prev_page else None,
        'nextPage': page + 1 if has_next_page else None
    }


def paginate(collection, plan: QueryPlan, page_request: PageRequest) -> Dict:
    results = list(collection.aggregate(plan.to_pipeline(page_request)))
    if not results:
        return build_page([], 0, page_request)

    facet = results[0]
    metadata = facet.get('metadata') or []
    total_docs = metadata[0]['totalDocs'] if metadata else 0
    return build_page(facet.get('docs', []), total_docs, page_request)


def page_slice(items: Sequence, page_request: PageRequest) -> List:
    return list(items[page_request.skip:page_request.skip + page_request.limit])
