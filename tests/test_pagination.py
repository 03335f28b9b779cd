import pytest

from app.pipelines.pagination import PageRequest, QueryPlan, build_page, page_slice, paginate


class StubCollection:
    def __init__(self, results):
        self.results = results
        self.pipelines = []

    def aggregate(self, pipeline):
        self.pipelines.append(pipeline)
        return iter(self.results)


@pytest.mark.parametrize('page, limit', [(0, 10), (1, 0), (-1, -1)])
def test_page_request_rejects_non_positive_values(page, limit):
    with pytest.raises(ValueError):
        PageRequest(page=page, limit=limit)


def test_empty_result_is_a_single_empty_page():
    page = build_page([], 0, PageRequest())

    assert page['docs'] == []
    assert page['totalDocs'] == 0
    assert page['totalPages'] == 1
    assert page['hasPrevPage'] is False
    assert page['hasNextPage'] is False
    assert page['prevPage'] is None
    assert page['nextPage'] is None


def test_twenty_five_comments_in_pages_of_ten():
    comments = [f'comment-{i}' for i in range(25)]

    first = build_page(page_slice(comments, PageRequest(1, 10)), 25, PageRequest(1, 10))
    third = build_page(page_slice(comments, PageRequest(3, 10)), 25, PageRequest(3, 10))
    fourth = build_page(page_slice(comments, PageRequest(4, 10)), 25, PageRequest(4, 10))

    assert len(first['docs']) == 10
    assert first['totalPages'] == 3
    assert first['hasNextPage'] is True
    assert first['nextPage'] == 2

    assert third['docs'] == comments[20:]
    assert third['hasNextPage'] is False
    assert third['prevPage'] == 2
    assert third['pagingCounter'] == 21

    assert fourth['docs'] == []
    assert fourth['totalDocs'] == 25


@pytest.mark.parametrize('total, limit', [(1, 1), (9, 10), (10, 10), (11, 10), (37, 6)])
def test_pages_cover_every_item_exactly_once(total, limit):
    items = list(range(total))
    total_pages = build_page([], total, PageRequest(1, limit))['totalPages']

    collected = []
    for page_number in range(1, total_pages + 1):
        collected.extend(page_slice(items, PageRequest(page_number, limit)))

    assert collected == items


def test_paginate_reads_count_and_docs_from_one_facet():
    collection = StubCollection([{'metadata': [{'totalDocs': 12}], 'docs': [{'_id': 1}, {'_id': 2}]}])
    plan = QueryPlan(filter_stages=[{'$match': {}}], sort={'createdAt': -1, '_id': -1})

    page = paginate(collection, plan, PageRequest(page=2, limit=10))

    assert len(collection.pipelines) == 1
    assert page['docs'] == [{'_id': 1}, {'_id': 2}]
    assert page['totalDocs'] == 12
    assert page['totalPages'] == 2
    assert page['hasPrevPage'] is True


def test_paginate_handles_empty_facet_metadata():
    collection = StubCollection([{'metadata': [], 'docs': []}])
    plan = QueryPlan(filter_stages=[], sort={'createdAt': -1, '_id': -1})

    page = paginate(collection, plan, PageRequest())

    assert page['totalDocs'] == 0
    assert page['totalPages'] == 1
