"""
Aggregation 단계 빌더

모든 함수는 순수 함수로 pipeline stage(dict) 리스트만 만든다. DB 접근 없음.
viewer_id가 None이면 guest로 보고 isLiked / isSubscribed는 항상 False 리터럴이 된다.
join은 localField/foreignField 형태만 쓰고, 필요 없는 필드는 바로 뒤 단계에서 잘라낸다.
"""

from typing import Dict, List, Optional

from bson import ObjectId

DEFAULT_SORT_FIELD = 'createdAt'

OWNER_FIELDS = ('_id', 'username', 'fullname', 'avatar')


def first_of(field_path: str) -> Dict:
    return {'$arrayElemAt': [field_path, 0]}


def viewer_flag(viewer_id: Optional[ObjectId], members_path: str) -> Dict:
    if viewer_id is None:
        return {'$literal': False}
    return {'$in': [viewer_id, members_path]}


def drop(*fields: str) -> Dict:
    return {'$project': {name: 0 for name in fields}}


def public_user(users_path: str) -> Dict:
    """users join 결과 배열의 첫 문서에서 공개 필드만 꺼낸 객체"""
    return {name: first_of(f'{users_path}.{name}') for name in OWNER_FIELDS}


def owner_lookup(local_field: str = 'owner', as_field: str = 'owner') -> List[Dict]:
    return [
        {
            '$lookup': {
                'from': 'users',
                'localField': local_field,
                'foreignField': '_id',
                'as': as_field
            }
        },
        {'$addFields': {as_field: public_user(f'${as_field}')}}
    ]


def like_stages(target_field: str, viewer_id: Optional[ObjectId]) -> List[Dict]:
    """likesCount, isLiked 계산. target_field는 likes 컬렉션의 video/comment/tweet"""
    return [
        {
            '$lookup': {
                'from': 'likes',
                'localField': '_id',
                'foreignField': target_field,
                'as': '_likes'
            }
        },
        {
            '$addFields': {
                'likesCount': {'$size': '$_likes'},
                'isLiked': viewer_flag(viewer_id, '$_likes.likedBy')
            }
        },
        drop('_likes')
    ]


def subscriber_stages(channel_field: str, viewer_id: Optional[ObjectId]) -> List[Dict]:
    """subscribersCount, isSubscribed 계산. channel_field는 채널(User) _id를 가리키는 경로"""
    return [
        {
            '$lookup': {
                'from': 'subscriptions',
                'localField': channel_field,
                'foreignField': 'channel',
                'as': '_subscribers'
            }
        },
        {
            '$addFields': {
                'subscribersCount': {'$size': '$_subscribers'},
                'isSubscribed': viewer_flag(viewer_id, '$_subscribers.subscriber')
            }
        },
        drop('_subscribers')
    ]


def count_lookup(from_collection: str, foreign_field: str, count_field: str, local_field: str = '_id') -> List[Dict]:
    temp_field = f'_{count_field}'
    return [
        {
            '$lookup': {
                'from': from_collection,
                'localField': local_field,
                'foreignField': foreign_field,
                'as': temp_field
            }
        },
        {'$addFields': {count_field: {'$size': f'${temp_field}'}}},
        drop(temp_field)
    ]


def sort_spec(sort_by: Optional[str] = None, sort_type: Optional[str] = None,
              default_field: str = DEFAULT_SORT_FIELD) -> Dict[str, int]:
    """asc면 오름차순, 그 외는 내림차순. _id를 같은 방향의 tie-break로 붙인다"""
    if sort_by:
        direction = 1 if sort_type == 'asc' else -1
        field = sort_by
    else:
        direction = -1
        field = default_field

    order = {field: direction}
    if field != '_id':
        order['_id'] = direction
    return order


def project(*fields: str, **nested) -> Dict:
    projection = {name: 1 for name in fields}
    projection.update(nested)
    return {'$project': projection}
