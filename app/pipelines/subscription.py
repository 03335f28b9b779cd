from typing import Dict, List, Optional

from bson import ObjectId

from app.pipelines.pagination import QueryPlan
from app.pipelines.stages import first_of, project, public_user, sort_spec, subscriber_stages

CHANNEL_FIELDS = ('username', 'fullname', 'avatar', 'subscribersCount', 'isSubscribed', 'subscribedAt')


def _user_as_root(user_field: str) -> List[Dict]:
    """subscription 문서를 user_field의 User 공개 필드로 치환한다 (구독 시각은 subscribedAt)"""
    return [
        {
            '$lookup': {
                'from': 'users',
                'localField': user_field,
                'foreignField': '_id',
                'as': '_user'
            }
        },
        {'$match': {'_user': {'$ne': []}}},
        {'$addFields': {'_user': public_user('$_user')}},
        {'$addFields': {'_user.subscribedAt': '$createdAt'}},
        {'$replaceRoot': {'newRoot': '$_user'}}
    ]


def channel_subscribers_plan(channel_id: ObjectId, viewer_id: Optional[ObjectId]) -> QueryPlan:
    """채널을 구독한 사용자 목록. isSubscribed는 viewer가 그 구독자를 구독 중인지 여부"""
    return QueryPlan(
        filter_stages=[{'$match': {'channel': channel_id}}],
        sort=sort_spec(),
        page_stages=[
            *_user_as_root('subscriber'),
            *subscriber_stages('_id', viewer_id),
            project(*CHANNEL_FIELDS)
        ]
    )


def subscribed_channels_plan(subscriber_id: ObjectId, viewer_id: Optional[ObjectId]) -> QueryPlan:
    """subscriber가 구독한 채널 목록과 각 채널의 최신 공개 영상"""
    return QueryPlan(
        filter_stages=[{'$match': {'subscriber': subscriber_id}}],
        sort=sort_spec(),
        page_stages=[
            *_user_as_root('channel'),
            *subscriber_stages('_id', viewer_id),
            {
                '$lookup': {
                    'from': 'videos',
                    'localField': '_id',
                    'foreignField': 'owner',
                    'as': 'latestVideo',
                    'pipeline': [
                        {'$match': {'isPublished': True}},
                        {'$sort': {'createdAt': -1, '_id': -1}},
                        {'$limit': 1},
                        project('title', 'description', 'thumbnail', 'videoFile',
                                'duration', 'views', 'owner', 'createdAt')
                    ]
                }
            },
            {'$addFields': {'latestVideo': first_of('$latestVideo')}},
            project(*CHANNEL_FIELDS, 'latestVideo')
        ]
    )
