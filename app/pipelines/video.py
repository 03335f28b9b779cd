import re
from typing import Dict, List, Optional

from bson import ObjectId

from app.pipelines.pagination import QueryPlan
from app.pipelines.stages import (
    count_lookup, first_of, like_stages, owner_lookup, project, sort_spec, subscriber_stages
)

NEXT_VIDEOS_SAMPLE_SIZE = 10

VIDEO_SUMMARY_FIELDS = (
    'title', 'description', 'thumbnail', 'videoFile', 'duration', 'views',
    'isPublished', 'owner', 'likesCount', 'isLiked', 'createdAt', 'updatedAt'
)


def video_summary_stages(viewer_id: Optional[ObjectId]) -> List[Dict]:
    return [
        *owner_lookup(),
        *like_stages('video', viewer_id),
        project(*VIDEO_SUMMARY_FIELDS)
    ]


def all_videos_plan(viewer_id: Optional[ObjectId], query: Optional[str] = None,
                    owner_id: Optional[ObjectId] = None, sort_by: Optional[str] = None,
                    sort_type: Optional[str] = None) -> QueryPlan:
    match = {'isPublished': True}
    if owner_id is not None:
        match['owner'] = owner_id
    if query:
        match['title'] = {'$regex': re.escape(query), '$options': 'i'}

    return QueryPlan(
        filter_stages=[{'$match': match}],
        sort=sort_spec(sort_by, sort_type),
        page_stages=video_summary_stages(viewer_id)
    )


def channel_videos_plan(channel_id: ObjectId, viewer_id: Optional[ObjectId], include_unpublished: bool,
                        sort_by: Optional[str] = None, sort_type: Optional[str] = None) -> QueryPlan:
    match = {'owner': channel_id}
    if not include_unpublished:
        match['isPublished'] = True

    return QueryPlan(
        filter_stages=[{'$match': match}],
        sort=sort_spec(sort_by, sort_type),
        page_stages=[
            *like_stages('video', viewer_id),
            *count_lookup('comments', 'video', 'commentsCount'),
            project(*VIDEO_SUMMARY_FIELDS, 'commentsCount')
        ]
    )


def video_detail_pipeline(video_id: ObjectId, viewer_id: Optional[ObjectId]) -> List[Dict]:
    return [
        {'$match': {'_id': video_id}},
        *like_stages('video', viewer_id),
        *count_lookup('comments', 'video', 'commentsCount'),
        *owner_lookup(),
        *subscriber_stages('owner._id', viewer_id),
        project(
            'videoFile', 'thumbnail', 'title', 'description', 'views', 'duration',
            'isPublished', 'owner', 'likesCount', 'isLiked', 'commentsCount',
            'subscribersCount', 'isSubscribed', 'createdAt', 'updatedAt'
        )
    ]


def next_videos_pipeline(video_id: ObjectId, viewer_id: Optional[ObjectId],
                         sample_size: int = NEXT_VIDEOS_SAMPLE_SIZE) -> List[Dict]:
    return [
        {'$match': {'_id': {'$ne': video_id}, 'isPublished': True}},
        {'$sample': {'size': sample_size}},
        *video_summary_stages(viewer_id)
    ]


def liked_videos_plan(user_id: ObjectId) -> QueryPlan:
    """likes 컬렉션 기준. 공개된 영상에 대한 좋아요만, 최근 좋아요 순"""
    return QueryPlan(
        filter_stages=[
            {'$match': {'likedBy': user_id, 'video': {'$exists': True, '$ne': None}}},
            {
                '$lookup': {
                    'from': 'videos',
                    'localField': 'video',
                    'foreignField': '_id',
                    'as': 'video'
                }
            },
            {'$addFields': {'video': first_of('$video')}},
            {'$match': {'video.isPublished': True}}
        ],
        sort=sort_spec(),
        page_stages=[
            {'$addFields': {'video.likedAt': '$createdAt'}},
            {'$replaceRoot': {'newRoot': '$video'}},
            *owner_lookup(),
            *like_stages('video', user_id),
            project(*VIDEO_SUMMARY_FIELDS, 'likedAt')
        ]
    )


def videos_by_ids_pipeline(video_ids: List[ObjectId], viewer_id: Optional[ObjectId]) -> List[Dict]:
    return [
        {'$match': {'_id': {'$in': video_ids}}},
        *video_summary_stages(viewer_id)
    ]
