from typing import Dict, List, Optional

from bson import ObjectId

from app.pipelines.pagination import QueryPlan
from app.pipelines.stages import owner_lookup, project, sort_spec

PLAYLIST_FIELDS = ('name', 'description', 'owner', 'totalVideos', 'createdAt', 'updatedAt')


def user_playlists_plan(owner_id: ObjectId, sort_by: Optional[str] = None,
                        sort_type: Optional[str] = None) -> QueryPlan:
    return QueryPlan(
        filter_stages=[{'$match': {'owner': owner_id}}],
        sort=sort_spec(sort_by, sort_type),
        page_stages=[
            *owner_lookup(),
            {'$addFields': {'totalVideos': {'$size': {'$ifNull': ['$videos', []]}}}},
            project(*PLAYLIST_FIELDS, 'videos')
        ]
    )


def playlist_detail_pipeline(playlist_id: ObjectId, include_unpublished: bool = False) -> List[Dict]:
    video_match = {} if include_unpublished else {'isPublished': True}
    return [
        {'$match': {'_id': playlist_id}},
        {
            '$lookup': {
                'from': 'videos',
                'localField': 'videos',
                'foreignField': '_id',
                'as': 'videos',
                'pipeline': [
                    {'$match': video_match},
                    *owner_lookup(),
                    project('title', 'description', 'thumbnail', 'videoFile', 'duration',
                            'views', 'isPublished', 'owner', 'createdAt')
                ]
            }
        },
        {
            '$addFields': {
                'totalVideos': {'$size': '$videos'},
                'totalViews': {'$sum': '$videos.views'}
            }
        },
        *owner_lookup(),
        project(*PLAYLIST_FIELDS, 'videos', 'totalViews')
    ]
