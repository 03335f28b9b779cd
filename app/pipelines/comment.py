from typing import Optional

from bson import ObjectId

from app.pipelines.pagination import QueryPlan
from app.pipelines.stages import like_stages, owner_lookup, project, sort_spec


def video_comments_plan(video_id: ObjectId, viewer_id: Optional[ObjectId],
                        sort_by: Optional[str] = None, sort_type: Optional[str] = None) -> QueryPlan:
    return QueryPlan(
        filter_stages=[{'$match': {'video': video_id}}],
        sort=sort_spec(sort_by, sort_type),
        page_stages=[
            *owner_lookup(),
            *like_stages('comment', viewer_id),
            project('content', 'video', 'owner', 'likesCount', 'isLiked', 'createdAt', 'updatedAt')
        ]
    )
