from typing import Dict, List, Optional

from bson import ObjectId

from app.pipelines.stages import project, viewer_flag


def channel_profile_pipeline(username: str, viewer_id: Optional[ObjectId]) -> List[Dict]:
    return [
        {'$match': {'username': username.lower()}},
        {
            '$lookup': {
                'from': 'subscriptions',
                'localField': '_id',
                'foreignField': 'channel',
                'as': '_subscribers'
            }
        },
        {
            '$lookup': {
                'from': 'subscriptions',
                'localField': '_id',
                'foreignField': 'subscriber',
                'as': '_subscribedTo'
            }
        },
        {
            '$addFields': {
                'subscribersCount': {'$size': '$_subscribers'},
                'channelsSubscribedToCount': {'$size': '$_subscribedTo'},
                'isSubscribed': viewer_flag(viewer_id, '$_subscribers.subscriber')
            }
        },
        project(
            'username', 'fullname', 'avatar', 'coverImage', 'subscribersCount',
            'channelsSubscribedToCount', 'isSubscribed', 'createdAt'
        )
    ]
