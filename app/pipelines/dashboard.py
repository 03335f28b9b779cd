from typing import Dict, List

from bson import ObjectId


def channel_video_totals_pipeline(channel_id: ObjectId) -> List[Dict]:
    """영상이 하나도 없으면 결과 행이 없다. 호출 측에서 0으로 채워야 함"""
    return [
        {'$match': {'owner': channel_id}},
        {
            '$group': {
                '_id': None,
                'totalVideos': {'$sum': 1},
                'totalViews': {'$sum': '$views'}
            }
        }
    ]
