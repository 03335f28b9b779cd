from bson import ObjectId

from app.models.like import LikeRepository
from app.models.subscription import SubscriptionRepository
from app.services.dashboard_service import DashboardService


def test_channel_without_videos_reports_zeros(mongo_db, make_user):
    channel = make_user('newcomer')

    stats = DashboardService(mongo_db).get_channel_stats(channel.id)

    assert stats == {'totalVideos': 0, 'totalViews': 0, 'totalSubscribers': 0, 'totalLikes': 0}


def test_channel_stats_sum_videos_views_subscribers_and_likes(mongo_db, make_user, make_video, make_comment):
    channel = make_user('creator')
    fan_a = make_user('fan_a')
    fan_b = make_user('fan_b')
    first = make_video(channel, 'first', views=3)
    second = make_video(channel, 'second', views=5, is_published=False)
    make_video(fan_a, 'not mine', views=100)

    likes = LikeRepository(mongo_db)
    likes.toggle('video', first.id, fan_a.id)
    likes.toggle('video', first.id, fan_b.id)
    likes.toggle('video', second.id, fan_a.id)
    comment = make_comment(first, fan_a)
    likes.toggle('comment', comment.id, channel.id)

    subscriptions = SubscriptionRepository(mongo_db)
    subscriptions.toggle(fan_a.id, channel.id)
    subscriptions.toggle(fan_b.id, channel.id)
    subscriptions.toggle(channel.id, fan_a.id)

    stats = DashboardService(mongo_db).get_channel_stats(channel.id)

    assert stats == {'totalVideos': 2, 'totalViews': 8, 'totalSubscribers': 2, 'totalLikes': 3}


def test_stats_for_unknown_channel_are_zero(mongo_db):
    stats = DashboardService(mongo_db).get_channel_stats(ObjectId())
    assert stats['totalVideos'] == 0
    assert stats['totalLikes'] == 0
