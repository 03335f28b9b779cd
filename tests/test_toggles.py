import threading

import pytest
from bson import ObjectId

from app.models.like import LikeRepository
from app.models.subscription import SubscriptionRepository
from app.services.like_service import LikeService
from app.services.subscription_service import SubscriptionService
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError


def test_like_toggle_twice_restores_original_state(mongo_db):
    repo = LikeRepository(mongo_db)
    video_id, user_id = ObjectId(), ObjectId()

    first = repo.toggle('video', video_id, user_id)
    assert first.active is True
    assert repo.count_for('video', video_id) == 1

    second = repo.toggle('video', video_id, user_id)
    assert second.active is False
    assert second.document_id == first.document_id
    assert repo.count_for('video', video_id) == 0


def test_likes_on_different_targets_are_independent(mongo_db):
    repo = LikeRepository(mongo_db)
    user_id, shared_id = ObjectId(), ObjectId()

    repo.toggle('video', shared_id, user_id)
    repo.toggle('comment', shared_id, user_id)

    assert repo.count_for('video', shared_id) == 1
    assert repo.count_for('comment', shared_id) == 1


def test_unknown_like_target_is_rejected(mongo_db):
    with pytest.raises(ValueError):
        LikeRepository(mongo_db).toggle('playlist', ObjectId(), ObjectId())


def test_subscription_toggle_twice_restores_original_state(mongo_db):
    repo = SubscriptionRepository(mongo_db)
    subscriber, channel = ObjectId(), ObjectId()

    assert repo.toggle(subscriber, channel).active is True
    assert repo.count_subscribers(channel) == 1
    assert repo.toggle(subscriber, channel).active is False
    assert repo.count_subscribers(channel) == 0


def test_concurrent_first_likes_can_both_insert(mongo_db, monkeypatch):
    """find-then-act: 두 요청이 모두 '없음'을 본 뒤 삽입하면 중복 like가 남는다"""
    repo = LikeRepository(mongo_db)
    video_id, user_id = ObjectId(), ObjectId()
    barrier = threading.Barrier(2, timeout=5)
    original_find_like = repo.find_like

    def racing_find_like(*args):
        found = original_find_like(*args)
        barrier.wait()
        return found

    monkeypatch.setattr(repo, 'find_like', racing_find_like)

    results = []
    threads = [
        threading.Thread(target=lambda: results.append(repo.toggle('video', video_id, user_id)))
        for _ in range(2)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert [result.active for result in results] == [True, True]
    assert repo.count_for('video', video_id) == 2


def test_like_service_reports_state_and_count(mongo_db, make_user, make_video):
    owner = make_user('owner')
    fan = make_user('fan')
    video = make_video(owner)
    service = LikeService(mongo_db)

    assert service.toggle_video_like(video.id, fan.id) == {'isLiked': True, 'likesCount': 1}
    assert service.toggle_video_like(video.id, owner.id) == {'isLiked': True, 'likesCount': 2}
    assert service.toggle_video_like(video.id, fan.id) == {'isLiked': False, 'likesCount': 1}


def test_like_service_requires_existing_target(mongo_db):
    with pytest.raises(BusinessError) as exc_info:
        LikeService(mongo_db).toggle_tweet_like(ObjectId(), ObjectId())

    assert exc_info.value.error_enum is APIError.TWEET_NOT_FOUND


def test_cannot_subscribe_to_yourself(mongo_db, make_user):
    user = make_user('loner')

    with pytest.raises(BusinessError) as exc_info:
        SubscriptionService(mongo_db).toggle_subscription(user.id, user.id)

    assert exc_info.value.error_enum is APIError.SUBSCRIBE_SELF


def test_subscription_service_requires_existing_channel(mongo_db, make_user):
    user = make_user('fan')

    with pytest.raises(BusinessError) as exc_info:
        SubscriptionService(mongo_db).toggle_subscription(ObjectId(), user.id)

    assert exc_info.value.error_enum is APIError.CHANNEL_NOT_FOUND


def test_subscription_service_reports_state_and_count(mongo_db, make_user):
    channel = make_user('channel')
    fan = make_user('fan')
    service = SubscriptionService(mongo_db)

    assert service.toggle_subscription(channel.id, fan.id) == {'isSubscribed': True, 'subscribersCount': 1}
    assert service.toggle_subscription(channel.id, fan.id) == {'isSubscribed': False, 'subscribersCount': 0}
