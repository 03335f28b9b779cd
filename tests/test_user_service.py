from unittest.mock import MagicMock

import pytest

from app.models.user import UserRepository
from app.pipelines.pagination import PageRequest
from app.services.user_service import UserService
from common.decorator.auth_decorators import BLACKLIST_KEY_PREFIX
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils import decode_token


@pytest.fixture
def service(app, mongo_db, media_storage):
    return UserService(mongo_db, media_storage)


def _error_of(callable_, *args, **kwargs):
    with pytest.raises(BusinessError) as exc_info:
        callable_(*args, **kwargs)
    return exc_info.value.error_enum


def test_register_lowercases_username_and_hides_secrets(service, media_storage):
    user = service.register('Alice Doe', 'alice@example.com', 'AliceD', 'pw', object(), None)

    assert user['username'] == 'aliced'
    assert user['avatar'] == media_storage.uploaded[0].url
    assert user['coverImage'] == ''
    assert 'password' not in user
    assert 'refreshToken' not in user


def test_register_rejects_duplicate_username_or_email(service, make_user):
    make_user('bob', email='bob@example.com')

    assert _error_of(service.register, 'Bob', 'other@example.com', 'BOB', 'pw', object()) is APIError.USER_ALREADY_EXISTS
    assert _error_of(service.register, 'Bob', 'bob@example.com', 'bobby', 'pw', object()) is APIError.USER_ALREADY_EXISTS


def test_register_requires_avatar(service):
    assert _error_of(service.register, 'Carol', 'carol@example.com', 'carol', 'pw', None) is APIError.AVATAR_REQUIRED


def test_login_by_username_or_email_issues_tokens(service, make_user, mongo_db):
    user = make_user('dave', password='pw-123')

    by_username = service.login('pw-123', username='DAVE')
    by_email = service.login('pw-123', email='dave@example.com')

    assert by_username['user']['_id'] == user.id
    assert decode_token(by_email['accessToken'])['type'] == 'access'
    assert UserRepository(mongo_db).find_by_id(user.id).refresh_token == by_email['refreshToken']


def test_login_failures(service, make_user):
    make_user('erin', password='right')

    assert _error_of(service.login, 'right') is APIError.USERNAME_OR_EMAIL_REQUIRED
    assert _error_of(service.login, 'right', username='nobody') is APIError.USER_NOT_FOUND
    assert _error_of(service.login, 'wrong', username='erin') is APIError.AUTH_INVALID_PASSWORD


def test_refresh_rotates_tokens_and_rejects_stale_ones(service, make_user):
    make_user('frank', password='pw')
    first = service.login('pw', username='frank')
    second = service.login('pw', username='frank')

    assert _error_of(service.refresh_access_token, first['refreshToken']) is APIError.AUTH_REFRESH_TOKEN_REUSED

    rotated = service.refresh_access_token(second['refreshToken'])
    assert decode_token(rotated['refreshToken'])['type'] == 'refresh'


def test_refresh_rejects_access_tokens_and_garbage(service, make_user):
    make_user('gina', password='pw')
    tokens = service.login('pw', username='gina')

    assert _error_of(service.refresh_access_token, tokens['accessToken']) is APIError.AUTH_INVALID_REFRESH_TOKEN
    assert _error_of(service.refresh_access_token, 'not-a-jwt') is APIError.AUTH_INVALID_REFRESH_TOKEN
    assert _error_of(service.refresh_access_token, None) is APIError.AUTH_UNAUTHORIZED


def test_logout_clears_refresh_token_and_blacklists_access_token(app, mongo_db, media_storage, make_user):
    redis_client = MagicMock()
    service = UserService(mongo_db, media_storage, redis_client)
    user = make_user('hank', password='pw')
    tokens = service.login('pw', username='hank')

    service.logout(user.id, tokens['accessToken'])

    assert UserRepository(mongo_db).find_by_id(user.id).refresh_token is None
    key, ttl, value = redis_client.setex.call_args.args
    assert key == f"{BLACKLIST_KEY_PREFIX}{tokens['accessToken']}"
    assert 0 < ttl <= 24 * 60 * 60


def test_change_password_checks_old_password(service, make_user, mongo_db):
    user = make_user('ivy', password='old')

    assert _error_of(service.change_password, user.id, 'wrong', 'new') is APIError.AUTH_WRONG_OLD_PASSWORD

    service.change_password(user.id, 'old', 'new')
    assert UserRepository(mongo_db).find_by_id(user.id).check_password('new')


def test_update_account_rejects_email_of_another_user(service, make_user):
    make_user('jack', email='jack@example.com')
    kate = make_user('kate')

    assert _error_of(service.update_account, kate.id, email='jack@example.com') is APIError.USER_ALREADY_EXISTS
    assert _error_of(service.update_account, kate.id) is APIError.MISSING_FIELD
    assert service.update_account(kate.id, fullname='Kate K')['fullname'] == 'Kate K'


def test_avatar_replacement_removes_previous_image(service, media_storage, make_user):
    user = make_user('leo')

    updated = service.update_avatar(user.id, object())

    assert updated['avatar'] == media_storage.uploaded[-1].url
    assert media_storage.deleted == [('leo', 'image')]


def test_watch_history_is_most_recent_first(service, mongo_db, make_user, make_video):
    viewer = make_user('mia')
    owner = make_user('owner')
    older = make_video(owner, 'older')
    newer = make_video(owner, 'newer')
    users = UserRepository(mongo_db)
    users.add_to_watch_history(viewer.id, older.id)
    users.add_to_watch_history(viewer.id, newer.id)

    page = service.get_watch_history(viewer.id, PageRequest(page=1, limit=1))

    assert [doc['_id'] for doc in page['docs']] == [newer.id]
    assert page['docs'][0]['owner']['username'] == 'owner'
    assert page['totalDocs'] == 2
    assert page['hasNextPage'] is True


def test_watch_history_counts_only_videos_the_viewer_can_still_see(service, mongo_db, make_user, make_video):
    viewer = make_user('nina')
    owner = make_user('owner')
    kept = make_video(owner, 'kept')
    hidden = make_video(owner, 'hidden', is_published=False)
    removed = make_video(owner, 'removed')
    own_draft = make_video(viewer, 'my draft', is_published=False)
    users = UserRepository(mongo_db)
    for video in (kept, hidden, removed, own_draft):
        users.add_to_watch_history(viewer.id, video.id)
    mongo_db['videos'].delete_one({'_id': removed.id})

    first = service.get_watch_history(viewer.id, PageRequest(page=1, limit=1))
    second = service.get_watch_history(viewer.id, PageRequest(page=2, limit=1))

    assert first['totalDocs'] == 2
    assert first['totalPages'] == 2
    assert [doc['_id'] for doc in first['docs']] == [own_draft.id]
    assert [doc['_id'] for doc in second['docs']] == [kept.id]
    assert second['hasNextPage'] is False
