import pytest
from bson import ObjectId

from app.pipelines.pagination import PageRequest, build_page
from app.services.video_service import VideoService


def test_healthcheck_uses_success_envelope(client):
    response = client.get('/api/v1/healthcheck/')

    assert response.status_code == 200
    assert response.get_json() == {'statusCode': 200, 'data': 'OK', 'message': 'Status OK', 'success': True}


def test_unknown_route_uses_error_envelope(client):
    response = client.get('/api/v1/nothing-here')
    body = response.get_json()

    assert response.status_code == 404
    assert body['success'] is False
    assert body['data'] is None
    assert body['statusCode'] == 404


def test_protected_route_without_token_is_unauthorized(client):
    response = client.get('/api/v1/users/current-user')

    assert response.status_code == 401
    assert response.get_json()['success'] is False


def test_malformed_bearer_header_is_rejected(client):
    response = client.get('/api/v1/users/current-user', headers={'Authorization': 'Token abc'})
    assert response.status_code == 401


def test_guest_allowed_route_without_guest_flag_requires_token(client, make_user, make_video):
    video = make_video(make_user('owner'))
    assert client.get(f'/api/v1/videos/{video.id}').status_code == 401


def test_public_video_list_needs_no_token(client, make_user, make_video):
    make_video(make_user('owner'))

    response = client.get('/api/v1/videos/')
    docs = response.get_json()['data']['docs']

    assert response.status_code == 200
    assert len(docs) == 1
    assert docs[0]['isLiked'] is False


def test_public_video_list_still_checks_a_presented_token(client):
    response = client.get('/api/v1/videos/', headers={'Authorization': 'Bearer not-a-jwt'})
    assert response.status_code == 401


def test_next_videos_use_the_token_when_present(client, make_user, make_video, auth_headers):
    owner = make_user('owner')
    fan = make_user('fan')
    current = make_video(owner, 'current')
    other = make_video(owner, 'other')
    client.post(f'/api/v1/likes/toggle/v/{other.id}', headers=auth_headers(fan))

    as_guest = client.get(f'/api/v1/videos/next/{current.id}')
    as_fan = client.get(f'/api/v1/videos/next/{current.id}', headers=auth_headers(fan))

    assert as_guest.status_code == 200
    assert as_guest.get_json()['data'][0]['isLiked'] is False
    assert as_fan.get_json()['data'][0]['isLiked'] is True
    assert as_fan.get_json()['data'][0]['likesCount'] == 1


@pytest.mark.parametrize('sort_type, expected', [('asc', [1, 5, 9]), ('DESC', [9, 5, 1]), ('newest', [9, 5, 1])])
def test_sort_type_other_than_asc_sorts_descending(client, make_user, make_video, sort_type, expected):
    owner = make_user('owner')
    for views in (5, 1, 9):
        make_video(owner, f'views {views}', views=views)

    response = client.get(f'/api/v1/videos/?sortBy=views&sortType={sort_type}')

    assert response.status_code == 200
    assert [doc['views'] for doc in response.get_json()['data']['docs']] == expected


def test_guest_read_passes_no_viewer(client, monkeypatch):
    calls = []

    def fake_get_all_videos(self, viewer_id, page_request, **kwargs):
        calls.append((viewer_id, page_request, kwargs))
        return build_page([], 0, page_request)

    monkeypatch.setattr(VideoService, 'get_all_videos', fake_get_all_videos)

    response = client.get('/api/v1/videos/?guest=true&page=2&limit=5&sortBy=views&sortType=asc&query=cat')
    body = response.get_json()

    assert response.status_code == 200
    assert body['data']['docs'] == []
    assert body['data']['totalPages'] == 1
    viewer_id, page_request, kwargs = calls[0]
    assert viewer_id is None
    assert page_request == PageRequest(page=2, limit=5)
    assert kwargs['sort_by'] == 'views'
    assert kwargs['sort_type'] == 'asc'
    assert kwargs['query'] == 'cat'


def test_invalid_pagination_is_a_validation_error(client):
    response = client.get('/api/v1/videos/?guest=true&limit=0')
    body = response.get_json()

    assert response.status_code == 400
    assert body['success'] is False
    assert 'limit' in body['errors']['query']


def test_unknown_sort_field_is_rejected(client):
    response = client.get('/api/v1/videos/?guest=true&sortBy=password')
    assert response.status_code == 400


def test_invalid_object_id_is_bad_request(client, make_user, auth_headers):
    user = make_user()
    response = client.post('/api/v1/likes/toggle/v/not-an-id', headers=auth_headers(user))

    assert response.status_code == 400
    assert response.get_json()['success'] is False


def test_register_login_and_current_user_with_cookies(client, media_storage, image_file):
    register = client.post(
        '/api/v1/users/register',
        data={
            'fullname': 'Nora N',
            'email': 'nora@example.com',
            'username': 'Nora',
            'password': 'pw-nora',
            'avatar': image_file('avatar.png')
        },
        content_type='multipart/form-data'
    )
    assert register.status_code == 201
    assert register.get_json()['data']['username'] == 'nora'
    assert 'password' not in register.get_json()['data']

    login = client.post('/api/v1/users/login', json={'email': 'nora@example.com', 'password': 'pw-nora'})
    login_data = login.get_json()['data']

    assert login.status_code == 200
    assert login_data['accessToken']
    assert client.get_cookie('accessToken').value == login_data['accessToken']

    me = client.get('/api/v1/users/current-user')
    assert me.status_code == 200
    assert me.get_json()['data']['email'] == 'nora@example.com'

    logout = client.post('/api/v1/users/logout')
    assert logout.status_code == 200
    assert client.get_cookie('accessToken') is None


def test_register_duplicate_is_conflict(client, make_user, image_file):
    make_user('olga')

    response = client.post(
        '/api/v1/users/register',
        data={
            'fullname': 'Olga',
            'email': 'other@example.com',
            'username': 'olga',
            'password': 'pw',
            'avatar': image_file()
        },
        content_type='multipart/form-data'
    )

    assert response.status_code == 409


def test_toggle_like_route_returns_state(client, make_user, make_video, auth_headers):
    owner = make_user('pete')
    fan = make_user('quinn')
    video = make_video(owner)

    first = client.post(f'/api/v1/likes/toggle/v/{video.id}', headers=auth_headers(fan))
    second = client.post(f'/api/v1/likes/toggle/v/{video.id}', headers=auth_headers(fan))

    assert first.get_json()['data'] == {'isLiked': True, 'likesCount': 1}
    assert second.get_json()['data'] == {'isLiked': False, 'likesCount': 0}


def test_editing_someone_elses_tweet_is_forbidden(client, make_user, auth_headers):
    author = make_user('rita')
    stranger = make_user('sam')

    created = client.post('/api/v1/tweets/', json={'content': 'hello'}, headers=auth_headers(author))
    tweet_id = created.get_json()['data']['_id']

    response = client.patch(f'/api/v1/tweets/{tweet_id}', json={'content': 'pwned'}, headers=auth_headers(stranger))

    assert created.status_code == 201
    assert response.status_code == 403
    assert response.get_json()['success'] is False


def test_dashboard_stats_route(client, make_user, make_video, auth_headers):
    owner = make_user('tina')
    make_video(owner, views=4)

    response = client.get('/api/v1/dashboard/stats', headers=auth_headers(owner))

    assert response.status_code == 200
    assert response.get_json()['data'] == {
        'totalVideos': 1, 'totalViews': 4, 'totalSubscribers': 0, 'totalLikes': 0
    }


def test_token_of_deleted_user_is_rejected(client, mongo_db, make_user, auth_headers):
    user = make_user('uma')
    headers = auth_headers(user)
    mongo_db['users'].delete_one({'_id': user.id})

    assert client.get('/api/v1/users/current-user', headers=headers).status_code == 401


def test_subscribe_to_unknown_channel_is_not_found(client, make_user, auth_headers):
    response = client.post(f'/api/v1/subscriptions/c/{ObjectId()}', headers=auth_headers(make_user('vera')))
    assert response.status_code == 404
