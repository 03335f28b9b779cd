import io

import mongomock
import pytest
from bson import ObjectId

from app import create_app
from app.models.comment import Comment, CommentRepository
from app.models.user import User, UserRepository
from app.models.video import Video, VideoRepository
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils import create_access_token
from common.utils.media_storage import UploadedMedia, extract_public_id


class FakeMediaStorage:
    """Cloudinary 대신 쓰는 메모리 저장소. 업로드/삭제 호출을 기록한다"""

    def __init__(self):
        self.uploaded = []
        self.deleted = []
        self.fail_deletes = False

    def upload(self, file_storage):
        if file_storage is None:
            raise BusinessError(APIError.MISSING_FIELD, "File is required")

        public_id = f"vidtube/{ObjectId()}"
        media = UploadedMedia(
            url=f"https://res.cloudinary.com/demo/image/upload/v1700000000/{public_id}.png",
            public_id=public_id,
            duration=42.5
        )
        self.uploaded.append(media)
        return media

    def delete(self, url, resource_type='image'):
        if self.fail_deletes:
            raise BusinessError(APIError.MEDIA_DELETE_FAILED)
        self.deleted.append((extract_public_id(url), resource_type))

    def delete_quietly(self, url, resource_type='image'):
        if not url:
            return False
        try:
            self.delete(url, resource_type)
            return True
        except BusinessError:
            return False


@pytest.fixture
def mongo_db():
    return mongomock.MongoClient()['vidtube_test']


@pytest.fixture
def media_storage():
    return FakeMediaStorage()


@pytest.fixture
def app(mongo_db, media_storage):
    app = create_app('testing', mongo_db=mongo_db, media_storage=media_storage)
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(mongo_db):
    repo = UserRepository(mongo_db)

    def _make_user(username='alice', password='secret-pw', **kwargs):
        user = User(
            username=username,
            email=kwargs.pop('email', f'{username}@example.com'),
            fullname=kwargs.pop('fullname', username.title()),
            avatar=kwargs.pop('avatar', f'https://res.cloudinary.com/demo/image/upload/v1/{username}.png'),
            **kwargs
        )
        user.set_password(password)
        return repo.insert(user)

    return _make_user


@pytest.fixture
def make_video(mongo_db):
    repo = VideoRepository(mongo_db)

    def _make_video(owner, title='First video', views=0, is_published=True):
        return repo.insert(Video(
            title=title,
            description=f'{title} description',
            video_file='https://res.cloudinary.com/demo/video/upload/v1/vidtube/clip.mp4',
            thumbnail='https://res.cloudinary.com/demo/image/upload/v1/vidtube/thumb.png',
            owner=owner.id,
            duration=12.0,
            views=views,
            is_published=is_published
        ))

    return _make_video


@pytest.fixture
def make_comment(mongo_db):
    repo = CommentRepository(mongo_db)

    def _make_comment(video, owner, content='nice one'):
        return repo.insert(Comment(content=content, video=video.id, owner=owner.id))

    return _make_comment


@pytest.fixture
def auth_headers(app):
    def _auth_headers(user):
        return {'Authorization': f'Bearer {create_access_token(user)}'}

    return _auth_headers


@pytest.fixture
def image_file():
    def _image_file(name='image.png'):
        return (io.BytesIO(b'\x89PNG fake image bytes'), name)

    return _image_file
