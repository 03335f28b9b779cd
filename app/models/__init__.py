"""
Models package
MongoDB 도큐먼트 모델(dataclass)과 컬렉션별 Repository

- User: 사용자/채널
- Video: 영상
- Comment: 영상 댓글
- Tweet: 채널 게시글
- Like: video / comment / tweet 좋아요
- Subscription: 채널 구독
- Playlist: 재생목록
"""

from app.models.base import BaseRepository, ToggleResult
from app.models.user import User, UserRepository
from app.models.video import Video, VideoRepository
from app.models.comment import Comment, CommentRepository
from app.models.tweet import Tweet, TweetRepository
from app.models.like import Like, LikeRepository, LIKE_TARGETS
from app.models.subscription import Subscription, SubscriptionRepository
from app.models.playlist import Playlist, PlaylistRepository

REPOSITORIES = (
    UserRepository,
    VideoRepository,
    CommentRepository,
    TweetRepository,
    LikeRepository,
    SubscriptionRepository,
    PlaylistRepository
)


def ensure_indexes(db):
    """앱 시작 시 한 번 호출. 이미 존재하는 인덱스는 그대로 둔다"""
    for repository_class in REPOSITORIES:
        repository_class(db).ensure_indexes()


__all__ = [
    'BaseRepository',
    'ToggleResult',
    'User',
    'UserRepository',
    'Video',
    'VideoRepository',
    'Comment',
    'CommentRepository',
    'Tweet',
    'TweetRepository',
    'Like',
    'LikeRepository',
    'LIKE_TARGETS',
    'Subscription',
    'SubscriptionRepository',
    'Playlist',
    'PlaylistRepository',
    'ensure_indexes'
]
