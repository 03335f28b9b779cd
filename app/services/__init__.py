"""
Services package
비즈니스 로직을 처리하는 서비스 레이어

- user_service: 회원가입/로그인/토큰 재발급, 프로필, 시청 기록
- video_service: 영상 업로드/조회/수정/삭제
- comment_service, tweet_service: 댓글, 채널 게시글
- like_service, subscription_service: 좋아요/구독 토글과 목록
- playlist_service: 재생목록
- dashboard_service: 채널 통계
"""

from app.services.user_service import UserService
from app.services.video_service import VideoService
from app.services.comment_service import CommentService
from app.services.tweet_service import TweetService
from app.services.like_service import LikeService
from app.services.subscription_service import SubscriptionService
from app.services.playlist_service import PlaylistService
from app.services.dashboard_service import DashboardService

__all__ = [
    'UserService',
    'VideoService',
    'CommentService',
    'TweetService',
    'LikeService',
    'SubscriptionService',
    'PlaylistService',
    'DashboardService'
]
