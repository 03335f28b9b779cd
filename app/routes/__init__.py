"""
Routes package
Flask Blueprint들을 관리하는 패키지
"""

from app.routes.healthcheck import healthcheck_blueprint
from app.routes.user import user_blueprint
from app.routes.video import video_blueprint
from app.routes.comment import comment_blueprint
from app.routes.tweet import tweet_blueprint
from app.routes.like import like_blueprint
from app.routes.subscription import subscription_blueprint
from app.routes.playlist import playlist_blueprint
from app.routes.dashboard import dashboard_blueprint

BLUEPRINTS = (
    healthcheck_blueprint,
    user_blueprint,
    video_blueprint,
    comment_blueprint,
    tweet_blueprint,
    like_blueprint,
    subscription_blueprint,
    playlist_blueprint,
    dashboard_blueprint
)

__all__ = [
    'BLUEPRINTS',
    'healthcheck_blueprint',
    'user_blueprint',
    'video_blueprint',
    'comment_blueprint',
    'tweet_blueprint',
    'like_blueprint',
    'subscription_blueprint',
    'playlist_blueprint',
    'dashboard_blueprint'
]
