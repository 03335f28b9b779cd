from typing import Dict, Optional

from bson import ObjectId

from app.models.like import LikeRepository
from app.models.tweet import Tweet, TweetRepository
from app.models.user import UserRepository
from app.pipelines.pagination import PageRequest
from app.pipelines.tweet import user_tweets_plan
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils import ensure_owner


class TweetService:

    def __init__(self, db):
        self.tweets = TweetRepository(db)
        self.users = UserRepository(db)
        self.likes = LikeRepository(db)

    def _get_owned_tweet(self, tweet_id: ObjectId, caller_id: ObjectId) -> Tweet:
        tweet = self.tweets.find_by_id(tweet_id)
        if not tweet:
            raise BusinessError(APIError.TWEET_NOT_FOUND)
        ensure_owner(caller_id, tweet, APIError.TWEET_FORBIDDEN)
        return tweet

    def create_tweet(self, owner_id: ObjectId, content: str) -> Dict:
        if not content or not content.strip():
            raise BusinessError(APIError.MISSING_FIELD, "content is required")
        return self.tweets.insert(Tweet(content=content.strip(), owner=owner_id)).to_dict()

    def get_user_tweets(self, user_id: ObjectId, viewer_id: Optional[ObjectId], page_request: PageRequest,
                        sort_by: Optional[str] = None, sort_type: Optional[str] = None) -> Dict:
        if not self.users.exists(user_id):
            raise BusinessError(APIError.USER_NOT_FOUND)
        return self.tweets.find_page(user_tweets_plan(user_id, viewer_id, sort_by, sort_type), page_request)

    def update_tweet(self, tweet_id: ObjectId, caller_id: ObjectId, content: str) -> Dict:
        if not content or not content.strip():
            raise BusinessError(APIError.MISSING_FIELD, "content is required")

        self._get_owned_tweet(tweet_id, caller_id)
        return self.tweets.update_content(tweet_id, content.strip())

    def delete_tweet(self, tweet_id: ObjectId, caller_id: ObjectId):
        self._get_owned_tweet(tweet_id, caller_id)
        self.likes.delete_for('tweet', tweet_id)
        self.tweets.delete_by_id(tweet_id)
