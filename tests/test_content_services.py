import pytest
from bson import ObjectId

from app.models.like import LikeRepository
from app.services.comment_service import CommentService
from app.services.playlist_service import PlaylistService
from app.services.tweet_service import TweetService
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError


def _error_of(callable_, *args, **kwargs):
    with pytest.raises(BusinessError) as exc_info:
        callable_(*args, **kwargs)
    return exc_info.value.error_enum


class TestComments:

    def test_add_comment_requires_existing_video(self, mongo_db, make_user):
        service = CommentService(mongo_db)
        assert _error_of(service.add_comment, ObjectId(), make_user().id, 'hello') is APIError.VIDEO_NOT_FOUND

    def test_owner_edits_and_others_are_forbidden(self, mongo_db, make_user, make_video):
        owner = make_user('owner')
        stranger = make_user('stranger')
        video = make_video(owner)
        service = CommentService(mongo_db)

        comment = service.add_comment(video.id, owner.id, '  first!  ')
        assert comment['content'] == 'first!'

        assert _error_of(service.update_comment, comment['_id'], stranger.id, 'mine now') is APIError.COMMENT_FORBIDDEN
        assert _error_of(service.delete_comment, comment['_id'], None) is APIError.COMMENT_FORBIDDEN
        assert service.update_comment(comment['_id'], owner.id, 'edited')['content'] == 'edited'

    def test_delete_comment_removes_its_likes(self, mongo_db, make_user, make_video, make_comment):
        owner = make_user('owner')
        comment = make_comment(make_video(owner), owner)
        likes = LikeRepository(mongo_db)
        likes.toggle('comment', comment.id, make_user('fan').id)

        CommentService(mongo_db).delete_comment(comment.id, owner.id)

        assert mongo_db['comments'].find_one({'_id': comment.id}) is None
        assert likes.count_for('comment', comment.id) == 0


class TestTweets:

    def test_blank_tweet_is_rejected(self, mongo_db, make_user):
        assert _error_of(TweetService(mongo_db).create_tweet, make_user().id, '   ') is APIError.MISSING_FIELD

    def test_only_owner_can_modify(self, mongo_db, make_user):
        owner = make_user('owner')
        service = TweetService(mongo_db)
        tweet = service.create_tweet(owner.id, 'hello world')

        assert _error_of(service.update_tweet, tweet['_id'], make_user('other').id, 'x') is APIError.TWEET_FORBIDDEN
        assert service.update_tweet(tweet['_id'], owner.id, 'bye')['content'] == 'bye'

        service.delete_tweet(tweet['_id'], owner.id)
        assert _error_of(service.delete_tweet, tweet['_id'], owner.id) is APIError.TWEET_NOT_FOUND


class TestPlaylists:

    def test_create_requires_name(self, mongo_db, make_user):
        service = PlaylistService(mongo_db)
        assert _error_of(service.create_playlist, make_user().id, ' ') is APIError.PLAYLIST_FIELDS_REQUIRED

    def test_add_and_remove_video(self, mongo_db, make_user, make_video):
        owner = make_user('owner')
        video = make_video(owner)
        service = PlaylistService(mongo_db)
        playlist = service.create_playlist(owner.id, 'favorites', 'best of')

        added = service.add_video_to_playlist(playlist['_id'], video.id, owner.id)
        assert added['videos'] == [video.id]
        assert _error_of(
            service.add_video_to_playlist, playlist['_id'], video.id, owner.id
        ) is APIError.PLAYLIST_VIDEO_EXISTS

        removed = service.remove_video_from_playlist(playlist['_id'], video.id, owner.id)
        assert removed['videos'] == []
        assert _error_of(
            service.remove_video_from_playlist, playlist['_id'], video.id, owner.id
        ) is APIError.PLAYLIST_VIDEO_MISSING

    def test_add_unknown_video_is_not_found(self, mongo_db, make_user):
        owner = make_user('owner')
        service = PlaylistService(mongo_db)
        playlist = service.create_playlist(owner.id, 'mix')

        assert _error_of(
            service.add_video_to_playlist, playlist['_id'], ObjectId(), owner.id
        ) is APIError.VIDEO_NOT_FOUND

    def test_stranger_cannot_change_playlist(self, mongo_db, make_user, make_video):
        owner = make_user('owner')
        stranger = make_user('stranger')
        service = PlaylistService(mongo_db)
        playlist = service.create_playlist(owner.id, 'mine')

        assert _error_of(
            service.add_video_to_playlist, playlist['_id'], make_video(stranger).id, stranger.id
        ) is APIError.PLAYLIST_FORBIDDEN
        assert _error_of(service.update_playlist, playlist['_id'], stranger.id, 'ours') is APIError.PLAYLIST_FORBIDDEN
        assert _error_of(service.delete_playlist, playlist['_id'], stranger.id) is APIError.PLAYLIST_FORBIDDEN

    def test_update_requires_a_field(self, mongo_db, make_user):
        owner = make_user('owner')
        service = PlaylistService(mongo_db)
        playlist = service.create_playlist(owner.id, 'mix')

        assert _error_of(service.update_playlist, playlist['_id'], owner.id) is APIError.PLAYLIST_FIELDS_REQUIRED
        assert service.update_playlist(playlist['_id'], owner.id, description='chill')['description'] == 'chill'
