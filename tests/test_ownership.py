import pytest
from bson import ObjectId

from app.models.comment import Comment
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils import ensure_owner, is_owner


def test_owner_matches_across_id_representations():
    owner_id = ObjectId()
    assert is_owner(owner_id, {'owner': owner_id})
    assert is_owner(str(owner_id), {'owner': owner_id})
    assert is_owner(owner_id, {'owner': str(owner_id)})


def test_other_user_is_not_owner():
    assert not is_owner(ObjectId(), {'owner': ObjectId()})


def test_guest_is_never_owner():
    assert not is_owner(None, {'owner': ObjectId()})


def test_missing_entity_or_owner_field_is_not_owned():
    assert not is_owner(ObjectId(), None)
    assert not is_owner(ObjectId(), {'title': 'orphan'})


def test_dataclass_entities_are_supported():
    owner_id = ObjectId()
    comment = Comment(content='hi', video=ObjectId(), owner=owner_id)
    assert is_owner(owner_id, comment)


def test_custom_owner_field():
    user_id = ObjectId()
    assert is_owner(user_id, {'_id': user_id}, owner_field='_id')


def test_ensure_owner_raises_the_given_error():
    with pytest.raises(BusinessError) as exc_info:
        ensure_owner(ObjectId(), {'owner': ObjectId()}, APIError.TWEET_FORBIDDEN)

    assert exc_info.value.error_enum is APIError.TWEET_FORBIDDEN
    assert exc_info.value.status == 403
