from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId

from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError


def to_object_id(value, error: APIError = APIError.INVALID_ID, message: Optional[str] = None) -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        raise BusinessError(error, message)
