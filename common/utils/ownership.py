from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError


def is_owner(caller_id, entity, owner_field: str = 'owner') -> bool:
    """caller가 entity의 소유자인지 판정한다. guest(None)는 항상 False."""
    if caller_id is None or entity is None:
        return False

    if isinstance(entity, dict):
        owner_id = entity.get(owner_field)
    else:
        owner_id = getattr(entity, owner_field, None)

    if owner_id is None:
        return False

    return str(owner_id) == str(caller_id)


def ensure_owner(caller_id, entity, error: APIError, owner_field: str = 'owner'):
    if not is_owner(caller_id, entity, owner_field):
        raise BusinessError(error)
