from functools import wraps
from flask import request, g

from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.extensions import get_mongo_db, get_redis_client
from common.utils import decode_token

BLACKLIST_KEY_PREFIX = 'vidtube:blacklist:'


def get_request_token():
    token = request.cookies.get('accessToken')
    if token:
        return token

    auth_header = request.headers.get('Authorization')
    if not auth_header:
        return None

    if not auth_header.startswith("Bearer "):
        raise BusinessError(APIError.AUTH_INVALID_TOKEN)

    return auth_header.split(" ", 1)[1].strip() or None


def is_guest_request():
    return request.args.get('guest', '').lower() == 'true'


def _set_guest():
    g.user_id = None
    g.is_guest = True
    g.access_token = None


def _authenticate(token):
    from app.models.user import UserRepository

    redis_client = get_redis_client()
    if redis_client is not None and redis_client.exists(f"{BLACKLIST_KEY_PREFIX}{token}"):
        raise BusinessError(APIError.AUTH_INVALID_TOKEN)

    payload = decode_token(token)

    if payload.get('type') != 'access':
        raise BusinessError(APIError.AUTH_INVALID_TOKEN)

    user = UserRepository(get_mongo_db()).find_by_id(payload.get('sub'))
    if not user:
        raise BusinessError(APIError.AUTH_INVALID_TOKEN)

    g.user_id = user.id
    g.is_guest = False
    g.access_token = token


def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = get_request_token()
        if not token:
            raise BusinessError(APIError.AUTH_UNAUTHORIZED)

        _authenticate(token)
        return f(*args, **kwargs)
    return decorated_function


def guest_allowed(f):
    """?guest=true 이면 비로그인 조회, 아니면 login_required와 동일"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if is_guest_request():
            _set_guest()
            return f(*args, **kwargs)

        token = get_request_token()
        if not token:
            raise BusinessError(APIError.AUTH_UNAUTHORIZED)

        _authenticate(token)
        return f(*args, **kwargs)
    return decorated_function


def login_optional(f):
    """토큰이 없으면 guest로 통과, 토큰이 있으면 login_required와 같이 검증"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = None if is_guest_request() else get_request_token()

        if not token:
            _set_guest()
            return f(*args, **kwargs)

        _authenticate(token)
        return f(*args, **kwargs)
    return decorated_function


def public_route(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        return f(*args, **kwargs)
    return decorated_function
