from flask import after_this_request, current_app, g, request
from flask_smorest import Blueprint

from app.schemas.common_schema import MessageResponseSchema, PageQuerySchema
from app.schemas.user import (
    AvatarFilesSchema, ChangePasswordRequestSchema, ChannelProfileResponseSchema, CoverImageFilesSchema,
    LoginRequestSchema, LoginResponseSchema, RefreshTokenRequestSchema, RegisterFilesSchema,
    RegisterFormSchema, TokenResponseSchema, UpdateAccountRequestSchema, UserResponseSchema,
    WatchHistoryResponseSchema
)
from app.services.user_service import UserService
from common.decorator.auth_decorators import guest_allowed, login_required, public_route
from common.extensions import get_media_storage, get_mongo_db, get_redis_client
from common.utils import api_response

ACCESS_TOKEN_COOKIE = 'accessToken'
REFRESH_TOKEN_COOKIE = 'refreshToken'

user_blueprint = Blueprint(
    'users',
    __name__,
    url_prefix='/api/v1/users',
    description='회원/인증 및 채널 프로필 API'
)


def _user_service():
    return UserService(get_mongo_db(), get_media_storage(), get_redis_client())


def _cookie_options():
    secure = current_app.config.get('COOKIE_SECURE', True)
    return {
        'httponly': True,
        'secure': secure,
        'samesite': 'None' if secure else 'Lax'
    }


def _set_token_cookies(tokens):
    @after_this_request
    def set_cookies(response):
        options = _cookie_options()
        response.set_cookie(ACCESS_TOKEN_COOKIE, tokens['accessToken'], **options)
        response.set_cookie(REFRESH_TOKEN_COOKIE, tokens['refreshToken'], **options)
        return response


def _clear_token_cookies():
    @after_this_request
    def clear_cookies(response):
        options = _cookie_options()
        response.delete_cookie(ACCESS_TOKEN_COOKIE, **options)
        response.delete_cookie(REFRESH_TOKEN_COOKIE, **options)
        return response


@user_blueprint.route('/register', methods=['POST'])
@public_route
@user_blueprint.arguments(RegisterFormSchema, location='form')
@user_blueprint.arguments(RegisterFilesSchema, location='files')
@user_blueprint.response(201, UserResponseSchema)
def register(form, files):
    user = _user_service().register(
        fullname=form['fullname'],
        email=form['email'],
        username=form['username'],
        password=form['password'],
        avatar_file=files.get('avatar'),
        cover_image_file=files.get('coverImage')
    )
    return api_response(user, "User registered successfully", 201)


@user_blueprint.route('/login', methods=['POST'])
@public_route
@user_blueprint.arguments(LoginRequestSchema)
@user_blueprint.response(200, LoginResponseSchema)
def login(data):
    result = _user_service().login(
        password=data['password'],
        username=data.get('username'),
        email=data.get('email')
    )
    _set_token_cookies(result)
    return api_response(result, "User logged in successfully")


@user_blueprint.route('/logout', methods=['POST'])
@login_required
@user_blueprint.response(200, MessageResponseSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def logout():
    _user_service().logout(g.user_id, g.access_token)
    _clear_token_cookies()
    return api_response({}, "User logged out")


@user_blueprint.route('/refresh-token', methods=['POST'])
@public_route
@user_blueprint.arguments(RefreshTokenRequestSchema)
@user_blueprint.response(200, TokenResponseSchema)
def refresh_access_token(data):
    incoming = request.cookies.get(REFRESH_TOKEN_COOKIE) or data.get('refreshToken')
    tokens = _user_service().refresh_access_token(incoming)
    _set_token_cookies(tokens)
    return api_response(tokens, "Access token refreshed")


@user_blueprint.route('/change-password', methods=['POST'])
@login_required
@user_blueprint.arguments(ChangePasswordRequestSchema)
@user_blueprint.response(200, MessageResponseSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def change_password(data):
    _user_service().change_password(g.user_id, data['oldPassword'], data['newPassword'])
    return api_response({}, "Password changed successfully")


@user_blueprint.route('/current-user', methods=['GET'])
@login_required
@user_blueprint.response(200, UserResponseSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def get_current_user():
    return api_response(_user_service().get_current_user(g.user_id), "Current user fetched successfully")


@user_blueprint.route('/update-account', methods=['PATCH'])
@login_required
@user_blueprint.arguments(UpdateAccountRequestSchema)
@user_blueprint.response(200, UserResponseSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def update_account_details(data):
    user = _user_service().update_account(g.user_id, data.get('fullname'), data.get('email'))
    return api_response(user, "Account details updated successfully")


@user_blueprint.route('/avatar', methods=['PATCH'])
@login_required
@user_blueprint.arguments(AvatarFilesSchema, location='files')
@user_blueprint.response(200, UserResponseSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def update_user_avatar(files):
    user = _user_service().update_avatar(g.user_id, files.get('avatar'))
    return api_response(user, "Avatar image updated successfully")


@user_blueprint.route('/cover-image', methods=['PATCH'])
@login_required
@user_blueprint.arguments(CoverImageFilesSchema, location='files')
@user_blueprint.response(200, UserResponseSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def update_user_cover_image(files):
    user = _user_service().update_cover_image(g.user_id, files.get('coverImage'))
    return api_response(user, "Cover image updated successfully")


@user_blueprint.route('/c/<username>', methods=['GET'])
@guest_allowed
@user_blueprint.response(200, ChannelProfileResponseSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def get_user_channel_profile(username):
    channel = _user_service().get_channel_profile(username, g.user_id)
    return api_response(channel, "User channel fetched successfully")


@user_blueprint.route('/history', methods=['GET'])
@login_required
@user_blueprint.arguments(PageQuerySchema, location='query')
@user_blueprint.response(200, WatchHistoryResponseSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def get_watch_history(args):
    history = _user_service().get_watch_history(g.user_id, args['page_request'])
    return api_response(history, "Watch history fetched successfully")
