"""
VidTube Application
Flask 기반 동영상 공유 플랫폼 백엔드
"""

import logging
from urllib.parse import quote_plus

import redis
import sentry_sdk
from flask import Flask
from flask_cors import CORS
from pymongo import MongoClient
from sentry_sdk.integrations.flask import FlaskIntegration
from sentry_sdk.integrations.pymongo import PyMongoIntegration
from sentry_sdk.integrations.redis import RedisIntegration

from common.extensions import api, init_dependencies
from common.utils.logging_utils import setup_logger
from common.utils.media_storage import CloudinaryMediaStorage


def _build_mongo_db(app, logger):
    if app.config.get('MONGO_URI'):
        mongo_uri = app.config['MONGO_URI']
        logger.info("MongoDB 연결 시도: MONGO_URI 사용")
    else:
        mongo_host = app.config.get('MONGO_HOST', 'localhost')
        mongo_port = app.config.get('MONGO_PORT', 27017)
        mongo_username = app.config.get('MONGO_USERNAME')
        mongo_password = app.config.get('MONGO_PASSWORD')

        if mongo_username and mongo_password:
            mongo_uri = f"mongodb://{quote_plus(mongo_username)}:{quote_plus(mongo_password)}@{mongo_host}:{mongo_port}/"
        else:
            mongo_uri = f"mongodb://{mongo_host}:{mongo_port}/"
        logger.info(f"MongoDB 연결 시도: {mongo_host}:{mongo_port}")

    try:
        mongo_connection = MongoClient(
            mongo_uri,
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=5000
        )
        mongo_connection.admin.command('ping')
        logger.info("MongoDB 연결 성공")
    except Exception as e:
        logger.error(f"MongoDB 연결 실패: {e}")
        raise

    return mongo_connection[app.config['MONGO_DB_NAME']]


def _build_redis_client(app, logger):
    """Redis가 설정되지 않았거나 연결에 실패하면 None. 토큰 블랙리스트만 비활성화된다"""
    if not app.config.get('REDIS_URL') and not app.config.get('REDIS_HOST'):
        logger.info("Redis 미설정, 토큰 블랙리스트 비활성화")
        return None

    try:
        if app.config.get('REDIS_URL'):
            logger.info("Redis 연결 시도: REDIS_URL 사용")
            client = redis.from_url(
                app.config['REDIS_URL'],
                decode_responses=True,
                socket_connect_timeout=5
            )
        else:
            redis_password = app.config.get('REDIS_PASSWORD') or None
            logger.info(f"Redis 연결 시도: {app.config['REDIS_HOST']}:{app.config.get('REDIS_PORT', 6379)}")
            client = redis.Redis(
                host=app.config['REDIS_HOST'],
                port=app.config.get('REDIS_PORT', 6379),
                db=app.config.get('REDIS_DB', 0),
                password=redis_password,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5
            )

        client.ping()
        logger.info("Redis 연결 성공")
        return client

    except redis.AuthenticationError as e:
        logger.warning(f"Redis 인증 실패: {e}")
        logger.warning("Redis 설정에서 REDIS_PASSWORD를 확인하세요")
    except redis.ConnectionError as e:
        logger.warning(f"Redis 연결 실패: {e}")
        logger.warning("토큰 블랙리스트 기능이 비활성화됩니다")
    return None


def _build_media_storage(app, logger):
    required = ['CLOUDINARY_CLOUD_NAME', 'CLOUDINARY_API_KEY', 'CLOUDINARY_API_SECRET']
    missing = [k for k in required if not app.config.get(k)]
    if missing:
        raise RuntimeError(f"Cloudinary 환경변수 누락: {missing}")

    logger.info(f"Cloudinary 설정 완료: {app.config['CLOUDINARY_CLOUD_NAME']}")
    return CloudinaryMediaStorage(
        cloud_name=app.config['CLOUDINARY_CLOUD_NAME'],
        api_key=app.config['CLOUDINARY_API_KEY'],
        api_secret=app.config['CLOUDINARY_API_SECRET']
    )


def create_app(config_name='default', mongo_db=None, media_storage=None, redis_client=None):
    """
    Application Factory Pattern

    mongo_db / media_storage / redis_client를 넘기면 그대로 사용하고,
    생략하면 config 값으로 생성한다. (테스트에서는 mongomock과 가짜 저장소를 주입)
    """
    app = Flask(__name__)

    from common.config.config import config
    config_class = config.get(config_name, config['default'])
    app.config.from_object(config_class)

    app.json.ensure_ascii = False

    if app.config.get('SENTRY_DSN'):
        sentry_sdk.init(
            dsn=app.config['SENTRY_DSN'],
            integrations=[
                FlaskIntegration(),
                PyMongoIntegration(),
                RedisIntegration(),
            ],
            environment=app.config.get('SENTRY_ENVIRONMENT', 'development'),
            traces_sample_rate=app.config.get('SENTRY_TRACES_SAMPLE_RATE', 1.0),
            send_default_pii=False,
            attach_stacktrace=True,
        )

    log_level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO'))
    logger = setup_logger(app, log_level, app.config.get('LOG_DIR'))

    app.config['API_TITLE'] = 'VidTube API'
    app.config['API_VERSION'] = 'v1'
    app.config['OPENAPI_VERSION'] = '3.0.3'
    app.config['OPENAPI_URL_PREFIX'] = '/'
    app.config['OPENAPI_SWAGGER_UI_PATH'] = '/swagger'
    app.config['OPENAPI_SWAGGER_UI_URL'] = 'https://cdn.jsdelivr.net/npm/swagger-ui-dist/'
    app.config['OPENAPI_REDOC_PATH'] = '/redoc'
    app.config['OPENAPI_REDOC_URL'] = 'https://cdn.jsdelivr.net/npm/redoc@latest/bundles/redoc.standalone.js'

    # JWT Bearer 토큰 인증을 위한 보안 스킴 설정
    app.config['API_SPEC_OPTIONS'] = {
        'components': {
            'securitySchemes': {
                'BearerAuth': {
                    'type': 'http',
                    'scheme': 'bearer',
                    'bearerFormat': 'JWT',
                    'description': 'JWT 액세스 토큰을 입력하세요 (Bearer 접두어 없이)'
                }
            }
        }
    }

    CORS(app,
         supports_credentials=True,
         origins=app.config.get('CORS_ORIGINS', []),
         allow_headers=["Content-Type", "Authorization", "Accept", "X-Requested-With"],
         expose_headers=["Authorization", "Content-Type"],
         methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
         max_age=3600)

    api.init_app(app)

    if mongo_db is None:
        mongo_db = _build_mongo_db(app, logger)
    if media_storage is None:
        media_storage = _build_media_storage(app, logger)
    if redis_client is None and not app.config.get('TESTING'):
        redis_client = _build_redis_client(app, logger)

    init_dependencies(app, mongo_db, media_storage, redis_client)

    from app.models import ensure_indexes
    ensure_indexes(mongo_db)

    from app.routes import BLUEPRINTS
    for blueprint in BLUEPRINTS:
        api.register_blueprint(blueprint)

    #NOTE: api.init_app 이후에 등록해야 flask-smorest 기본 에러 핸들러를 덮어쓴다
    from common.exception.error_handler import register_error_handlers
    register_error_handlers(app)

    return app
