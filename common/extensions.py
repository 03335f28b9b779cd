from flask import current_app
from flask_smorest import Api

api = Api()

MONGO_DB_KEY = 'vidtube.mongo_db'
MEDIA_STORAGE_KEY = 'vidtube.media_storage'
REDIS_CLIENT_KEY = 'vidtube.redis_client'


def init_dependencies(app, mongo_db, media_storage, redis_client=None):
    app.extensions[MONGO_DB_KEY] = mongo_db
    app.extensions[MEDIA_STORAGE_KEY] = media_storage
    app.extensions[REDIS_CLIENT_KEY] = redis_client


def get_mongo_db():
    return current_app.extensions[MONGO_DB_KEY]


def get_media_storage():
    return current_app.extensions[MEDIA_STORAGE_KEY]


def get_redis_client():
    return current_app.extensions.get(REDIS_CLIENT_KEY)
