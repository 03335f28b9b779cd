from flask import jsonify
from pymongo.errors import PyMongoError
from werkzeug.exceptions import HTTPException

from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils.logging_utils import get_logger

logger = get_logger('error_handler')


def _error_envelope(status, message, errors=None):
    body = {
        "statusCode": status,
        "data": None,
        "message": message,
        "success": False
    }
    if errors:
        body["errors"] = errors
    return jsonify(body), status


def register_error_handlers(app):
    @app.errorhandler(BusinessError)
    def handle_business_error(e):
        logger.info(f"{e.error_enum.code} {e.error_enum.name}: {e.message}")
        return _error_envelope(e.status, e.message)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        #NOTE: flask-smorest(webargs) 검증 실패는 422로 올라오므로 400으로 변환
        if e.code == 422:
            messages = getattr(e, 'data', {}).get('messages')
            return _error_envelope(400, APIError.INVALID_INPUT_VALUE.message, messages)
        return _error_envelope(e.code or 500, e.description or e.name)

    @app.errorhandler(PyMongoError)
    def handle_db_error(e):
        logger.exception(f"MongoDB error: {e}")
        return _error_envelope(500, APIError.DB_ERROR.message)

    @app.errorhandler(Exception)
    def handle_internal_error(e):
        logger.exception(f"Unhandled error: {e}")
        return _error_envelope(500, APIError.INTERNAL_SERVER_ERROR.message)
