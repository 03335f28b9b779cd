from flask_smorest import Blueprint

from app.schemas.common_schema import HealthcheckResponseSchema
from common.decorator.auth_decorators import public_route
from common.utils import api_response

healthcheck_blueprint = Blueprint(
    'healthcheck',
    __name__,
    url_prefix='/api/v1/healthcheck',
    description='서비스 상태 확인'
)


@healthcheck_blueprint.route('/', methods=['GET'])
@public_route
@healthcheck_blueprint.response(200, HealthcheckResponseSchema)
def healthcheck():
    return api_response("OK", "Status OK")
