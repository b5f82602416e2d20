"""
Flask extensions and per-app service access.
"""

from flask import current_app, request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from ..core.models.errors import ValidationError
from ..services import PipelineServices, build_services


EXTENSION_KEY = 'content_synthesis'

limiter = Limiter(key_func=get_remote_address, default_limits=[])


def batch_limit() -> str:
    return current_app.config.get('RATELIMIT_BATCH', '5 per minute')


def get_services() -> PipelineServices:
    """Pipeline services of the current app, built on first use."""
    services = current_app.extensions.get(EXTENSION_KEY)
    if services is None:
        services = build_services(current_app.config['PIPELINE_CONFIG'])
        current_app.extensions[EXTENSION_KEY] = services
    return services


def json_body() -> dict:
    """JSON object body of the current request."""
    if not request.is_json:
        raise ValidationError("Content-Type must be application/json", field="Content-Type",
                              value=request.content_type)
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def wants_async() -> bool:
    return request.args.get('async', 'false').lower() in ('1', 'true', 'yes')
