"""
Authentication middleware for the content synthesis service.

This module provides API key authentication middleware
for protecting endpoints.
"""

import logging
from functools import wraps
from flask import request, jsonify, g, current_app

from ...core.models.errors import ErrorResponse


logger = logging.getLogger(__name__)

# Endpoints reachable without an API key
PUBLIC_ENDPOINTS = {
    'root',
    'static',
    'health.health_check',
    'health.detailed_health_check',
    'health.readiness_check',
    'health.liveness_check',
}


def _unauthorized(error: str, message: str):
    return jsonify(ErrorResponse(
        error=error,
        message=message,
        error_code="AUTHENTICATION_ERROR",
        status=401
    ).model_dump(mode='json')), 401


class AuthMiddleware:
    """Authentication middleware for API key validation."""

    @staticmethod
    def before_request():
        """Process request before handling."""
        if request.endpoint in PUBLIC_ENDPOINTS or request.endpoint is None:
            return None

        header = current_app.config.get('API_KEY_HEADER', 'X-API-Key')
        api_key = request.headers.get(header)

        if not api_key:
            return _unauthorized("authentication_required", "API key is required")

        if not AuthMiddleware.validate_api_key(api_key):
            logger.warning(f"Rejected request to {request.path}: invalid API key")
            return _unauthorized("invalid_api_key", "Invalid API key")

        g.api_key = api_key
        return None

    @staticmethod
    def validate_api_key(api_key: str) -> bool:
        """
        Validate API key against the app configuration.

        Args:
            api_key: API key to validate

        Returns:
            True if valid, False otherwise
        """
        valid_keys = current_app.config.get('API_KEYS') or frozenset()

        if not valid_keys:
            logger.warning("No API keys configured")
            return False

        return api_key in valid_keys

    @staticmethod
    def require_api_key(f):
        """
        Decorator to require API key authentication.

        Args:
            f: Function to decorate

        Returns:
            Decorated function
        """
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not getattr(g, 'api_key', None):
                return _unauthorized("authentication_required", "API key is required")
            return f(*args, **kwargs)

        return decorated_function


def require_api_key(f):
    """
    Decorator to require API key authentication.

    This is a convenience function that can be imported directly.
    """
    return AuthMiddleware.require_api_key(f)
