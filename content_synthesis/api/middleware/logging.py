"""
Logging middleware for the content synthesis service.

This module provides request/response logging middleware
for monitoring and debugging.
"""

import logging
import time
from uuid import uuid4
from flask import request, g, current_app


logger = logging.getLogger(__name__)

# Request body keys never written to logs
SENSITIVE_FIELDS = {'api_key', 'password', 'token'}


class LoggingMiddleware:
    """Logging middleware for request/response logging."""

    @staticmethod
    def before_request():
        """Log request details."""
        g.start_time = time.time()
        g.request_id = f"req_{uuid4().hex[:12]}"

        if not current_app.config.get('LOG_REQUESTS', True):
            return

        logger.info(
            f"Request started: {g.request_id} - {request.method} {request.path} "
            f"from {request.remote_addr}"
        )

        if request.method == 'POST' and request.is_json:
            data = request.get_json(silent=True)
            if isinstance(data, dict):
                safe_data = {k: v for k, v in data.items() if k not in SENSITIVE_FIELDS}
                logger.debug(f"Request body: {safe_data}")

    @staticmethod
    def after_request(response):
        """Log response details."""
        if hasattr(g, 'start_time') and current_app.config.get('LOG_REQUESTS', True):
            duration = time.time() - g.start_time

            logger.info(
                f"Request completed: {g.request_id} - {response.status_code} "
                f"in {duration:.3f}s"
            )

            if response.status_code >= 400:
                logger.warning(
                    f"Error response: {g.request_id} - {response.status_code} "
                    f"for {request.method} {request.path}"
                )

        if hasattr(g, 'request_id'):
            response.headers['X-Request-ID'] = g.request_id

        return response
