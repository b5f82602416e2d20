"""
Main Flask application for the content synthesis service.

This module creates and configures the Flask application
with all necessary middleware, blueprints, and error handlers.
"""

import logging
import os
from datetime import datetime
from flask import Flask, jsonify
from flask_cors import CORS

from .. import __version__
from .endpoints import listings_bp, content_bp, tasks_bp, health_bp
from .extensions import limiter, EXTENSION_KEY
from .middleware.auth import AuthMiddleware
from .middleware.logging import LoggingMiddleware
from .middleware.error_handler import ErrorHandler
from ..services import PipelineServices
from ..utils.config import get_config, validate_config
from ..utils.logging import setup_logging


def create_app(config_name: str = None, services: PipelineServices = None) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config_name: Configuration name (development, production, testing)
        services: Prepared pipeline services; built from config on first
            use when omitted

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)

    # Load configuration
    config = services.config if services is not None else get_config(config_name)
    app.config.from_object(config)
    app.config['PIPELINE_CONFIG'] = config

    # Setup logging
    setup_logging(app.config)
    logger = logging.getLogger(__name__)

    for problem in validate_config(config):
        logger.warning(f"Configuration problem: {problem}")

    # Initialize extensions
    CORS(app, origins=app.config.get('CORS_ORIGINS', ['*']))
    limiter.init_app(app)

    if services is not None:
        app.extensions[EXTENSION_KEY] = services

    # Register middleware; logging first so every response carries a request id
    app.before_request(LoggingMiddleware.before_request)
    app.before_request(AuthMiddleware.before_request)
    app.after_request(LoggingMiddleware.after_request)

    # Register blueprints
    app.register_blueprint(listings_bp)
    app.register_blueprint(content_bp)
    app.register_blueprint(tasks_bp)
    app.register_blueprint(health_bp)

    # Register error handlers
    ErrorHandler.register_handlers(app)

    @app.route('/')
    def root():
        return jsonify({
            "service": "content-synthesis",
            "version": __version__,
            "status": "running",
            "timestamp": datetime.utcnow().isoformat(),
            "endpoints": {
                "health": "/api/v1/health",
                "create_listings": "/api/v1/listings/create-from-images",
                "generate": "/api/v1/content/generate",
                "analyze": "/api/v1/content/analyze",
                "improve": "/api/v1/content/improve",
                "improve_batch": "/api/v1/content/improve-batch",
                "tasks": "/api/v1/tasks/{task_id}"
            }
        })

    logger.info(f"Flask application created with config: {config_name or type(config).__name__}")

    return app


def run_app(host: str = '0.0.0.0', port: int = None, debug: bool = False):
    """
    Run the Flask application.

    Args:
        host: Host to bind to
        port: Port to bind to
        debug: Enable debug mode
    """
    port = port or int(os.environ.get('PORT', 5001))
    app = create_app()

    logger = logging.getLogger(__name__)
    logger.info(f"Starting content synthesis service on {host}:{port}")

    app.run(host=host, port=port, debug=debug)


if __name__ == '__main__':
    run_app()
