"""
Error handling middleware for the content synthesis service.

This module provides centralized error handling and
response formatting for the API.
"""

import logging
from flask import jsonify, g
from pydantic import ValidationError as PydanticValidationError
from werkzeug.exceptions import HTTPException

from ...core.models.errors import (
    ErrorResponse,
    ValidationErrorResponse,
    ValidationError,
    ProviderError,
    GenerationError,
    StorageError,
    DatastoreError,
    TaskError,
    ConfigurationError,
    AuthenticationError
)


logger = logging.getLogger(__name__)


def _respond(response: ErrorResponse):
    response.request_id = getattr(g, 'request_id', None)
    return jsonify(response.model_dump(mode='json')), response.status


class ErrorHandler:
    """Centralized error handling for the API."""

    @staticmethod
    def register_handlers(app):
        """Register error handlers with Flask app."""
        app.register_error_handler(ValidationError, ErrorHandler.handle_validation_error)
        app.register_error_handler(PydanticValidationError, ErrorHandler.handle_schema_error)
        app.register_error_handler(ProviderError, ErrorHandler.handle_provider_error)
        app.register_error_handler(GenerationError, ErrorHandler.handle_generation_error)
        app.register_error_handler(StorageError, ErrorHandler.handle_infrastructure_error)
        app.register_error_handler(DatastoreError, ErrorHandler.handle_infrastructure_error)
        app.register_error_handler(TaskError, ErrorHandler.handle_task_error)
        app.register_error_handler(ConfigurationError, ErrorHandler.handle_configuration_error)
        app.register_error_handler(AuthenticationError, ErrorHandler.handle_authentication_error)
        app.register_error_handler(HTTPException, ErrorHandler.handle_http_error)
        app.register_error_handler(Exception, ErrorHandler.handle_generic_error)

    @staticmethod
    def handle_validation_error(error: ValidationError):
        """Handle validation errors."""
        logger.warning(f"Validation error: {error.message}")

        return _respond(ErrorResponse(
            error="validation_error",
            message=error.message,
            error_code=error.error_code,
            status=400,
            field=error.field,
            value=error.value
        ))

    @staticmethod
    def handle_schema_error(error: PydanticValidationError):
        """Handle request body schema errors."""
        response = ValidationErrorResponse(request_id=getattr(g, 'request_id', None))
        for item in error.errors():
            location = ".".join(str(part) for part in item.get("loc", ()))
            response.add_validation_error(location, item.get("msg", "invalid value"))

        logger.warning(f"Request validation failed: {response.validation_errors}")
        return jsonify(response.model_dump(mode='json')), 400

    @staticmethod
    def handle_provider_error(error: ProviderError):
        """Handle provider errors that escaped the router."""
        logger.error(f"Provider error: {error.message}")

        return _respond(ErrorResponse(
            error="provider_error",
            message=error.message,
            error_code=error.error_code,
            status=503,
            details={
                "provider": error.provider,
                "model": error.model,
                "retryable": error.retryable
            }
        ))

    @staticmethod
    def handle_generation_error(error: GenerationError):
        """Handle generation errors."""
        logger.error(f"Generation error: {error.message}")

        return _respond(ErrorResponse(
            error="generation_error",
            message=error.message,
            error_code=error.error_code,
            status=500,
            details={
                "stage": error.stage,
                "item_key": error.item_key
            }
        ))

    @staticmethod
    def handle_infrastructure_error(error):
        """Handle storage and datastore failures."""
        logger.error(f"{type(error).__name__}: {error.message}")

        return _respond(ErrorResponse(
            error="service_unavailable",
            message=error.message,
            error_code=error.error_code,
            status=503,
            details=error.details
        ))

    @staticmethod
    def handle_task_error(error: TaskError):
        """Handle task errors."""
        logger.error(f"Task error: {error.message}")

        return _respond(ErrorResponse(
            error="task_error",
            message=error.message,
            error_code=error.error_code,
            status=500,
            task_id=error.task_id
        ))

    @staticmethod
    def handle_configuration_error(error: ConfigurationError):
        """Handle configuration errors."""
        logger.error(f"Configuration error: {error.message}")

        return _respond(ErrorResponse(
            error="configuration_error",
            message=error.message,
            error_code=error.error_code,
            status=500,
            details={
                "config_key": error.config_key
            }
        ))

    @staticmethod
    def handle_authentication_error(error: AuthenticationError):
        """Handle authentication errors."""
        logger.warning(f"Authentication error: {error.message}")

        return _respond(ErrorResponse(
            error="authentication_error",
            message=error.message,
            error_code=error.error_code,
            status=401
        ))

    @staticmethod
    def handle_http_error(error: HTTPException):
        """Render werkzeug HTTP errors (404, 405, 429...) as JSON."""
        return _respond(ErrorResponse(
            error=(error.name or "http_error").lower().replace(" ", "_"),
            message=error.description or error.name,
            status=error.code or 500
        ))

    @staticmethod
    def handle_generic_error(error: Exception):
        """Handle generic errors."""
        request_id = getattr(g, 'request_id', 'unknown')

        logger.error(
            f"Unhandled error in request {request_id}: {str(error)}",
            exc_info=True
        )

        return _respond(ErrorResponse(
            error="internal_server_error",
            message="An unexpected error occurred",
            error_code="INTERNAL_SERVER_ERROR",
            status=500,
            details={
                "error_type": type(error).__name__
            }
        ))
