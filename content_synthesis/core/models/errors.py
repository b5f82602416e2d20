"""
Error models and exception classes.

This module defines custom exception classes and error response models
for the content synthesis pipeline.
"""

from datetime import datetime
from typing import Optional, Dict, Any, List
from pydantic import BaseModel, Field


class ContentSynthesisError(Exception):
    """Base exception for the content synthesis pipeline."""

    def __init__(self, message: str, error_code: str = None, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ContentSynthesisError):
    """Validation error."""

    def __init__(self, message: str, field: str = None, value: Any = None):
        self.field = field
        self.value = value
        super().__init__(message, "VALIDATION_ERROR", {"field": field, "value": value})


class ProviderError(ContentSynthesisError):
    """A single generation provider call failed."""

    def __init__(self, message: str, provider: str = None, model: str = None, retryable: bool = True):
        self.provider = provider
        self.model = model
        self.retryable = retryable
        super().__init__(
            message,
            "PROVIDER_ERROR",
            {"provider": provider, "model": model, "retryable": retryable}
        )


class InvalidResponseError(ProviderError):
    """Provider answered, but the payload is structurally unusable."""

    def __init__(self, message: str, provider: str = None, model: str = None, missing: List[str] = None):
        self.missing = missing or []
        super().__init__(message, provider=provider, model=model, retryable=False)
        self.error_code = "INVALID_RESPONSE"
        self.details["missing"] = self.missing


class GenerationError(ContentSynthesisError):
    """Per-item pipeline failure."""

    def __init__(self, message: str, stage: str = None, item_key: str = None):
        self.stage = stage
        self.item_key = item_key
        super().__init__(
            message,
            "GENERATION_ERROR",
            {"stage": stage, "item_key": item_key}
        )


class StorageError(ContentSynthesisError):
    """Storage listing service error."""

    def __init__(self, message: str, bucket: str = None, path: str = None):
        self.bucket = bucket
        self.path = path
        super().__init__(
            message,
            "STORAGE_ERROR",
            {"bucket": bucket, "path": path}
        )


class DatastoreError(ContentSynthesisError):
    """Content datastore error."""

    def __init__(self, message: str, table: str = None, operation: str = None):
        self.table = table
        self.operation = operation
        super().__init__(
            message,
            "DATASTORE_ERROR",
            {"table": table, "operation": operation}
        )


class TaskError(ContentSynthesisError):
    """Task processing error."""

    def __init__(self, message: str, task_id: str = None):
        self.task_id = task_id
        super().__init__(
            message,
            "TASK_ERROR",
            {"task_id": task_id}
        )


class ConfigurationError(ContentSynthesisError):
    """Configuration error."""

    def __init__(self, message: str, config_key: str = None):
        self.config_key = config_key
        super().__init__(
            message,
            "CONFIGURATION_ERROR",
            {"config_key": config_key}
        )


class AuthenticationError(ContentSynthesisError):
    """Authentication error."""

    def __init__(self, message: str, api_key: str = None):
        self.api_key = api_key
        super().__init__(
            message,
            "AUTHENTICATION_ERROR",
            {"api_key": api_key}
        )


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    error_code: Optional[str] = Field(None, description="Error code")
    status: int = Field(..., description="HTTP status code")

    # Optional Details
    details: Optional[Dict[str, Any]] = Field(None, description="Error details")
    field: Optional[str] = Field(None, description="Field that caused error")
    value: Optional[Any] = Field(None, description="Value that caused error")

    # Request Information
    request_id: Optional[str] = Field(None, description="Request ID")
    task_id: Optional[str] = Field(None, description="Task ID")

    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")

    @classmethod
    def from_exception(cls, exc: ContentSynthesisError, status: int = 500) -> 'ErrorResponse':
        """Create error response from exception."""
        return cls(
            error=exc.__class__.__name__,
            message=exc.message,
            error_code=exc.error_code or "UNKNOWN_ERROR",
            status=status,
            details=exc.details
        )


class ValidationErrorResponse(BaseModel):
    """Validation error response model."""

    error: str = Field(default="validation_error", description="Error type")
    message: str = Field(default="Validation failed", description="Error message")
    status: int = Field(default=400, description="HTTP status code")

    validation_errors: List[Dict[str, Any]] = Field(default_factory=list, description="Validation errors")

    request_id: Optional[str] = Field(None, description="Request ID")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")

    def add_validation_error(self, field: str, message: str, value: Any = None):
        """Add a validation error."""
        error = {
            "field": field,
            "message": message
        }
        if value is not None:
            error["value"] = value

        self.validation_errors.append(error)

    def has_errors(self) -> bool:
        """Check if there are validation errors."""
        return len(self.validation_errors) > 0
