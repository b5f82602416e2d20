"""
LLM-related data models and schemas.

This module defines the data structures for provider configuration,
the uniform provider call and its raw response.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any

from pydantic import BaseModel, ConfigDict, Field


class LLMProvider(str, Enum):
    """LLM provider types."""
    OPENAI = "openai"
    GEMINI = "gemini"
    ANTHROPIC = "anthropic"
    DEEPSEEK = "deepseek"
    MISTRAL = "mistral"
    OLLAMA = "ollama"


class ResponseShape(str, Enum):
    """Expected shape of the provider's raw text."""
    JSON = "json"
    TEXT = "text"


class ProviderSettings(BaseModel):
    """Static configuration of one adapter in the router's chain."""

    model_config = ConfigDict(use_enum_values=True, frozen=True)

    provider: LLMProvider = Field(..., description="LLM provider")
    model_name: str = Field(..., min_length=1, description="Model name")
    api_key: Optional[str] = Field(None, description="API key")
    base_url: Optional[str] = Field(None, description="Base URL for API")
    timeout: int = Field(default=60, ge=1, le=600, description="Per-call timeout in seconds")

    @property
    def name(self) -> str:
        return f"{self.provider}/{self.model_name}"


class ProviderRequest(BaseModel):
    """The uniform call shape every adapter accepts."""

    model_config = ConfigDict(use_enum_values=True, frozen=True)

    system_instructions: str = Field(..., description="System prompt")
    user_prompt: str = Field(..., min_length=1, description="User prompt")
    response_shape: ResponseShape = Field(default=ResponseShape.JSON)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_output_size: int = Field(default=2000, ge=1, le=100000, description="Maximum output tokens")


class LLMResponse(BaseModel):
    """Raw provider response."""

    content: str = Field(..., description="Generated text")
    provider: str = Field(..., description="Adapter name")
    model: str = Field(..., description="Model used")
    finish_reason: Optional[str] = None

    prompt_tokens: int = Field(default=0, ge=0)
    completion_tokens: int = Field(default=0, ge=0)
    total_tokens: int = Field(default=0, ge=0)

    response_time: float = Field(default=0.0, ge=0.0, description="Response time in seconds")
    created_at: datetime = Field(default_factory=datetime.utcnow)
    metadata: Dict[str, Any] = Field(default_factory=dict)
