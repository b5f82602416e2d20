"""
LiteLLM provider adapter.

One adapter wraps one provider/model pair behind the uniform
ProviderRequest call shape. Adapters make exactly one attempt per call;
falling back to the next adapter is the router's job.
"""

import logging
import time
from typing import Optional, Dict, Any

import litellm
from litellm import completion
from litellm.exceptions import (
    AuthenticationError,
    RateLimitError,
    APIError,
    Timeout,
    ServiceUnavailableError
)

from ...core.models.errors import ProviderError, InvalidResponseError
from ...core.models.llm import ProviderSettings, ProviderRequest, LLMResponse, ResponseShape
from .json_extract import extract_json_object


logger = logging.getLogger(__name__)

# Providers that honor OpenAI-style response_format
_JSON_MODE_PROVIDERS = {"openai", "deepseek", "mistral", "gemini"}


class LiteLLMAdapter:
    """
    Adapter for a single provider/model through LiteLLM.

    Retries are disabled at the LiteLLM level so a failing adapter costs
    one bounded call before the router moves on.
    """

    def __init__(self, settings: ProviderSettings):
        """
        Initialize the adapter.

        Args:
            settings: Provider, model, credentials and timeout
        """
        self.settings = settings

        litellm.drop_params = True
        litellm.suppress_debug_info = True

        logger.info(f"LiteLLMAdapter initialized: {settings.name} (timeout {settings.timeout}s)")

    @property
    def name(self) -> str:
        return self.settings.name

    def _build_params(self, request: ProviderRequest) -> Dict[str, Any]:
        messages = []
        if request.system_instructions:
            messages.append({
                "role": "system",
                "content": request.system_instructions
            })
        messages.append({
            "role": "user",
            "content": request.user_prompt
        })

        params = {
            "model": self.settings.name,
            "messages": messages,
            "temperature": request.temperature,
            "max_tokens": request.max_output_size,
            "timeout": self.settings.timeout,
            "num_retries": 0
        }

        if request.response_shape == ResponseShape.JSON.value and self.settings.provider in _JSON_MODE_PROVIDERS:
            params["response_format"] = {"type": "json_object"}

        if self.settings.api_key:
            params["api_key"] = self.settings.api_key

        if self.settings.base_url:
            params["api_base"] = self.settings.base_url

        return params

    def complete(self, request: ProviderRequest) -> LLMResponse:
        """
        Send one request to the provider.

        Args:
            request: Uniform provider call

        Returns:
            LLMResponse with the raw text

        Raises:
            ProviderError: On transport, auth, rate-limit or timeout failures
            InvalidResponseError: If the provider returned no text
        """
        params = self._build_params(request)
        start_time = time.time()

        try:
            response = completion(**params)
        except AuthenticationError as e:
            raise ProviderError(f"Authentication failed: {e}", self.settings.provider,
                                self.settings.model_name, retryable=False)
        except RateLimitError as e:
            raise ProviderError(f"Rate limit exceeded: {e}", self.settings.provider,
                                self.settings.model_name)
        except Timeout as e:
            raise ProviderError(f"Request timeout after {self.settings.timeout}s: {e}",
                                self.settings.provider, self.settings.model_name)
        except ServiceUnavailableError as e:
            raise ProviderError(f"Service unavailable: {e}", self.settings.provider,
                                self.settings.model_name)
        except APIError as e:
            raise ProviderError(f"API error: {e}", self.settings.provider, self.settings.model_name)
        except Exception as e:
            raise ProviderError(f"Unexpected error: {e}", self.settings.provider,
                                self.settings.model_name)

        response_time = time.time() - start_time

        choice = response.choices[0]
        content = choice.message.content
        if not content or not content.strip():
            raise InvalidResponseError("Provider returned an empty response",
                                       self.settings.provider, self.settings.model_name)

        usage = getattr(response, "usage", None)

        return LLMResponse(
            content=content.strip(),
            provider=self.name,
            model=self.settings.model_name,
            finish_reason=getattr(choice, "finish_reason", None),
            prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
            total_tokens=getattr(usage, "total_tokens", 0) or 0,
            response_time=response_time
        )

    def complete_json(self, request: ProviderRequest) -> Dict[str, Any]:
        """
        Send a request and parse the first JSON object in the answer.

        Raises:
            ProviderError: If the call fails
            InvalidResponseError: If no JSON object can be recovered
        """
        response = self.complete(request)
        parsed = extract_json_object(response.content)
        if parsed is None:
            raise InvalidResponseError("Response did not contain a JSON object",
                                       self.settings.provider, self.settings.model_name)
        return parsed

    def __repr__(self) -> str:
        return f"LiteLLMAdapter({self.name})"


def build_adapter(provider: str, model: str, api_key: Optional[str] = None,
                  base_url: Optional[str] = None, timeout: int = 60) -> LiteLLMAdapter:
    """Create an adapter from plain values."""
    return LiteLLMAdapter(ProviderSettings(
        provider=provider,
        model_name=model,
        api_key=api_key,
        base_url=base_url,
        timeout=timeout
    ))
