"""
Provider router.

This module tries a fixed, priority-ordered list of provider adapters
and terminates in the local heuristics, so callers always get a usable
result.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

from ...core.models.content import GenerationRequest, GeneratedContent
from ...core.models.llm import ProviderRequest
from ...core.models.quality import QualityReport
from ...heuristics import generate_locally, analyze_locally, LOCAL_SOURCE
from ...utils.config import Config, parse_provider_chain
from .json_extract import strip_code_fences
from .litellm_client import build_adapter
from .prompts import build_generation_request, build_analysis_request, build_rewrite_request
from .responses import parse_generated_content, parse_quality_report


logger = logging.getLogger(__name__)

T = TypeVar("T")

# Providers reached through a base URL instead of an API key
_KEYLESS_PROVIDERS = {"ollama"}

# A rewrite shorter than this share of the original is treated as truncated
MIN_REWRITE_RATIO = 0.3


class ProviderRouter:
    """
    Ordered fallback over provider adapters.

    Each adapter gets exactly one attempt per call. Any exception or
    structurally invalid payload advances to the next adapter; after the
    last one the local heuristic answers. Adapter failures are logged,
    never raised.
    """

    def __init__(
        self,
        adapters: Sequence[Any] = (),
        local_generator: Callable[[GenerationRequest], GeneratedContent] = generate_locally,
        local_analyzer: Callable[[str, str], QualityReport] = analyze_locally
    ):
        """
        Initialize the router.

        Args:
            adapters: Objects exposing ``name``, ``complete`` and ``complete_json``,
                highest priority first
            local_generator: Terminal generator that must not fail
            local_analyzer: Terminal analyzer that must not fail
        """
        self.adapters = list(adapters)
        self.local_generator = local_generator
        self.local_analyzer = local_analyzer

        logger.info(f"ProviderRouter initialized with chain: {self.adapter_names or ['local']}")

    @property
    def adapter_names(self) -> List[str]:
        return [adapter.name for adapter in self.adapters]

    def _dispatch(self, purpose: str, call: Callable[[Any], T]) -> Optional[T]:
        for adapter in self.adapters:
            try:
                result = call(adapter)
                logger.debug(f"{purpose} served by {adapter.name}")
                return result
            except Exception as e:
                logger.warning(f"{purpose} failed on {adapter.name}, trying next provider: {e}")
        return None

    def generate(self, request: GenerationRequest) -> GeneratedContent:
        """
        Generate content for a request.

        Args:
            request: Generation request

        Returns:
            GeneratedContent from the first adapter that returns a complete
            payload, else from the local generator
        """
        provider_request = build_generation_request(request)

        def call(adapter) -> GeneratedContent:
            payload = adapter.complete_json(provider_request)
            return parse_generated_content(payload, provider=adapter.name)

        content = self._dispatch("generate", call)
        if content is not None:
            return content

        logger.info(f"All providers failed for {request.kind} generation, using local templates")
        return self.local_generator(request)

    def analyze(self, content: str, title: str = "") -> QualityReport:
        """
        Score content, falling back to local statistics.

        Args:
            content: Plain text or HTML
            title: Content title

        Returns:
            QualityReport whose ``source`` names the adapter or 'local'
        """
        provider_request = build_analysis_request(content, title)

        def call(adapter) -> QualityReport:
            payload = adapter.complete_json(provider_request)
            return parse_quality_report(payload, provider=adapter.name)

        report = self._dispatch("analyze", call)
        if report is not None:
            return report

        return self.local_analyzer(content, title)

    def rewrite(self, content: str, title: str, analysis: QualityReport) -> Optional[Tuple[str, str]]:
        """
        Ask providers for a rewrite guided by an analysis.

        Returns:
            (rewritten text, adapter name), or None when no adapter produced
            a usable rewrite; the caller owns the local fallback
        """
        provider_request = build_rewrite_request(content, title, analysis)

        def call(adapter) -> Tuple[str, str]:
            response = adapter.complete(provider_request)
            text = strip_code_fences(response.content).strip()
            if len(text) < len(content.strip()) * MIN_REWRITE_RATIO:
                raise ValueError(f"Rewrite too short ({len(text)} of {len(content)} chars)")
            return text, adapter.name

        return self._dispatch("rewrite", call)

    def describe(self) -> Dict[str, Any]:
        """Chain description for health output, never includes keys."""
        return {
            "providers": self.adapter_names,
            "terminal": LOCAL_SOURCE
        }


def build_router(config: Config) -> ProviderRouter:
    """
    Create a router from explicit configuration.

    Adapters whose credentials are missing are left out of the chain.

    Args:
        config: Application configuration

    Returns:
        ProviderRouter

    Raises:
        ValueError: If PROVIDER_CHAIN is malformed
    """
    adapters = []
    for provider, model in parse_provider_chain(config.PROVIDER_CHAIN):
        api_key = config.provider_api_key(provider)
        base_url = config.OLLAMA_BASE_URL if provider in _KEYLESS_PROVIDERS else None

        if provider in _KEYLESS_PROVIDERS and not base_url:
            logger.warning(f"Skipping {provider}/{model}: no base URL configured")
            continue
        if provider not in _KEYLESS_PROVIDERS and not api_key:
            logger.warning(f"Skipping {provider}/{model}: no API key configured")
            continue

        adapters.append(build_adapter(provider, model, api_key=api_key,
                                      base_url=base_url, timeout=config.PROVIDER_TIMEOUT))

    return ProviderRouter(adapters)
