"""
LLM integration module.

This module provides a uniform call shape over LLM providers and the
router that falls back between them.
"""

from .litellm_client import LiteLLMAdapter, build_adapter
from .json_extract import extract_json_object, strip_code_fences
from .router import ProviderRouter, build_router

__all__ = [
    'LiteLLMAdapter',
    'build_adapter',
    'extract_json_object',
    'strip_code_fences',
    'ProviderRouter',
    'build_router'
]
