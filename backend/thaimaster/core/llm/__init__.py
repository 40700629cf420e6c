"""LLM integration package.

This package provides:
- LLM runtime configuration per lookup stage (LLMRuntimeConfig, LLMConfigResolver)
- The single gateway every LLM call goes through (UnifiedLLMGateway)
"""

from .gateway import JSON_OBJECT_FORMAT, LLMResponse, UnifiedLLMGateway, parse_json_response
from .runtime_config import LLMConfigResolver, LLMRuntimeConfig, resolve_llm_config

__all__ = [
    "JSON_OBJECT_FORMAT",
    "LLMResponse",
    "UnifiedLLMGateway",
    "parse_json_response",
    "LLMConfigResolver",
    "LLMRuntimeConfig",
    "resolve_llm_config",
]
