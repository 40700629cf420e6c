"""LLM runtime configuration for the lookup stages.

This module provides the configuration that flows from settings to the
actual LLM call.

Key components:
- LLMRuntimeConfig: Complete configuration for a single LLM request
- LLMConfigResolver: Resolves configuration for a stage from settings/env
"""

import os
import logging
from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional

from thaimaster.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

# Stage type for stage-specific defaults
StageType = Literal["quick_translate", "analysis", "synonyms"]


@dataclass
class LLMRuntimeConfig:
    """Complete LLM configuration resolved for a single request.

    All LLM-backed stages use this same config structure, ensuring parameters
    like temperature and max_tokens actually reach the LLM call.
    """

    # Connection parameters
    provider: str
    model: str
    api_key: str
    base_url: Optional[str] = None

    # Generation parameters
    temperature: float = 0.7
    max_tokens: int = 4096

    def get_litellm_model(self) -> str:
        """Get model string in LiteLLM format (provider/model)."""
        provider_prefixes = {
            "openai": "",  # No prefix for OpenAI
            "anthropic": "anthropic/",
            "gemini": "gemini/",
            "qwen": "openai/",  # Qwen uses OpenAI-compatible API
            "deepseek": "deepseek/",
        }
        prefix = provider_prefixes.get(self.provider, f"{self.provider}/")

        if self.model.startswith(prefix) or self.provider == "openai":
            return self.model
        return f"{prefix}{self.model}"

    def to_litellm_kwargs(self) -> Dict[str, Any]:
        """Convert to kwargs for litellm.acompletion()."""
        kwargs: Dict[str, Any] = {
            "model": self.get_litellm_model(),
            "api_key": self.api_key,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

        if self.base_url:
            kwargs["api_base"] = self.base_url

        return kwargs


class LLMConfigResolver:
    """Resolves LLM configuration for a lookup stage.

    Resolution order:
    1. Provider/model from settings, with that provider's key
    2. Any provider whose key is present in the environment
    """

    # Environment variable mapping for each provider
    ENV_VAR_MAP = {
        "gemini": "GEMINI_API_KEY",
        "openai": "OPENAI_API_KEY",
        "anthropic": "ANTHROPIC_API_KEY",
        "qwen": "DASHSCOPE_API_KEY",
        "deepseek": "DEEPSEEK_API_KEY",
    }

    # Default models for environment variable fallback
    DEFAULT_MODELS = {
        "gemini": "gemini-2.5-flash",
        "openai": "gpt-4o-mini",
        "anthropic": "claude-3-5-haiku-20241022",
        "qwen": "qwen-plus",
        "deepseek": "deepseek-chat",
    }

    BASE_URLS = {
        "qwen": "https://dashscope.aliyuncs.com/compatible-mode/v1",
        "deepseek": "https://api.deepseek.com/v1",
    }

    # Stage-specific default temperatures
    STAGE_TEMPERATURES: Dict[str, float] = {
        "quick_translate": 0.2,
        "analysis": 0.3,  # Deterministic structured JSON output
        "synonyms": 0.5,
    }

    # Stage-specific default max_tokens
    STAGE_MAX_TOKENS: Dict[str, int] = {
        "quick_translate": 512,
        "analysis": 4096,
        "synonyms": 1024,
    }

    @classmethod
    def resolve(
        cls,
        stage: Optional[StageType] = None,
        app_settings: Optional[Settings] = None,
    ) -> LLMRuntimeConfig:
        """Resolve complete LLM configuration.

        Args:
            stage: Lookup stage (affects temperature/max_tokens)
            app_settings: Settings to read from (defaults to global settings)

        Returns:
            Fully resolved LLMRuntimeConfig ready for use

        Raises:
            ValueError: If no API key can be found
        """
        app_settings = app_settings or default_settings
        provider = app_settings.llm_provider.lower()
        api_key = cls._settings_key(app_settings, provider)

        if api_key:
            runtime_config = LLMRuntimeConfig(
                provider=provider,
                model=app_settings.llm_model,
                api_key=api_key,
                base_url=cls.BASE_URLS.get(provider),
            )
        else:
            runtime_config = cls._resolve_from_environment()

        if stage:
            runtime_config.temperature = cls.STAGE_TEMPERATURES.get(
                stage, runtime_config.temperature
            )
            runtime_config.max_tokens = cls.STAGE_MAX_TOKENS.get(
                stage, runtime_config.max_tokens
            )

        logger.debug(
            f"Resolved LLM config: stage={stage}, provider={runtime_config.provider}, "
            f"model={runtime_config.model}, temperature={runtime_config.temperature}"
        )
        return runtime_config

    @staticmethod
    def _settings_key(app_settings: Settings, provider: str) -> Optional[str]:
        key_map = {
            "gemini": app_settings.gemini_api_key,
            "openai": app_settings.openai_api_key,
            "anthropic": app_settings.anthropic_api_key,
            "qwen": app_settings.dashscope_api_key,
            "deepseek": app_settings.deepseek_api_key,
        }
        return key_map.get(provider)

    @classmethod
    def _resolve_from_environment(cls) -> LLMRuntimeConfig:
        """Resolve config from environment variables as last resort.

        Raises:
            ValueError: If no API key found in environment
        """
        for provider, env_var in cls.ENV_VAR_MAP.items():
            api_key = os.environ.get(env_var)
            if api_key:
                model = cls.DEFAULT_MODELS[provider]
                logger.info(
                    f"Resolved config from environment: "
                    f"provider={provider}, model={model}"
                )
                return LLMRuntimeConfig(
                    provider=provider,
                    model=model,
                    api_key=api_key,
                    base_url=cls.BASE_URLS.get(provider),
                )

        raise ValueError(
            "No LLM configuration available. Set GEMINI_API_KEY (or another "
            "provider key such as OPENAI_API_KEY) in the environment."
        )


def resolve_llm_config(stage: Optional[StageType] = None) -> LLMRuntimeConfig:
    """Convenience function to resolve LLM configuration.

    Example:
        config = resolve_llm_config(stage="analysis")
        response = await UnifiedLLMGateway.execute(system, user, config)
    """
    return LLMConfigResolver.resolve(stage=stage)
