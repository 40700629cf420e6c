"""Tests for LLM configuration, the gateway and JSON extraction."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from thaimaster.config import Settings
from thaimaster.core.llm import (
    LLMConfigResolver,
    LLMRuntimeConfig,
    UnifiedLLMGateway,
    parse_json_response,
)


class TestParseJsonResponse:
    def test_bare_object(self):
        assert parse_json_response('{"a": 1}') == {"a": 1}

    def test_code_fence(self):
        text = '```json\n{"translatedText": "แมว"}\n```'

        assert parse_json_response(text) == {"translatedText": "แมว"}

    def test_embedded_in_prose(self):
        text = 'Here you go: {"segments": []} hope it helps'

        assert parse_json_response(text) == {"segments": []}

    def test_embedded_array(self):
        assert parse_json_response('result: [{"word": "ดี"}]') == [{"word": "ดี"}]

    def test_object_before_array_in_prose(self):
        text = 'Result: {"synonyms": [{"word": "ดี"}]} done'

        assert parse_json_response(text) == {"synonyms": [{"word": "ดี"}]}

    def test_undecodable_raises(self):
        with pytest.raises(ValueError):
            parse_json_response("no json here")


class TestRuntimeConfig:
    def test_litellm_model_prefix(self):
        assert LLMRuntimeConfig("gemini", "gemini-2.5-flash", "k").get_litellm_model() == "gemini/gemini-2.5-flash"
        assert LLMRuntimeConfig("openai", "gpt-4o-mini", "k").get_litellm_model() == "gpt-4o-mini"
        assert LLMRuntimeConfig("qwen", "qwen-plus", "k").get_litellm_model() == "openai/qwen-plus"

    def test_kwargs_include_base_url(self):
        config = LLMRuntimeConfig("deepseek", "deepseek-chat", "k", base_url="https://api.deepseek.com/v1")

        kwargs = config.to_litellm_kwargs()

        assert kwargs["model"] == "deepseek/deepseek-chat"
        assert kwargs["api_base"] == "https://api.deepseek.com/v1"
        assert kwargs["api_key"] == "k"

    def test_kwargs_leave_response_format_to_the_call(self):
        kwargs = LLMRuntimeConfig("gemini", "gemini-2.5-flash", "k").to_litellm_kwargs()

        assert set(kwargs) == {"model", "api_key", "temperature", "max_tokens"}


class TestConfigResolver:
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for env_var in LLMConfigResolver.ENV_VAR_MAP.values():
            monkeypatch.delenv(env_var, raising=False)

    def test_settings_key_wins(self):
        app_settings = Settings(_env_file=None, llm_provider="gemini", gemini_api_key="g-key")

        config = LLMConfigResolver.resolve(stage="analysis", app_settings=app_settings)

        assert config.provider == "gemini"
        assert config.api_key == "g-key"
        assert config.temperature == LLMConfigResolver.STAGE_TEMPERATURES["analysis"]
        assert config.max_tokens == LLMConfigResolver.STAGE_MAX_TOKENS["analysis"]

    def test_environment_fallback(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "o-key")
        app_settings = Settings(_env_file=None, llm_provider="gemini", gemini_api_key=None)

        config = LLMConfigResolver.resolve(stage="synonyms", app_settings=app_settings)

        assert config.provider == "openai"
        assert config.model == "gpt-4o-mini"
        assert config.api_key == "o-key"

    def test_no_key_anywhere_raises(self):
        app_settings = Settings(_env_file=None, gemini_api_key=None)

        with pytest.raises(ValueError):
            LLMConfigResolver.resolve(app_settings=app_settings)


class TestGateway:
    @pytest.mark.asyncio
    async def test_execute_forwards_config_and_format(self):
        completion = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content='{"ok": true}'))],
            usage=SimpleNamespace(prompt_tokens=3, completion_tokens=4, total_tokens=7),
        )
        config = LLMRuntimeConfig("gemini", "gemini-2.5-flash", "k", temperature=0.3, max_tokens=100)

        with patch(
            "thaimaster.core.llm.gateway.acompletion", new_callable=AsyncMock, return_value=completion
        ) as acompletion:
            response = await UnifiedLLMGateway.execute(
                "system", "user", config, response_format={"type": "json_object"}
            )

        kwargs = acompletion.await_args.kwargs
        assert kwargs["model"] == "gemini/gemini-2.5-flash"
        assert kwargs["temperature"] == 0.3
        assert kwargs["max_tokens"] == 100
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["messages"][1] == {"role": "user", "content": "user"}
        assert response.content == '{"ok": true}'
        assert response.total_tokens == 7
        assert not hasattr(response, "raw_response")

    @pytest.mark.asyncio
    async def test_execute_propagates_provider_errors(self):
        config = LLMRuntimeConfig("gemini", "gemini-2.5-flash", "k")

        with patch(
            "thaimaster.core.llm.gateway.acompletion",
            new_callable=AsyncMock,
            side_effect=RuntimeError("rate limited"),
        ):
            with pytest.raises(RuntimeError):
                await UnifiedLLMGateway.execute("system", "user", config)
