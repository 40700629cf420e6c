"""Unified LLM Gateway for all provider access.

This module provides a single gateway for every LLM call made by the
lookup stages. It takes LLMRuntimeConfig directly, so the configured
parameters (temperature, max_tokens) reach the LLM call.
"""

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from litellm import acompletion

from .runtime_config import LLMRuntimeConfig

logger = logging.getLogger(__name__)

JSON_OBJECT_FORMAT: Dict[str, Any] = {"type": "json_object"}


@dataclass
class LLMResponse:
    """Standardized LLM response."""

    content: str
    model: str
    provider: str
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0
    latency_ms: int = 0


class UnifiedLLMGateway:
    """Unified gateway for all LLM interactions.

    Usage:
        config = resolve_llm_config(stage="analysis")
        response = await UnifiedLLMGateway.execute(
            system_prompt="You are a Thai language teacher...",
            user_prompt="Segment: สวัสดี",
            config=config,
        )
    """

    @classmethod
    async def execute(
        cls,
        system_prompt: str,
        user_prompt: str,
        config: LLMRuntimeConfig,
        *,
        response_format: Optional[Dict[str, Any]] = None,
    ) -> LLMResponse:
        """Execute LLM call with given prompts and config.

        Args:
            system_prompt: System message content
            user_prompt: User message content
            config: Complete LLM configuration
            response_format: Optional JSON format for structured output

        Returns:
            Standardized LLMResponse

        Raises:
            Exception: If LLM call fails
        """
        start_time = time.time()

        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]

        kwargs = config.to_litellm_kwargs()
        kwargs["messages"] = messages

        if response_format:
            kwargs["response_format"] = response_format

        logger.info(
            f"LLM call: model={config.model}, provider={config.provider}, "
            f"temperature={config.temperature}, max_tokens={config.max_tokens}"
        )

        try:
            response = await acompletion(**kwargs)
        except Exception as e:
            logger.error(f"LLM call failed: model={config.model}, error={e}")
            raise

        latency_ms = int((time.time() - start_time) * 1000)

        result = LLMResponse(
            content=response.choices[0].message.content or "",
            model=config.model,
            provider=config.provider,
            input_tokens=response.usage.prompt_tokens if response.usage else 0,
            output_tokens=response.usage.completion_tokens if response.usage else 0,
            total_tokens=response.usage.total_tokens if response.usage else 0,
            latency_ms=latency_ms,
        )

        logger.info(
            f"LLM response: tokens={result.total_tokens}, latency={latency_ms}ms"
        )

        return result


def parse_json_response(response_text: str) -> Union[Dict[str, Any], list]:
    """Parse a JSON object or array out of LLM response text.

    Accepts bare JSON, JSON wrapped in a markdown code fence, or JSON
    surrounded by prose.

    Raises:
        ValueError: If no JSON value can be decoded
    """
    text = response_text.strip()

    if text.startswith("```"):
        lines = text.split("\n")
        if len(lines) >= 3:
            text = "\n".join(lines[1:-1]).strip()

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    # Look for the outermost object or array, whichever opens first
    spans = []
    for opener, closer in (("{", "}"), ("[", "]")):
        start = text.find(opener)
        end = text.rfind(closer) + 1
        if start >= 0 and end > start:
            spans.append((start, end))

    for start, end in sorted(spans):
        try:
            return json.loads(text[start:end])
        except json.JSONDecodeError:
            continue

    raise ValueError("Failed to parse JSON from LLM response")
