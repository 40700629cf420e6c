"""Quick translation stage.

Tries the Google Translate endpoint first and falls back to the LLM when
it is unreachable.
"""

import logging
from typing import Optional

from thaimaster.core.llm import (
    JSON_OBJECT_FORMAT,
    LLMRuntimeConfig,
    UnifiedLLMGateway,
    parse_json_response,
    resolve_llm_config,
)
from thaimaster.utils.text import contains_thai

from ..errors import TranslationUnavailable
from ..models import CoarseTranslation
from ..prompts import QUICK_TRANSLATE_SYSTEM, QUICK_TRANSLATE_USER
from .base import CoarseTranslator
from .google_translate import GoogleTranslateClient, GoogleTranslateError

logger = logging.getLogger(__name__)


class QuickTranslator(CoarseTranslator):
    """Coarse translation from the fastest available source."""

    def __init__(
        self,
        google: Optional[GoogleTranslateClient] = None,
        llm_config: Optional[LLMRuntimeConfig] = None,
    ):
        self.google = google or GoogleTranslateClient()
        self._llm_config = llm_config

    @property
    def llm_config(self) -> LLMRuntimeConfig:
        if self._llm_config is None:
            self._llm_config = resolve_llm_config(stage="quick_translate")
        return self._llm_config

    async def translate(self, text: str) -> CoarseTranslation:
        try:
            return await self.google.translate(text)
        except GoogleTranslateError as e:
            logger.warning(f"Google Translate unavailable, falling back to LLM: {e}")

        try:
            return await self._translate_with_llm(text)
        except Exception as e:
            raise TranslationUnavailable(
                "Translation is unavailable right now", detail=str(e)
            ) from e

    async def _translate_with_llm(self, text: str) -> CoarseTranslation:
        target_language = "English" if contains_thai(text) else "Thai"

        response = await UnifiedLLMGateway.execute(
            system_prompt=QUICK_TRANSLATE_SYSTEM,
            user_prompt=QUICK_TRANSLATE_USER.format(
                target_language=target_language, text=text
            ),
            config=self.llm_config,
            response_format=JSON_OBJECT_FORMAT,
        )

        parsed = parse_json_response(response.content or "{}")
        if not isinstance(parsed, dict):
            raise ValueError("Quick translation response is not a JSON object")

        return CoarseTranslation(
            translated_text=parsed.get("translatedText") or "Translation Error",
            transliteration=parsed.get("transliteration") or "",
            source="llm",
        )
