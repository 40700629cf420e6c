"""Synonym enrichment stage (best effort)."""

import logging
from typing import Any, List, Optional

from thaimaster.core.llm import (
    JSON_OBJECT_FORMAT,
    LLMRuntimeConfig,
    UnifiedLLMGateway,
    parse_json_response,
    resolve_llm_config,
)

from ..errors import EnrichmentUnavailable
from ..models import Segment, SynonymEntry
from ..prompts import SYNONYMS_SYSTEM, SYNONYMS_USER
from .base import SynonymEnricher

logger = logging.getLogger(__name__)

MAX_SYNONYMS_PER_WORD = 3


class LLMSynonymEnricher(SynonymEnricher):
    """Asks the LLM for 2-3 synonyms per Thai word."""

    def __init__(self, llm_config: Optional[LLMRuntimeConfig] = None):
        self._llm_config = llm_config

    @property
    def llm_config(self) -> LLMRuntimeConfig:
        if self._llm_config is None:
            self._llm_config = resolve_llm_config(stage="synonyms")
        return self._llm_config

    async def fetch_synonyms(self, segments: List[Segment]) -> List[SynonymEntry]:
        if not segments:
            return []

        words = ", ".join(segment.text for segment in segments)

        try:
            response = await UnifiedLLMGateway.execute(
                system_prompt=SYNONYMS_SYSTEM,
                user_prompt=SYNONYMS_USER.format(words=words),
                config=self.llm_config,
                response_format=JSON_OBJECT_FORMAT,
            )
            parsed = parse_json_response(response.content or "[]")
            return self.parse_entries(parsed)
        except Exception as e:
            raise EnrichmentUnavailable("Synonyms are unavailable", detail=str(e)) from e

    @staticmethod
    def parse_entries(data: Any) -> List[SynonymEntry]:
        """Accept either a bare array or an object wrapping one.

        Raises:
            ValueError: If no entry list can be found
        """
        if isinstance(data, dict):
            data = data.get("synonyms", data.get("words"))
        if not isinstance(data, list):
            raise ValueError("Synonym response has no entry list")

        entries: List[SynonymEntry] = []
        for item in data:
            if not isinstance(item, dict) or not item.get("word"):
                continue
            synonyms = [s for s in item.get("synonyms") or [] if isinstance(s, str) and s]
            entries.append(
                SynonymEntry(word=item["word"], synonyms=synonyms[:MAX_SYNONYMS_PER_WORD])
            )
        return entries
