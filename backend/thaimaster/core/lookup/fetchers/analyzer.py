"""Linguistic analysis stage.

Asks the LLM for a word-by-word breakdown of the Thai side of a
translation pair and one example sentence.
"""

import logging
from typing import Any, Dict, List, Optional

from thaimaster.core.llm import (
    JSON_OBJECT_FORMAT,
    LLMRuntimeConfig,
    UnifiedLLMGateway,
    parse_json_response,
    resolve_llm_config,
)

from ..errors import AnalysisUnavailable
from ..models import LinguisticAnalysis, Segment
from ..prompts import ANALYSIS_SYSTEM, ANALYSIS_USER
from .base import LinguisticAnalyzer

logger = logging.getLogger(__name__)


class LLMLinguisticAnalyzer(LinguisticAnalyzer):
    """Word segmentation, gloss and part of speech via the LLM."""

    def __init__(self, llm_config: Optional[LLMRuntimeConfig] = None):
        self._llm_config = llm_config

    @property
    def llm_config(self) -> LLMRuntimeConfig:
        if self._llm_config is None:
            self._llm_config = resolve_llm_config(stage="analysis")
        return self._llm_config

    async def analyze(self, original: str, translated: str) -> LinguisticAnalysis:
        try:
            response = await UnifiedLLMGateway.execute(
                system_prompt=ANALYSIS_SYSTEM,
                user_prompt=ANALYSIS_USER.format(original=original, translated=translated),
                config=self.llm_config,
                response_format=JSON_OBJECT_FORMAT,
            )

            if not response.content.strip():
                return LinguisticAnalysis()

            parsed = parse_json_response(response.content)
            return self.parse_analysis(parsed)
        except Exception as e:
            raise AnalysisUnavailable(
                "Word breakdown is unavailable right now", detail=str(e)
            ) from e

    @staticmethod
    def parse_analysis(data: Any) -> LinguisticAnalysis:
        """Convert the model's JSON into a LinguisticAnalysis.

        Raises:
            ValueError: If the JSON is not an object with a segment list
        """
        if not isinstance(data, dict):
            raise ValueError("Analysis response is not a JSON object")

        raw_segments = data.get("segments") or []
        if not isinstance(raw_segments, list):
            raise ValueError("Analysis segments is not a list")

        segments: List[Segment] = []
        for raw in raw_segments:
            segment = _segment_from_raw(raw)
            if segment is not None:
                segments.append(segment)

        return LinguisticAnalysis(
            segments=segments,
            example_source=data.get("exampleSentenceThai") or "",
            example_target=data.get("exampleSentenceEnglish") or "",
        )


def _segment_from_raw(raw: Dict[str, Any]) -> Optional[Segment]:
    if not isinstance(raw, dict):
        return None
    text = (raw.get("thai") or "").strip()
    if not text:
        return None
    return Segment(
        text=text,
        transliteration=raw.get("transliteration") or "",
        gloss=raw.get("english") or "",
        part_of_speech=raw.get("partOfSpeech") or "",
    )
