"""Abstract collaborator interfaces for the lookup pipeline."""

from abc import ABC, abstractmethod
from typing import List

from ..models import CoarseTranslation, LinguisticAnalysis, Segment, SynonymEntry


class CoarseTranslator(ABC):
    """Stage 1: fast coarse translation plus transliteration."""

    @abstractmethod
    async def translate(self, text: str) -> CoarseTranslation:
        """Translate text.

        Raises:
            TranslationUnavailable: If no source could translate the text
        """
        pass


class LinguisticAnalyzer(ABC):
    """Stage 2: word-segmented breakdown and one example sentence pair."""

    @abstractmethod
    async def analyze(self, original: str, translated: str) -> LinguisticAnalysis:
        """Analyze the Thai side of a translation pair.

        Raises:
            AnalysisUnavailable: On network or parse failure
        """
        pass


class SynonymEnricher(ABC):
    """Stage 3: best-effort synonyms per segment."""

    @abstractmethod
    async def fetch_synonyms(self, segments: List[Segment]) -> List[SynonymEntry]:
        """Fetch synonyms for the given segments.

        Raises:
            EnrichmentUnavailable: On network or parse failure
        """
        pass
