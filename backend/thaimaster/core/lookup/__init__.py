"""Progressive Thai/English lookup.

This package provides the staleness-guarded lookup pipeline:
- QuickTranslator: coarse translation + transliteration (Google, LLM fallback)
- LLMLinguisticAnalyzer: word breakdown and an example sentence
- LLMSynonymEnricher: best-effort synonyms per word
- LookupPipeline: sequences the stages and publishes snapshots
"""

from .errors import (
    AnalysisUnavailable,
    EnrichmentUnavailable,
    InvalidTransition,
    LookupStageError,
    TranslationUnavailable,
)
from .merge import merge_synonyms
from .models import (
    CoarseTranslation,
    LinguisticAnalysis,
    PipelineSnapshot,
    PipelineStage,
    PipelineState,
    Segment,
    SynonymEntry,
    TranslationResult,
)
from .pipeline import LookupPipeline, LookupPipelineFactory, QueryTicket, StageTimeouts
from .sessions import DEFAULT_SESSION_ID, LookupSessionRegistry
from .tracker import LookupProgressTracker

__all__ = [
    # Errors
    "AnalysisUnavailable",
    "EnrichmentUnavailable",
    "InvalidTransition",
    "LookupStageError",
    "TranslationUnavailable",
    # Models
    "CoarseTranslation",
    "LinguisticAnalysis",
    "PipelineSnapshot",
    "PipelineStage",
    "PipelineState",
    "Segment",
    "SynonymEntry",
    "TranslationResult",
    # Pipeline
    "LookupPipeline",
    "LookupPipelineFactory",
    "QueryTicket",
    "StageTimeouts",
    "merge_synonyms",
    "LookupProgressTracker",
    "DEFAULT_SESSION_ID",
    "LookupSessionRegistry",
]
