"""Lookup stage failures.

Failures are classified strictly by the stage that produced them.
"""

from typing import Optional

from .models import PipelineStage


class LookupStageError(Exception):
    """Base class for a failed lookup stage."""

    stage: PipelineStage

    def __init__(self, message: str, *, detail: Optional[str] = None):
        super().__init__(message)
        self.detail = detail


class TranslationUnavailable(LookupStageError):
    """Quick translation failed on every source. Fatal for the query."""

    stage = PipelineStage.TRANSLATE


class AnalysisUnavailable(LookupStageError):
    """Linguistic analysis failed. The coarse result stays visible."""

    stage = PipelineStage.ANALYZE


class EnrichmentUnavailable(LookupStageError):
    """Synonym enrichment failed. Never surfaced to the user."""

    stage = PipelineStage.ENRICH


STAGE_ERRORS = {
    PipelineStage.TRANSLATE: TranslationUnavailable,
    PipelineStage.ANALYZE: AnalysisUnavailable,
    PipelineStage.ENRICH: EnrichmentUnavailable,
}


class InvalidTransition(RuntimeError):
    """A state change outside the pipeline's transition table."""
