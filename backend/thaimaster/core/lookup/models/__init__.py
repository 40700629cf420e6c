"""Lookup pipeline data models.

This module provides structured data models for the lookup pipeline,
ensuring type safety and clear contracts between the stages.
"""

from .result import Segment, TranslationResult
from .stage import CoarseTranslation, LinguisticAnalysis, SynonymEntry
from .state import (
    TRANSITIONS,
    PipelineSnapshot,
    PipelineStage,
    PipelineState,
    can_transition,
)

__all__ = [
    # Result models
    "Segment",
    "TranslationResult",
    # Stage contracts
    "CoarseTranslation",
    "LinguisticAnalysis",
    "SynonymEntry",
    # State machine
    "TRANSITIONS",
    "PipelineSnapshot",
    "PipelineStage",
    "PipelineState",
    "can_transition",
]
