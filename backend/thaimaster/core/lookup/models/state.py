"""Pipeline state models.

Defines the lookup state machine and the snapshot that observers receive.
State and result always travel together in one PipelineSnapshot.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field

from .result import TranslationResult


class PipelineState(str, Enum):
    """Lookup pipeline states."""

    IDLE = "IDLE"
    LOADING = "LOADING"  # Quick translation in flight
    PARTIAL_SUCCESS = "PARTIAL_SUCCESS"  # Coarse result shown, analysis in flight
    SUCCESS = "SUCCESS"  # Analysis shown, enrichment may still be running
    ERROR = "ERROR"


class PipelineStage(str, Enum):
    """The three sequential remote lookups."""

    TRANSLATE = "translate"
    ANALYZE = "analyze"
    ENRICH = "enrich"


# Every state may go back to LOADING through a new submission.
# SUCCESS -> SUCCESS is the synonym patch.
TRANSITIONS: Dict[PipelineState, FrozenSet[PipelineState]] = {
    PipelineState.IDLE: frozenset({PipelineState.LOADING}),
    PipelineState.LOADING: frozenset(
        {PipelineState.LOADING, PipelineState.PARTIAL_SUCCESS, PipelineState.ERROR}
    ),
    PipelineState.PARTIAL_SUCCESS: frozenset(
        {PipelineState.LOADING, PipelineState.SUCCESS, PipelineState.ERROR}
    ),
    PipelineState.SUCCESS: frozenset({PipelineState.LOADING, PipelineState.SUCCESS}),
    PipelineState.ERROR: frozenset({PipelineState.LOADING}),
}


def can_transition(current: PipelineState, target: PipelineState) -> bool:
    """Check a transition against the table."""
    return target in TRANSITIONS[current]


class PipelineSnapshot(BaseModel):
    """Observable (state, result) pair published by the pipeline."""

    model_config = ConfigDict(frozen=True)

    query_id: int = Field(default=0, description="Sequence number of the query, 0 before any")
    query: Optional[str] = Field(default=None, description="Active query text")
    state: PipelineState = Field(default=PipelineState.IDLE)
    result: Optional[TranslationResult] = Field(default=None)
    error: Optional[str] = Field(default=None, description="User-facing failure message")
