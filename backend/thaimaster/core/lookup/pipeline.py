"""Progressive lookup pipeline.

This module provides the LookupPipeline class that runs the three lookup
stages for one query:

    QuickTranslator -> LinguisticAnalyzer -> SynonymEnricher (background)

and publishes one evolving (state, result) snapshot as they complete.

Every submission is stamped with a sequence number. The number travels
with each stage continuation and is compared with the active one right
before publishing; a mismatch means the user has moved on and the
outcome is dropped, including failures. In-flight calls are not
cancelled, their results are ignored.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Optional

from thaimaster.config import Settings, settings as default_settings
from thaimaster.utils.text import normalize_query, safe_truncate

from .errors import (
    STAGE_ERRORS,
    AnalysisUnavailable,
    EnrichmentUnavailable,
    InvalidTransition,
    LookupStageError,
    TranslationUnavailable,
)
from .fetchers import (
    CoarseTranslator,
    LinguisticAnalyzer,
    LLMLinguisticAnalyzer,
    LLMSynonymEnricher,
    QuickTranslator,
    SynonymEnricher,
)
from .merge import merge_synonyms
from .models import (
    PipelineSnapshot,
    PipelineStage,
    PipelineState,
    TranslationResult,
    can_transition,
)
from .tracker import LookupProgressTracker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryTicket:
    """Identity of one accepted query, passed through every stage."""

    query_id: int
    text: str


@dataclass
class StageTimeouts:
    """Upper bound, in seconds, for each remote stage. None or 0 disables."""

    translate: Optional[float] = 10.0
    analyze: Optional[float] = 45.0
    enrich: Optional[float] = 30.0

    @classmethod
    def from_settings(cls, app_settings: Settings) -> "StageTimeouts":
        return cls(
            translate=app_settings.translate_timeout,
            analyze=app_settings.analysis_timeout,
            enrich=app_settings.enrichment_timeout,
        )

    def for_stage(self, stage: PipelineStage) -> Optional[float]:
        value = {
            PipelineStage.TRANSLATE: self.translate,
            PipelineStage.ANALYZE: self.analyze,
            PipelineStage.ENRICH: self.enrich,
        }[stage]
        return value or None


class LookupPipeline:
    """Orchestrates the progressive, staleness-guarded lookup.

    State machine:
    IDLE -> LOADING -> PARTIAL_SUCCESS -> SUCCESS
    LOADING -> ERROR (quick translation failed, nothing shown)
    PARTIAL_SUCCESS -> ERROR (analysis failed, coarse result kept)
    any state -> LOADING (new submission)

    Enrichment failures never change the state.

    All methods must be called from the event loop that runs the stages.
    """

    def __init__(
        self,
        translator: CoarseTranslator,
        analyzer: LinguisticAnalyzer,
        enricher: SynonymEnricher,
        *,
        timeouts: Optional[StageTimeouts] = None,
        synonym_limit: int = 8,
        tracker: Optional[LookupProgressTracker] = None,
    ):
        """Initialize the pipeline.

        Args:
            translator: Stage 1 collaborator
            analyzer: Stage 2 collaborator
            enricher: Stage 3 collaborator
            timeouts: Per-stage time bounds
            synonym_limit: Maximum segments sent to the enricher
            tracker: Snapshot broadcaster for observers
        """
        self.translator = translator
        self.analyzer = analyzer
        self.enricher = enricher
        self.timeouts = timeouts or StageTimeouts()
        self.synonym_limit = synonym_limit
        self.tracker = tracker or LookupProgressTracker()

        self._sequence = 0
        self._snapshot = PipelineSnapshot()
        self._tasks: set[asyncio.Task] = set()

    @property
    def snapshot(self) -> PipelineSnapshot:
        return self._snapshot

    @property
    def state(self) -> PipelineState:
        return self._snapshot.state

    @property
    def result(self) -> Optional[TranslationResult]:
        return self._snapshot.result

    @property
    def active_query_id(self) -> int:
        return self._sequence

    def submit(self, query: str) -> Optional[asyncio.Task]:
        """Start a lookup for query.

        Whitespace-only input is ignored. Otherwise the query becomes the
        active one, the previous result is cleared and the state moves to
        LOADING before this method returns.

        Returns:
            Task running the translate and analyze stages, or None if ignored
        """
        text = normalize_query(query)
        if not text:
            return None

        self._sequence += 1
        ticket = QueryTicket(query_id=self._sequence, text=text)
        logger.info(f"Lookup #{ticket.query_id} submitted: {safe_truncate(text, 60)!r}")

        self._publish(ticket, PipelineState.LOADING, None)
        return self._spawn(self._run(ticket))

    async def lookup(self, query: str) -> PipelineSnapshot:
        """Submit query and wait until its analysis stage has settled."""
        task = self.submit(query)
        if task is not None:
            await task
        return self._snapshot

    def is_current(self, ticket: QueryTicket) -> bool:
        return ticket.query_id == self._sequence

    async def wait_idle(self):
        """Wait for every outstanding stage task, background ones included."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self):
        """Cancel outstanding stage tasks."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _run(self, ticket: QueryTicket):
        try:
            coarse = await self._call_stage(
                PipelineStage.TRANSLATE, self.translator.translate(ticket.text)
            )
        except TranslationUnavailable as e:
            self._fail(ticket, e)
            return

        if not self._still_current(ticket, PipelineStage.TRANSLATE):
            return

        result = TranslationResult(
            original_text=ticket.text,
            translated_text=coarse.translated_text,
            transliteration=coarse.transliteration,
        )
        self._publish(ticket, PipelineState.PARTIAL_SUCCESS, result)

        try:
            analysis = await self._call_stage(
                PipelineStage.ANALYZE,
                self.analyzer.analyze(ticket.text, coarse.translated_text),
            )
        except AnalysisUnavailable as e:
            self._fail(ticket, e)
            return

        if not self._still_current(ticket, PipelineStage.ANALYZE):
            return

        result = self._snapshot.result.model_copy(
            update={
                "segments": analysis.segments,
                "example_sentence_thai": analysis.example_source,
                "example_sentence_english": analysis.example_target,
            }
        )
        self._publish(ticket, PipelineState.SUCCESS, result)
        logger.info(
            f"Lookup #{ticket.query_id} analyzed: {len(analysis.segments)} segments"
        )

        targets = analysis.segments[: self.synonym_limit]
        if targets:
            self._spawn(self._enrich(ticket, targets))

    async def _enrich(self, ticket: QueryTicket, segments: list):
        try:
            entries = await self._call_stage(
                PipelineStage.ENRICH, self.enricher.fetch_synonyms(segments)
            )
        except EnrichmentUnavailable as e:
            if self.is_current(ticket):
                logger.warning(f"Synonym enrichment failed for lookup #{ticket.query_id}: {e}")
            else:
                logger.debug(f"Synonym enrichment failed for stale lookup #{ticket.query_id}: {e}")
            return

        if not self._still_current(ticket, PipelineStage.ENRICH):
            return

        current = self._snapshot.result
        result = current.model_copy(
            update={"segments": merge_synonyms(current.segments, entries)}
        )
        self._publish(ticket, PipelineState.SUCCESS, result)

    async def _call_stage(self, stage: PipelineStage, awaitable: Awaitable[Any]) -> Any:
        """Await one remote stage, classifying any failure by stage."""
        error_class = STAGE_ERRORS[stage]
        timeout = self.timeouts.for_stage(stage)

        try:
            if timeout is None:
                return await awaitable
            return await asyncio.wait_for(awaitable, timeout)
        except error_class:
            raise
        except asyncio.TimeoutError as e:
            raise error_class(f"{stage.value} stage timed out after {timeout}s") from e
        except Exception as e:
            raise error_class(f"{stage.value} stage failed", detail=str(e)) from e

    def _fail(self, ticket: QueryTicket, error: LookupStageError):
        if not self._still_current(ticket, error.stage):
            return

        logger.warning(
            f"Lookup #{ticket.query_id} failed at {error.stage.value}: {error}"
            + (f" ({error.detail})" if error.detail else "")
        )
        # A coarse result already on screen stays there
        self._publish(ticket, PipelineState.ERROR, self._snapshot.result, error=str(error))

    def _still_current(self, ticket: QueryTicket, stage: PipelineStage) -> bool:
        if self.is_current(ticket):
            return True
        logger.debug(
            f"Dropping {stage.value} outcome of lookup #{ticket.query_id}; "
            f"lookup #{self._sequence} is active"
        )
        return False

    def _publish(
        self,
        ticket: QueryTicket,
        state: PipelineState,
        result: Optional[TranslationResult],
        error: Optional[str] = None,
    ):
        current = self._snapshot.state
        if not can_transition(current, state):
            raise InvalidTransition(f"Cannot move from {current.value} to {state.value}")

        self._snapshot = PipelineSnapshot(
            query_id=ticket.query_id,
            query=ticket.text,
            state=state,
            result=result,
            error=error,
        )
        self.tracker.broadcast(self._snapshot)

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task):
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Lookup task crashed: {exc}", exc_info=exc)


class LookupPipelineFactory:
    """Factory for creating lookup pipelines."""

    @staticmethod
    def create(app_settings: Optional[Settings] = None, **kwargs) -> LookupPipeline:
        """Create a pipeline wired to the Google/LLM collaborators.

        Args:
            app_settings: Settings to read timeouts and limits from
            **kwargs: Collaborator overrides (translator, analyzer, enricher, tracker)

        Returns:
            Configured LookupPipeline
        """
        app_settings = app_settings or default_settings
        return LookupPipeline(
            translator=kwargs.pop("translator", None) or QuickTranslator(),
            analyzer=kwargs.pop("analyzer", None) or LLMLinguisticAnalyzer(),
            enricher=kwargs.pop("enricher", None) or LLMSynonymEnricher(),
            timeouts=StageTimeouts.from_settings(app_settings),
            synonym_limit=app_settings.synonym_segment_limit,
            **kwargs,
        )
