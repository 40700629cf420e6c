"""API dependencies for lookup sessions and vocabulary storage."""

import logging
from typing import Annotated, Optional

from fastapi import Depends, Header

from thaimaster.core.lookup import DEFAULT_SESSION_ID, LookupPipeline, LookupSessionRegistry
from thaimaster.core.vocab import QuizSessionStore, VocabService

logger = logging.getLogger(__name__)

# Process-wide instances, replaced through dependency_overrides in tests
lookup_sessions = LookupSessionRegistry()
vocab_service = VocabService()
quiz_sessions = QuizSessionStore()


def get_session_registry() -> LookupSessionRegistry:
    return lookup_sessions


def get_vocab_service() -> VocabService:
    return vocab_service


def get_quiz_sessions() -> QuizSessionStore:
    return quiz_sessions


async def get_lookup_pipeline(
    registry: Annotated[LookupSessionRegistry, Depends(get_session_registry)],
    x_session_id: Annotated[Optional[str], Header(alias="X-Session-Id")] = None,
) -> LookupPipeline:
    """Resolve the caller's pipeline from the X-Session-Id header."""
    return registry.get(x_session_id or DEFAULT_SESSION_ID)


SessionPipeline = Annotated[LookupPipeline, Depends(get_lookup_pipeline)]
Vocabulary = Annotated[VocabService, Depends(get_vocab_service)]
QuizSessions = Annotated[QuizSessionStore, Depends(get_quiz_sessions)]
