"""Per-client lookup pipelines.

Each client (browser tab, CLI, ...) has its own active query, so each gets
its own LookupPipeline. Least recently used sessions are closed once the
registry is full.
"""

import asyncio
import logging
from collections import OrderedDict
from typing import Callable, Optional

from .pipeline import LookupPipeline, LookupPipelineFactory

logger = logging.getLogger(__name__)

DEFAULT_SESSION_ID = "default"


class LookupSessionRegistry:
    """Lazily creates and caches one pipeline per session id."""

    def __init__(
        self,
        factory: Optional[Callable[[], LookupPipeline]] = None,
        max_sessions: int = 256,
    ):
        self._factory = factory or LookupPipelineFactory.create
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, LookupPipeline]" = OrderedDict()
        self._closing: set[asyncio.Task] = set()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def get(self, session_id: Optional[str] = None) -> LookupPipeline:
        """Get the pipeline for a session, creating it on first use."""
        session_id = session_id or DEFAULT_SESSION_ID

        pipeline = self._sessions.get(session_id)
        if pipeline is not None:
            self._sessions.move_to_end(session_id)
            return pipeline

        pipeline = self._factory()
        self._sessions[session_id] = pipeline
        logger.debug(f"Created lookup session {session_id!r}")

        while len(self._sessions) > self.max_sessions:
            evicted_id, evicted = self._sessions.popitem(last=False)
            logger.info(f"Evicting lookup session {evicted_id!r}")
            task = asyncio.ensure_future(evicted.aclose())
            self._closing.add(task)
            task.add_done_callback(self._on_close_done)

        return pipeline

    async def aclose(self):
        """Close every session's outstanding work."""
        sessions = list(self._sessions.values())
        self._sessions.clear()
        for pipeline in sessions:
            await pipeline.aclose()
        if self._closing:
            await asyncio.gather(*list(self._closing), return_exceptions=True)

    def _on_close_done(self, task: asyncio.Task):
        self._closing.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Closing evicted lookup session failed: {exc}", exc_info=exc)
