"""Lookup API routes."""

import asyncio
import logging

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from thaimaster.api.dependencies import SessionPipeline
from thaimaster.core.lookup import PipelineSnapshot

logger = logging.getLogger(__name__)

router = APIRouter()

# Keep-alive interval for idle event streams (seconds)
EVENT_KEEPALIVE = 15.0


class LookupRequest(BaseModel):
    """Request to look up a word or phrase."""
    query: str


@router.post("/lookup")
async def submit_lookup(
    request: LookupRequest,
    pipeline: SessionPipeline,
) -> PipelineSnapshot:
    """Submit a query.

    Returns immediately with the LOADING snapshot; later stages are
    delivered through GET /lookup or the event stream. A blank query
    leaves the current snapshot untouched.
    """
    pipeline.submit(request.query)
    return pipeline.snapshot


@router.get("/lookup")
async def get_lookup(pipeline: SessionPipeline) -> PipelineSnapshot:
    """Get the current (state, result) snapshot."""
    return pipeline.snapshot


@router.get("/lookup/events")
async def stream_lookup(request: Request, pipeline: SessionPipeline):
    """Stream snapshots as Server-Sent Events.

    The current snapshot is sent first, then every publication.
    """
    queue = pipeline.tracker.subscribe()

    async def event_generator():
        try:
            yield f"data: {pipeline.snapshot.model_dump_json()}\n\n"
            while True:
                if await request.is_disconnected():
                    break
                try:
                    snapshot = await asyncio.wait_for(queue.get(), EVENT_KEEPALIVE)
                except asyncio.TimeoutError:
                    yield ": keep-alive\n\n"
                    continue
                yield f"data: {snapshot.model_dump_json()}\n\n"
        finally:
            pipeline.tracker.unsubscribe(queue)

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        }
    )
