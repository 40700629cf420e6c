"""Tests for the lookup Server-Sent Events stream."""

import asyncio
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from thaimaster.api.v1.routes.lookup import stream_lookup
from thaimaster.core.lookup import LookupProgressTracker, PipelineSnapshot, SynonymEntry

from conftest import analysis, coarse, settle


def connected_request():
    return SimpleNamespace(is_disconnected=AsyncMock(return_value=False))


async def next_event(events) -> dict:
    chunk = await asyncio.wait_for(events.__anext__(), 1)
    assert chunk.startswith("data: ") and chunk.endswith("\n\n")
    return json.loads(chunk[len("data: "):])


@pytest.mark.asyncio
async def test_stream_sends_current_snapshot_then_every_publication(
    pipeline, translator, analyzer, enricher
):
    response = await stream_lookup(connected_request(), pipeline)
    events = response.body_iterator

    assert response.media_type == "text/event-stream"
    assert (await next_event(events))["state"] == "IDLE"

    pipeline.submit("eat")
    await settle()
    translator.gate.resolve(0, coarse("กิน", "gin"))
    await settle()
    analyzer.gate.resolve(0, analysis("กิน"))
    await settle()
    enricher.gate.resolve(0, [SynonymEntry(word="กิน", synonyms=["ทาน"])])
    await settle()

    received = [await next_event(events) for _ in range(4)]

    assert [e["state"] for e in received] == ["LOADING", "PARTIAL_SUCCESS", "SUCCESS", "SUCCESS"]
    assert received[1]["result"]["translated_text"] == "กิน"
    assert received[2]["result"]["segments"][0]["synonyms"] is None
    assert received[3]["result"]["segments"][0]["synonyms"] == ["ทาน"]

    await events.aclose()
    assert pipeline.tracker.subscriber_count == 0


@pytest.mark.asyncio
async def test_stream_stops_when_client_disconnects(pipeline):
    request = SimpleNamespace(is_disconnected=AsyncMock(return_value=True))
    response = await stream_lookup(request, pipeline)

    chunks = [chunk async for chunk in response.body_iterator]

    assert len(chunks) == 1
    assert pipeline.tracker.subscriber_count == 0


def test_lagging_subscriber_keeps_latest_snapshots():
    tracker = LookupProgressTracker(queue_size=2)
    queue = tracker.subscribe()

    for query_id in range(1, 5):
        tracker.broadcast(PipelineSnapshot(query_id=query_id))

    assert [queue.get_nowait().query_id, queue.get_nowait().query_id] == [3, 4]
    assert queue.empty()
