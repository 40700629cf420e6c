"""Tests for per-client lookup sessions."""

import pytest

from thaimaster.core.lookup import (
    DEFAULT_SESSION_ID,
    LookupPipeline,
    LookupSessionRegistry,
    PipelineState,
    StageTimeouts,
)

from conftest import GatedAnalyzer, GatedEnricher, GatedTranslator, settle


def gated_pipeline() -> LookupPipeline:
    return LookupPipeline(
        GatedTranslator(),
        GatedAnalyzer(),
        GatedEnricher(),
        timeouts=StageTimeouts(translate=None, analyze=None, enrich=None),
    )


@pytest.mark.asyncio
async def test_sessions_are_created_once_per_id():
    registry = LookupSessionRegistry(factory=gated_pipeline)

    assert registry.get("tab-1") is registry.get("tab-1")
    assert registry.get(None) is registry.get(DEFAULT_SESSION_ID)
    assert registry.get("tab-1") is not registry.get("tab-2")

    await registry.aclose()
    assert len(registry) == 0


@pytest.mark.asyncio
async def test_evicted_session_is_closed():
    registry = LookupSessionRegistry(factory=gated_pipeline, max_sessions=2)
    oldest = registry.get("a")
    task = oldest.submit("hello")
    registry.get("b")
    registry.get("a")

    registry.get("c")
    await settle()

    assert "b" not in registry
    assert "a" in registry and "c" in registry
    assert not task.cancelled()

    registry.get("d")
    await settle()

    assert "a" not in registry
    assert task.cancelled()
    assert oldest.state == PipelineState.LOADING

    await registry.aclose()
