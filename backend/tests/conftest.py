"""
Pytest configuration and fixtures for Thai Master tests.

Provides shared fixtures for:
- Gated stage collaborators whose calls the test resolves by hand
- A lookup pipeline wired to those collaborators
- Vocabulary storage in a temporary directory
"""

import asyncio
from typing import Any, List, Tuple

import pytest
import pytest_asyncio

from thaimaster.core.lookup import (
    CoarseTranslation,
    LinguisticAnalysis,
    LookupPipeline,
    Segment,
    StageTimeouts,
    SynonymEntry,
)
from thaimaster.core.lookup.fetchers import CoarseTranslator, LinguisticAnalyzer, SynonymEnricher
from thaimaster.core.vocab import VocabService, VocabStorage


class PendingCalls:
    """Records calls and hands back futures that the test resolves."""

    def __init__(self):
        self.calls: List[Tuple[tuple, asyncio.Future]] = []

    async def __call__(self, *args: Any) -> Any:
        future = asyncio.get_running_loop().create_future()
        self.calls.append((args, future))
        return await future

    @property
    def args(self) -> List[tuple]:
        return [args for args, _ in self.calls]

    def resolve(self, index: int, value: Any):
        self.calls[index][1].set_result(value)

    def fail(self, index: int, exc: BaseException):
        self.calls[index][1].set_exception(exc)


class GatedTranslator(CoarseTranslator):
    def __init__(self):
        self.gate = PendingCalls()

    async def translate(self, text: str) -> CoarseTranslation:
        return await self.gate(text)


class GatedAnalyzer(LinguisticAnalyzer):
    def __init__(self):
        self.gate = PendingCalls()

    async def analyze(self, original: str, translated: str) -> LinguisticAnalysis:
        return await self.gate(original, translated)


class GatedEnricher(SynonymEnricher):
    def __init__(self):
        self.gate = PendingCalls()

    async def fetch_synonyms(self, segments: List[Segment]) -> List[SynonymEntry]:
        return await self.gate(segments)


async def settle(rounds: int = 20):
    """Let ready callbacks and freshly spawned tasks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


def coarse(translated: str, transliteration: str = "") -> CoarseTranslation:
    return CoarseTranslation(translated_text=translated, transliteration=transliteration)


def analysis(*words: str, example_source: str = "", example_target: str = "") -> LinguisticAnalysis:
    return LinguisticAnalysis(
        segments=[
            Segment(text=w, transliteration=f"{w}-tr", gloss=f"{w}-gloss", part_of_speech="noun")
            for w in words
        ],
        example_source=example_source,
        example_target=example_target,
    )


@pytest.fixture
def translator() -> GatedTranslator:
    return GatedTranslator()


@pytest.fixture
def analyzer() -> GatedAnalyzer:
    return GatedAnalyzer()


@pytest.fixture
def enricher() -> GatedEnricher:
    return GatedEnricher()


@pytest_asyncio.fixture
async def pipeline(translator, analyzer, enricher):
    """Pipeline with stage time bounds disabled."""
    pipeline = LookupPipeline(
        translator,
        analyzer,
        enricher,
        timeouts=StageTimeouts(translate=None, analyze=None, enrich=None),
    )
    yield pipeline
    await pipeline.aclose()


@pytest.fixture
def vocab_storage(tmp_path) -> VocabStorage:
    return VocabStorage(tmp_path / "data" / "storage.json")


@pytest.fixture
def vocab(vocab_storage) -> VocabService:
    return VocabService(vocab_storage)
