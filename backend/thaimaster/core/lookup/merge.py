"""Merge rules for stage outputs."""

from typing import Dict, List

from .models import Segment, SynonymEntry


def merge_synonyms(segments: List[Segment], entries: List[SynonymEntry]) -> List[Segment]:
    """Attach synonyms to segments by literal Thai text.

    Every segment whose text matches an entry receives that entry's list,
    so duplicate segments share the same synonyms. Segments without a
    matching entry keep ``synonyms`` unset. When the response names the
    same word twice, the first entry wins.
    """
    by_word: Dict[str, List[str]] = {}
    for entry in entries:
        by_word.setdefault(entry.word, entry.synonyms)

    merged = []
    for segment in segments:
        if segment.text in by_word:
            segment = segment.model_copy(update={"synonyms": list(by_word[segment.text])})
        merged.append(segment)
    return merged
