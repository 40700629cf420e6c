"""Lookup result models.

This module defines the evolving record the lookup pipeline publishes:
a coarse translation first, then the word breakdown, then synonyms.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class Segment(BaseModel):
    """One word of the segmented Thai text."""

    text: str = Field(..., description="Thai source text of the segment")
    transliteration: str = Field(default="", description="Romanized pronunciation")
    gloss: str = Field(default="", description="Literal English meaning first, context in parentheses")
    part_of_speech: str = Field(default="", description="Part of speech")

    # None means "not yet enriched", not "no synonyms"
    synonyms: Optional[List[str]] = Field(
        default=None, description="Synonyms, present once enrichment has completed"
    )

    @property
    def is_enriched(self) -> bool:
        return self.synonyms is not None


class TranslationResult(BaseModel):
    """Result shown for one lookup query.

    Replaced wholesale when the coarse translation arrives, then patched
    field by field by the analysis and enrichment stages.
    """

    original_text: str = Field(..., description="Query as submitted, trimmed")
    translated_text: str = Field(..., description="Coarse translation")
    transliteration: str = Field(default="", description="Romanization of the Thai side")

    segments: List[Segment] = Field(default_factory=list, description="Word breakdown")
    example_sentence_thai: str = Field(default="", description="Example sentence in Thai")
    example_sentence_english: str = Field(default="", description="Example sentence in English")

    @property
    def is_analyzed(self) -> bool:
        return bool(self.segments or self.example_sentence_thai)
