"""Stage output models.

These are the contracts between the pipeline and its three collaborators.
"""

from typing import List

from pydantic import BaseModel, Field

from .result import Segment


class CoarseTranslation(BaseModel):
    """Output of the quick translation stage."""

    translated_text: str
    transliteration: str = ""
    source: str = Field(default="google", description="Which backend produced it")


class LinguisticAnalysis(BaseModel):
    """Output of the linguistic analysis stage."""

    segments: List[Segment] = Field(default_factory=list)
    example_source: str = Field(default="", description="Example sentence in Thai")
    example_target: str = Field(default="", description="Example sentence in English")


class SynonymEntry(BaseModel):
    """Synonyms for one word, keyed by its literal Thai text."""

    word: str
    synonyms: List[str] = Field(default_factory=list)
