"""Vocabulary models.

Flashcards and folders as stored in the vocabulary blob. A card without
a folder_id belongs to the General folder.
"""

import time
import uuid
from typing import List, Optional

from pydantic import BaseModel, Field

GENERAL_FOLDER_ID = "GENERAL"


def _now_ms() -> int:
    return int(time.time() * 1000)


def new_id() -> str:
    return uuid.uuid4().hex


class VocabFolder(BaseModel):
    """A named group of flashcards."""

    id: str = Field(default_factory=new_id)
    name: str
    created_at: int = Field(default_factory=_now_ms, description="Epoch milliseconds")


class VocabCard(BaseModel):
    """A single flashcard."""

    id: str = Field(default_factory=new_id)
    folder_id: Optional[str] = Field(default=None, description="None means General")
    thai: str
    transliteration: str = ""
    english: str = ""
    part_of_speech: Optional[str] = None
    example_thai: Optional[str] = None
    example_english: Optional[str] = None
    date_added: int = Field(default_factory=_now_ms, description="Epoch milliseconds")


class VocabData(BaseModel):
    """The whole vocabulary blob."""

    vocabulary: List[VocabCard] = Field(default_factory=list)
    folders: List[VocabFolder] = Field(default_factory=list)
