"""Vocabulary blob storage.

The whole vocabulary lives in one JSON file:

data/
└── storage.json    # {"vocabulary": [...], "folders": [...]}
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from thaimaster.config import settings

from .models import VocabData

logger = logging.getLogger(__name__)


class VocabStorageError(Exception):
    """The vocabulary file could not be read or written."""


class VocabStorage:
    """Read and write the vocabulary blob."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else settings.vocab_file

    def ensure(self):
        """Create the data directory and an empty blob if missing."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.save(VocabData())
            logger.info(f"Initialized vocabulary storage at {self.path}")

    def load(self) -> VocabData:
        """Load the blob, creating an empty one on first use.

        Raises:
            VocabStorageError: If the file exists but cannot be parsed
        """
        self.ensure()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            return VocabData.model_validate(raw)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Error reading vocabulary data: {e}")
            raise VocabStorageError(f"Failed to read data: {e}") from e

    def save(self, data: VocabData):
        """Write the blob atomically.

        Raises:
            VocabStorageError: If the file cannot be written
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data.model_dump(mode="json"), f, indent=2, ensure_ascii=False)
            tmp_path.replace(self.path)
        except OSError as e:
            logger.error(f"Error writing vocabulary data: {e}")
            raise VocabStorageError(f"Failed to save data: {e}") from e
