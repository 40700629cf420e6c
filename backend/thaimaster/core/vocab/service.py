"""Flashcard and folder operations on the vocabulary blob."""

import logging
from dataclasses import dataclass
from typing import List, Optional

from thaimaster.core.lookup.models import Segment, TranslationResult
from thaimaster.utils.text import contains_thai

from .models import VocabCard, VocabData, VocabFolder
from .storage import VocabStorage

logger = logging.getLogger(__name__)


class CardNotFound(LookupError):
    """No card with the given id."""


class FolderNotFound(LookupError):
    """No folder with the given id."""


@dataclass
class ImportSummary:
    """Outcome of an import merge."""

    cards_added: int
    folders_added: int


def card_from_segment(segment: Segment, folder_id: Optional[str] = None) -> VocabCard:
    """Build a flashcard from one word of the breakdown."""
    return VocabCard(
        folder_id=folder_id,
        thai=segment.text,
        transliteration=segment.transliteration,
        english=segment.gloss,
        part_of_speech=segment.part_of_speech or None,
    )


def card_from_result(result: TranslationResult, folder_id: Optional[str] = None) -> VocabCard:
    """Build a flashcard for the whole lookup.

    Thai input puts the query on the Thai side; otherwise the translation is.
    """
    thai_input = contains_thai(result.original_text)
    return VocabCard(
        folder_id=folder_id,
        thai=result.original_text if thai_input else result.translated_text,
        english=result.translated_text if thai_input else result.original_text,
        transliteration=result.transliteration,
        example_thai=result.example_sentence_thai or None,
        example_english=result.example_sentence_english or None,
    )


class VocabService:
    """CRUD over cards and folders, persisted after every change."""

    def __init__(self, storage: Optional[VocabStorage] = None):
        self.storage = storage or VocabStorage()

    def get_data(self) -> VocabData:
        return self.storage.load()

    def replace_data(self, data: VocabData) -> VocabData:
        self.storage.save(data)
        return data

    def is_saved(self, thai: str, data: Optional[VocabData] = None) -> bool:
        """Check whether a card with the same Thai text exists."""
        if not thai or not thai.strip():
            return False
        data = data or self.storage.load()
        target = thai.strip()
        return any(card.thai.strip() == target for card in data.vocabulary)

    # -------------------------------------------------------------------------
    # Cards
    # -------------------------------------------------------------------------

    def add_card(self, card: VocabCard) -> Optional[VocabCard]:
        """Add a card unless its Thai text is already saved.

        Returns:
            The stored card, or None if it was a duplicate
        """
        data = self.storage.load()
        if self.is_saved(card.thai, data):
            logger.debug(f"Card {card.thai!r} already saved")
            return None
        if card.folder_id is not None:
            self._require_folder(data, card.folder_id)

        data.vocabulary.append(card)
        self.storage.save(data)
        return card

    def update_card(self, card: VocabCard) -> VocabCard:
        """Replace a card by id (also used to move it between folders)."""
        data = self.storage.load()
        if card.folder_id is not None:
            self._require_folder(data, card.folder_id)

        for index, existing in enumerate(data.vocabulary):
            if existing.id == card.id:
                data.vocabulary[index] = card
                self.storage.save(data)
                return card
        raise CardNotFound(card.id)

    def delete_card(self, card_id: str):
        data = self.storage.load()
        remaining = [c for c in data.vocabulary if c.id != card_id]
        if len(remaining) == len(data.vocabulary):
            raise CardNotFound(card_id)
        data.vocabulary = remaining
        self.storage.save(data)

    def cards_in_folder(self, folder_id: Optional[str]) -> List[VocabCard]:
        return [c for c in self.storage.load().vocabulary if c.folder_id == folder_id]

    # -------------------------------------------------------------------------
    # Folders
    # -------------------------------------------------------------------------

    def create_folder(self, name: str) -> VocabFolder:
        name = name.strip()
        if not name:
            raise ValueError("Folder name must not be empty")

        data = self.storage.load()
        folder = VocabFolder(name=name)
        data.folders.append(folder)
        self.storage.save(data)
        return folder

    def delete_folder(self, folder_id: str) -> int:
        """Delete a folder; its cards move to General.

        Returns:
            Number of cards moved
        """
        data = self.storage.load()
        self._require_folder(data, folder_id)

        data.folders = [f for f in data.folders if f.id != folder_id]
        moved = 0
        for card in data.vocabulary:
            if card.folder_id == folder_id:
                card.folder_id = None
                moved += 1
        self.storage.save(data)
        return moved

    # -------------------------------------------------------------------------
    # Import / export
    # -------------------------------------------------------------------------

    def export_data(self) -> VocabData:
        return self.storage.load()

    def import_data(self, imported: VocabData) -> ImportSummary:
        """Merge imported cards and folders whose ids are not present yet."""
        data = self.storage.load()

        card_ids = {c.id for c in data.vocabulary}
        new_cards = [c for c in imported.vocabulary if c.id not in card_ids]
        folder_ids = {f.id for f in data.folders}
        new_folders = [f for f in imported.folders if f.id not in folder_ids]

        data.vocabulary.extend(new_cards)
        data.folders.extend(new_folders)
        self.storage.save(data)

        logger.info(f"Imported {len(new_cards)} new cards, {len(new_folders)} new folders")
        return ImportSummary(cards_added=len(new_cards), folders_added=len(new_folders))

    @staticmethod
    def _require_folder(data: VocabData, folder_id: str):
        if not any(f.id == folder_id for f in data.folders):
            raise FolderNotFound(folder_id)
