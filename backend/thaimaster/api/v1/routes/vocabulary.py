"""Vocabulary (flashcards and folders) API routes."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from thaimaster.api.dependencies import Vocabulary
from thaimaster.core.lookup import Segment, TranslationResult
from thaimaster.core.vocab import (
    CardNotFound,
    FolderNotFound,
    VocabCard,
    VocabData,
    VocabFolder,
    VocabStorageError,
    card_from_result,
    card_from_segment,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class CardFromSegmentRequest(BaseModel):
    """Save one word of the breakdown."""
    segment: Segment
    folder_id: Optional[str] = None


class CardFromResultRequest(BaseModel):
    """Save the whole lookup as a card."""
    result: TranslationResult
    folder_id: Optional[str] = None


class AddCardResponse(BaseModel):
    """Result of saving a card."""
    saved: bool  # False when the Thai text was already saved
    card: Optional[VocabCard] = None


class CreateFolderRequest(BaseModel):
    """Request to create a folder."""
    name: str


class DeleteFolderResponse(BaseModel):
    """Result of deleting a folder."""
    folder_id: str
    cards_moved: int


class ImportResponse(BaseModel):
    """Result of an import merge."""
    cards_added: int
    folders_added: int


def _storage_error(e: VocabStorageError) -> HTTPException:
    return HTTPException(status_code=500, detail=str(e))


@router.get("/data")
async def get_data(vocabulary: Vocabulary) -> VocabData:
    """Get all cards and folders."""
    try:
        return vocabulary.get_data()
    except VocabStorageError as e:
        raise _storage_error(e)


@router.put("/data")
async def replace_data(data: VocabData, vocabulary: Vocabulary) -> VocabData:
    """Replace the whole vocabulary blob."""
    try:
        return vocabulary.replace_data(data)
    except VocabStorageError as e:
        raise _storage_error(e)


@router.get("/data/export")
async def export_data(vocabulary: Vocabulary):
    """Download the vocabulary as a JSON file."""
    data = vocabulary.export_data()
    return JSONResponse(
        content=data.model_dump(mode="json"),
        headers={"Content-Disposition": 'attachment; filename="thai_vocab_backup.json"'},
    )


@router.post("/data/import")
async def import_data(data: VocabData, vocabulary: Vocabulary) -> ImportResponse:
    """Merge cards and folders whose ids are not present yet."""
    summary = vocabulary.import_data(data)
    return ImportResponse(
        cards_added=summary.cards_added,
        folders_added=summary.folders_added,
    )


def _add(vocabulary, card: VocabCard) -> AddCardResponse:
    try:
        stored = vocabulary.add_card(card)
    except FolderNotFound:
        raise HTTPException(status_code=404, detail="Folder not found")
    return AddCardResponse(saved=stored is not None, card=stored)


@router.post("/cards")
async def add_card(card: VocabCard, vocabulary: Vocabulary) -> AddCardResponse:
    """Save a card unless its Thai text is already saved."""
    if not card.thai.strip():
        raise HTTPException(status_code=400, detail="Card needs Thai text")
    return _add(vocabulary, card)


@router.post("/cards/from-segment")
async def add_card_from_segment(
    request: CardFromSegmentRequest,
    vocabulary: Vocabulary,
) -> AddCardResponse:
    """Save one word of a lookup breakdown."""
    return _add(vocabulary, card_from_segment(request.segment, request.folder_id))


@router.post("/cards/from-result")
async def add_card_from_result(
    request: CardFromResultRequest,
    vocabulary: Vocabulary,
) -> AddCardResponse:
    """Save the main lookup result, examples included."""
    return _add(vocabulary, card_from_result(request.result, request.folder_id))


@router.put("/cards/{card_id}")
async def update_card(card_id: str, card: VocabCard, vocabulary: Vocabulary) -> VocabCard:
    """Update a card or move it to another folder."""
    if card.id != card_id:
        raise HTTPException(status_code=400, detail="Card id does not match path")
    try:
        return vocabulary.update_card(card)
    except CardNotFound:
        raise HTTPException(status_code=404, detail="Card not found")
    except FolderNotFound:
        raise HTTPException(status_code=404, detail="Folder not found")


@router.delete("/cards/{card_id}")
async def delete_card(card_id: str, vocabulary: Vocabulary):
    """Delete a card."""
    try:
        vocabulary.delete_card(card_id)
    except CardNotFound:
        raise HTTPException(status_code=404, detail="Card not found")
    return {"success": True}


@router.post("/folders")
async def create_folder(request: CreateFolderRequest, vocabulary: Vocabulary) -> VocabFolder:
    """Create a folder."""
    try:
        return vocabulary.create_folder(request.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/folders/{folder_id}")
async def delete_folder(folder_id: str, vocabulary: Vocabulary) -> DeleteFolderResponse:
    """Delete a folder; its cards move to General."""
    try:
        moved = vocabulary.delete_folder(folder_id)
    except FolderNotFound:
        raise HTTPException(status_code=404, detail="Folder not found")

    logger.info(f"Deleted folder {folder_id}, moved {moved} cards to General")
    return DeleteFolderResponse(folder_id=folder_id, cards_moved=moved)
