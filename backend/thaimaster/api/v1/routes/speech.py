"""Pronunciation audio routes."""

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from thaimaster.core.speech import build_tts_url, speech_language

router = APIRouter()


class SpeechResponse(BaseModel):
    """Where to fetch pronunciation audio."""
    text: str
    language: str
    url: str


@router.get("/speech")
async def get_speech(text: str = Query(..., description="Thai or English text")) -> SpeechResponse:
    """Get the TTS audio URL for a word or sentence."""
    try:
        url = build_tts_url(text)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return SpeechResponse(text=text.strip(), language=speech_language(text), url=url)
