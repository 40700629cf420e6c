"""Pronunciation audio via the Google Translate TTS endpoint."""

from typing import Optional
from urllib.parse import urlencode

from thaimaster.config import settings
from thaimaster.utils.text import contains_thai


def speech_language(text: str) -> str:
    """Thai voice for Thai script, English otherwise."""
    return "th" if contains_thai(text) else "en"


def build_tts_url(text: str, base_url: Optional[str] = None) -> str:
    """Build the TTS audio URL for text.

    Raises:
        ValueError: If text is empty
    """
    text = (text or "").strip()
    if not text:
        raise ValueError("Text to speak must not be empty")

    params = {
        "ie": "UTF-8",
        "q": text,
        "tl": speech_language(text),
        "client": "tw-ob",
    }
    return f"{base_url or settings.google_tts_url}?{urlencode(params)}"
