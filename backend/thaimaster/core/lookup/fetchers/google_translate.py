"""Google Translate web endpoint client.

The fast path of the quick translation stage. The endpoint returns a
nested array rather than an object:

    [[["translation part", "source part", "output romanization", "input romanization"], ...], ...]

Translation parts are concatenated; the romanization lives in the last part.
"""

import logging
from typing import Any, List, Optional

import httpx

from thaimaster.config import settings
from thaimaster.utils.text import contains_thai

from ..models import CoarseTranslation

logger = logging.getLogger(__name__)

TRANSLATION_FAILED = "Translation failed"


class GoogleTranslateError(Exception):
    """The fast translation endpoint was unreachable or returned junk."""


class GoogleTranslateClient:
    """Async client for the translate_a/single endpoint."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url or settings.google_translate_url
        self.timeout = timeout
        self._client = client

    def build_params(self, text: str) -> List[tuple]:
        """Build query params; dt is repeated, so a list of pairs is used."""
        target = "en" if contains_thai(text) else "th"
        return [
            ("client", "gtx"),
            ("sl", "auto"),
            ("tl", target),
            ("dt", "t"),   # Translation
            ("dt", "rm"),  # Romanization
            ("q", text),
        ]

    async def translate(self, text: str) -> CoarseTranslation:
        """Translate Thai to English or anything else to Thai.

        Raises:
            GoogleTranslateError: On transport, status or parse failure
        """
        params = self.build_params(text)
        headers = {"User-Agent": settings.http_user_agent}

        try:
            if self._client is not None:
                response = await self._client.get(self.base_url, params=params, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(self.base_url, params=params, headers=headers)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise GoogleTranslateError(f"Google Translate request failed: {e}") from e

        return self.parse_response(data, thai_input=contains_thai(text))

    @staticmethod
    def parse_response(data: Any, thai_input: bool) -> CoarseTranslation:
        """Extract translation and romanization from the nested array.

        Args:
            data: Decoded JSON body
            thai_input: Whether the query was Thai (romanize input, not output)

        Raises:
            GoogleTranslateError: If the body is not the expected shape
        """
        if not isinstance(data, list) or not data or not isinstance(data[0], list):
            raise GoogleTranslateError("Unexpected Google Translate response shape")

        parts = [part for part in data[0] if isinstance(part, list)]

        translated_text = "".join(
            part[0] for part in parts if part and isinstance(part[0], str) and part[0]
        )

        transliteration = ""
        if parts:
            last_part = parts[-1]
            # Thai input: romanization of the input; otherwise of the output
            index = 3 if thai_input else 2
            if len(last_part) > index and isinstance(last_part[index], str):
                transliteration = last_part[index]

        return CoarseTranslation(
            translated_text=translated_text or TRANSLATION_FAILED,
            transliteration=transliteration,
            source="google",
        )
