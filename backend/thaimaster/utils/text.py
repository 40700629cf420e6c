"""Text utilities for Thai/English input handling.

This module provides script detection and safe truncation helpers used
when choosing translation direction and when logging user input.
"""

import re
from typing import Optional

THAI_SCRIPT = re.compile(r"[\u0E00-\u0E7F]")


def contains_thai(text: Optional[str]) -> bool:
    """Check whether text contains any Thai-script character.

    Args:
        text: Text to inspect

    Returns:
        True if at least one character is in the Thai Unicode block
    """
    return bool(text) and THAI_SCRIPT.search(text) is not None


def normalize_query(text: Optional[str]) -> str:
    """Trim surrounding whitespace from a lookup query."""
    return (text or "").strip()


def safe_truncate(text: str, max_chars: int, suffix: str = "...") -> str:
    """Truncate text for log output, preferring a word boundary.

    Args:
        text: Text to truncate
        max_chars: Maximum characters (excluding suffix)
        suffix: Suffix to append if truncated (default "...")

    Returns:
        Truncated text with suffix if needed
    """
    if not text or len(text) <= max_chars:
        return text

    truncated = text[:max_chars]

    # Look back up to 20 characters for a good break point
    break_chars = {' ', '\n', '\t', ',', '.', '!', '?', ';', ':', '-'}
    for i in range(1, min(20, max_chars - 1) + 1):
        if truncated[-i] in break_chars:
            truncated = truncated[:-i].rstrip()
            break

    return truncated + suffix
