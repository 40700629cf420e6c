"""Utility modules."""

from .text import contains_thai, normalize_query, safe_truncate

__all__ = ["contains_thai", "normalize_query", "safe_truncate"]
