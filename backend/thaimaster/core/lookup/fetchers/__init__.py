"""Remote collaborators for the three lookup stages."""

from .analyzer import LLMLinguisticAnalyzer
from .base import CoarseTranslator, LinguisticAnalyzer, SynonymEnricher
from .google_translate import GoogleTranslateClient, GoogleTranslateError
from .quick import QuickTranslator
from .synonyms import LLMSynonymEnricher

__all__ = [
    "CoarseTranslator",
    "LinguisticAnalyzer",
    "SynonymEnricher",
    "GoogleTranslateClient",
    "GoogleTranslateError",
    "QuickTranslator",
    "LLMLinguisticAnalyzer",
    "LLMSynonymEnricher",
]
