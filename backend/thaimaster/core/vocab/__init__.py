"""Flashcards, folders and quizzes."""

from .models import GENERAL_FOLDER_ID, VocabCard, VocabData, VocabFolder
from .quiz import (
    MIN_QUIZ_CARDS,
    QuestionType,
    QuizGenerator,
    QuizQuestion,
    QuizSession,
    QuizSessionStore,
    select_active_cards,
)
from .service import (
    CardNotFound,
    FolderNotFound,
    ImportSummary,
    VocabService,
    card_from_result,
    card_from_segment,
)
from .storage import VocabStorage, VocabStorageError

__all__ = [
    "GENERAL_FOLDER_ID",
    "VocabCard",
    "VocabData",
    "VocabFolder",
    "MIN_QUIZ_CARDS",
    "QuestionType",
    "QuizGenerator",
    "QuizQuestion",
    "QuizSession",
    "QuizSessionStore",
    "select_active_cards",
    "CardNotFound",
    "FolderNotFound",
    "ImportSummary",
    "VocabService",
    "card_from_result",
    "card_from_segment",
    "VocabStorage",
    "VocabStorageError",
]
