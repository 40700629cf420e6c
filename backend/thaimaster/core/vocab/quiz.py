"""Multiple-choice quiz over saved flashcards."""

import logging
import random
from collections import OrderedDict
from enum import Enum
from typing import Iterable, List, Optional, Set

from pydantic import BaseModel

from .models import GENERAL_FOLDER_ID, VocabCard, new_id

logger = logging.getLogger(__name__)

MIN_QUIZ_CARDS = 4
OPTIONS_PER_QUESTION = 4
QUESTIONS_PER_SESSION = 10


class QuestionType(str, Enum):
    """Quiz direction."""

    THAI_TO_ENG = "THAI_TO_ENG"
    ENG_TO_THAI = "ENG_TO_THAI"


class QuizQuestion(BaseModel):
    """One multiple-choice question."""

    question: str
    correct_answer: str
    options: List[str]
    type: QuestionType
    card: Optional[VocabCard] = None


def select_active_cards(cards: Iterable[VocabCard], folder_ids: Iterable[str]) -> List[VocabCard]:
    """Filter cards to the selected folders.

    The GENERAL pseudo-folder selects cards that have no folder.
    Nothing selected means no cards.
    """
    selected = set(folder_ids)
    if not selected:
        return []

    active = []
    for card in cards:
        if card.folder_id is None:
            if GENERAL_FOLDER_ID in selected:
                active.append(card)
        elif card.folder_id in selected:
            active.append(card)
    return active


class QuizGenerator:
    """Draws questions, avoiding repeats until the pool is exhausted."""

    def __init__(
        self,
        cards: List[VocabCard],
        rng: Optional[random.Random] = None,
        used_card_ids: Optional[Iterable[str]] = None,
    ):
        self.cards = list(cards)
        self.rng = rng or random.Random()
        self.used_card_ids: Set[str] = set(used_card_ids or ())

    @property
    def can_play(self) -> bool:
        return len(self.cards) >= MIN_QUIZ_CARDS

    def next_question(self) -> Optional[QuizQuestion]:
        """Draw the next question, or None with fewer than four cards."""
        if not self.can_play:
            return None

        # Prefer unused cards; allow repeats once all were asked
        pool = [c for c in self.cards if c.id not in self.used_card_ids] or self.cards
        correct_card = self.rng.choice(pool)
        self.used_card_ids.add(correct_card.id)

        question_type = self.rng.choice([QuestionType.THAI_TO_ENG, QuestionType.ENG_TO_THAI])
        thai_to_eng = question_type == QuestionType.THAI_TO_ENG
        question_text = correct_card.thai if thai_to_eng else correct_card.english
        correct_answer = correct_card.english if thai_to_eng else correct_card.thai

        options = [correct_answer]
        distractors = [c for c in self.cards if c.id != correct_card.id]
        self.rng.shuffle(distractors)
        for card in distractors:
            if len(options) >= OPTIONS_PER_QUESTION:
                break
            value = card.english if thai_to_eng else card.thai
            if value and value.strip() and value not in options:
                options.append(value)

        self.rng.shuffle(options)
        return QuizQuestion(
            question=question_text,
            correct_answer=correct_answer,
            options=options,
            type=question_type,
            card=correct_card,
        )


class QuizSession:
    """A ten-question round with score keeping."""

    def __init__(self, generator: QuizGenerator, length: int = QUESTIONS_PER_SESSION):
        self.id = new_id()
        self.generator = generator
        self.length = length
        self.score = 0
        self.answered = 0
        self.current: Optional[QuizQuestion] = None

    @property
    def finished(self) -> bool:
        return self.answered >= self.length or (self.answered > 0 and self.current is None)

    def start(self) -> Optional[QuizQuestion]:
        self.generator.used_card_ids.clear()
        self.score = 0
        self.answered = 0
        self.current = self.generator.next_question()
        return self.current

    def answer(self, choice: str) -> bool:
        """Record an answer and advance to the next question.

        Raises:
            RuntimeError: If there is no open question
        """
        if self.current is None:
            raise RuntimeError("No open question")

        correct = choice == self.current.correct_answer
        if correct:
            self.score += 1
        self.answered += 1

        self.current = None if self.answered >= self.length else self.generator.next_question()
        return correct


class QuizSessionStore:
    """In-memory quiz rounds by id; the least recently used is dropped when full."""

    def __init__(self, max_sessions: int = 128):
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, QuizSession]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def add(self, session: QuizSession) -> QuizSession:
        self._sessions[session.id] = session
        while len(self._sessions) > self.max_sessions:
            dropped_id, _ = self._sessions.popitem(last=False)
            logger.debug(f"Dropped quiz session {dropped_id}")
        return session

    def get(self, session_id: str) -> Optional[QuizSession]:
        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions.move_to_end(session_id)
        return session

    def discard(self, session_id: str):
        self._sessions.pop(session_id, None)
