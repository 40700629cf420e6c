"""Quiz API routes."""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from thaimaster.api.dependencies import QuizSessions, Vocabulary
from thaimaster.core.vocab import (
    MIN_QUIZ_CARDS,
    QuizGenerator,
    QuizQuestion,
    QuizSession,
    select_active_cards,
)

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_ENOUGH_CARDS = f"Add at least {MIN_QUIZ_CARDS} words to the selected folders to start a quiz"


class QuizQuestionRequest(BaseModel):
    """Request for the next question of a round."""
    folder_ids: List[str]  # "GENERAL" selects cards without a folder
    used_card_ids: List[str] = []


class StartQuizRequest(BaseModel):
    """Request to start a scored round."""
    folder_ids: List[str]


class AnswerRequest(BaseModel):
    """The option the user picked."""
    choice: str


class QuizSessionResponse(BaseModel):
    """Progress of a scored round."""
    session_id: str
    score: int
    answered: int
    length: int
    finished: bool
    question: Optional[QuizQuestion] = None


class AnswerResponse(QuizSessionResponse):
    """Progress after an answer, with the verdict."""
    correct: bool
    correct_answer: str


def _progress(session: QuizSession) -> dict:
    return {
        "session_id": session.id,
        "score": session.score,
        "answered": session.answered,
        "length": session.length,
        "finished": session.finished,
        "question": session.current,
    }


@router.post("/quiz/question")
async def next_question(
    request: QuizQuestionRequest,
    vocabulary: Vocabulary,
) -> QuizQuestion:
    """Draw a multiple-choice question from the selected folders."""
    data = vocabulary.get_data()
    cards = select_active_cards(data.vocabulary, request.folder_ids)

    generator = QuizGenerator(cards, used_card_ids=request.used_card_ids)
    question = generator.next_question()
    if question is None:
        raise HTTPException(status_code=409, detail=NOT_ENOUGH_CARDS)
    return question


@router.post("/quiz/sessions")
async def start_session(
    request: StartQuizRequest,
    vocabulary: Vocabulary,
    sessions: QuizSessions,
) -> QuizSessionResponse:
    """Start a ten-question round over the selected folders."""
    cards = select_active_cards(vocabulary.get_data().vocabulary, request.folder_ids)
    session = QuizSession(QuizGenerator(cards))
    if session.start() is None:
        raise HTTPException(status_code=409, detail=NOT_ENOUGH_CARDS)

    sessions.add(session)
    logger.info(f"Started quiz session {session.id} over {len(cards)} cards")
    return QuizSessionResponse(**_progress(session))


@router.get("/quiz/sessions/{session_id}")
async def get_session(session_id: str, sessions: QuizSessions) -> QuizSessionResponse:
    """Get score and the open question of a round."""
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Quiz session not found")
    return QuizSessionResponse(**_progress(session))


@router.post("/quiz/sessions/{session_id}/answer")
async def answer_question(
    session_id: str,
    request: AnswerRequest,
    sessions: QuizSessions,
) -> AnswerResponse:
    """Answer the open question and advance the round."""
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Quiz session not found")
    if session.current is None:
        raise HTTPException(status_code=409, detail="Quiz round is finished")

    correct_answer = session.current.correct_answer
    correct = session.answer(request.choice)
    if session.finished:
        logger.info(f"Quiz session {session_id} finished: {session.score}/{session.length}")

    return AnswerResponse(
        correct=correct,
        correct_answer=correct_answer,
        **_progress(session),
    )
