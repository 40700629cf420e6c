"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from thaimaster.config import settings
from thaimaster.api.dependencies import lookup_sessions, vocab_service
from thaimaster.api.v1.routes import lookup, quiz, speech, vocabulary

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: make sure the vocabulary blob exists
    try:
        vocab_service.storage.ensure()
    except OSError as e:
        logger.error(f"Failed to prepare vocabulary storage: {e}")

    yield

    # Shutdown: drop in-flight lookups
    await lookup_sessions.aclose()


app = FastAPI(
    title=settings.app_name,
    description="Thai/English lookup, flashcards and quizzes",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(lookup.router, prefix="/api/v1", tags=["lookup"])
app.include_router(vocabulary.router, prefix="/api/v1", tags=["vocabulary"])
app.include_router(quiz.router, prefix="/api/v1", tags=["quiz"])
app.include_router(speech.router, prefix="/api/v1", tags=["speech"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Thai Master API", "version": "0.1.0"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
