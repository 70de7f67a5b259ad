"""
Result models returned by the toolkit's operations.

These are the outputs callers see, and what the surrounding service layer
turns into HTTP responses.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .document import Chunk, Document
from .quiz import Badge, Question, Session, SessionStatus


# ---------------------------------------------------------------------------
# Ingestion
# ---------------------------------------------------------------------------

class IngestionResult(BaseModel):
    """
    Outcome of processing an uploaded document.

    no_content is set when extraction produced nothing usable; the
    document still exists but cannot be quizzed on until re-uploaded.
    """

    document: Document
    chunk_count: int = 0
    no_content: bool = False


class DocumentSummary(BaseModel):
    document: Document
    chunk_count: int = 0
    session_count: int = 0


# ---------------------------------------------------------------------------
# Retrieval
# ---------------------------------------------------------------------------

class ScoredChunk(BaseModel):
    """A chunk with its cosine similarity to the query."""

    chunk: Chunk
    score: float = Field(default=0.0, description="Cosine similarity (higher = more relevant)")
    rank: int = Field(default=0, description="Position in the result list")


class RetrievalResult(BaseModel):
    """
    Output of a semantic search.

    Bundles the ranked chunks with how the search was scoped, so callers
    can tell an empty corpus from a query with no matches.
    """

    chunks: list[ScoredChunk] = Field(default_factory=list)
    query_used: str
    scope: str = Field(description="'document:<id>' or 'tenant:<id>'")
    total_candidates: int = Field(default=0, description="Embedded chunks that were ranked")


# ---------------------------------------------------------------------------
# Quiz
# ---------------------------------------------------------------------------

class QuestionView(BaseModel):
    """A session question together with the learner's progress on it."""

    question: Question
    answered: bool = False
    answered_correctly: Optional[bool] = None


class SessionSummary(BaseModel):
    session: Session
    question_count: int = 0
    correct_count: int = 0

    @property
    def success_rate(self) -> float:
        """Percentage of the session's questions answered correctly."""
        if not self.question_count:
            return 0.0
        return self.correct_count / self.question_count * 100


class AnswerResult(BaseModel):
    """Everything a learner sees right after submitting an answer."""

    is_correct: bool
    correct_answer: str
    explanation: str
    points_earned: int
    total_score: int
    session_complete: bool
    goal_reached: bool
    status: SessionStatus
    badges_awarded: list[Badge] = Field(default_factory=list)


class LearnerProgress(BaseModel):
    learner_id: str
    total_points: int = 0
    badge_count: int = 0
    passed_sessions: int = 0
    in_progress_sessions: int = 0
    average_score: float = 0.0
    badges: list[Badge] = Field(default_factory=list)
