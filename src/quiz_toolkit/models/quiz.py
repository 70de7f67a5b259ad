"""
Quiz models: sessions, questions, answers and badges.

A Session owns its Questions; Answers hang off (session, question)
pairs. Badges belong to a learner and optionally point at the document
that earned them.
"""

import json
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from quiz_toolkit.utils.helpers import utc_now


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------

class SessionStatus(str, Enum):
    """Lifecycle of a quiz attempt. Everything but IN_PROGRESS is terminal."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ABANDONED = "abandoned"
    PASSED = "passed"

    @property
    def is_terminal(self) -> bool:
        return self is not SessionStatus.IN_PROGRESS


class Session(BaseModel):
    """One learner's attempt at a document's quiz."""

    id: UUID = Field(default_factory=uuid4)
    learner_id: str
    document_id: UUID
    started_at: datetime = Field(default_factory=utc_now)
    ended_at: Optional[datetime] = None
    score: int = Field(default=0, ge=0, description="Running score")
    goal: int = Field(default=80, ge=0, description="Score needed to pass")
    status: SessionStatus = SessionStatus.IN_PROGRESS

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal


# ---------------------------------------------------------------------------
# Questions
# ---------------------------------------------------------------------------

class QuestionKind(str, Enum):
    MULTIPLE_CHOICE = "multiple_choice"
    TRUE_FALSE = "true_false"
    OPEN_TEXT = "open_text"
    NUMERIC = "numeric"


CHOICE_KINDS = (QuestionKind.MULTIPLE_CHOICE, QuestionKind.TRUE_FALSE)
TRUE_FALSE_LABELS = {"true", "false"}


class QuestionOptions(BaseModel):
    """
    Kind-tagged option payload.

    Choice kinds carry a label → text map ({"A": "...", "B": "..."} or
    {"true": "True", "false": "False"}); open-text and numeric questions
    carry nothing. The shape is checked when the object is built, so a
    malformed LLM payload fails here instead of at answer time.
    """

    model_config = ConfigDict(frozen=True)

    kind: QuestionKind
    choices: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_choices(self) -> "QuestionOptions":
        if self.kind == QuestionKind.MULTIPLE_CHOICE:
            if len(self.choices) < 2:
                raise ValueError("multiple_choice questions need at least two choices")
        elif self.kind == QuestionKind.TRUE_FALSE:
            if set(self.choices) != TRUE_FALSE_LABELS:
                raise ValueError("true_false questions need exactly the choices 'true' and 'false'")
        elif self.choices:
            raise ValueError(f"{self.kind.value} questions take no choices")
        return self

    @classmethod
    def true_false(cls) -> "QuestionOptions":
        return cls(kind=QuestionKind.TRUE_FALSE, choices={"true": "True", "false": "False"})

    def to_json(self) -> Optional[str]:
        """Serialized option set for storage; None when there are no choices."""
        return json.dumps(self.choices) if self.choices else None

    @classmethod
    def from_json(cls, kind: QuestionKind, raw: Optional[str]) -> "QuestionOptions":
        return cls(kind=kind, choices=json.loads(raw) if raw else {})


class QuestionDraft(BaseModel):
    """
    A generated question that is not attached to a session yet.

    Generation strategies produce drafts; the pipeline turns them into
    Questions once it knows the session and the chunk they cite.
    """

    text: str = Field(min_length=1, max_length=1000)
    options: QuestionOptions
    correct_answer: str = Field(min_length=1, max_length=500)
    explanation: Optional[str] = None
    difficulty: int = Field(default=1, ge=1, le=5)

    @property
    def kind(self) -> QuestionKind:
        return self.options.kind

    @model_validator(mode="after")
    def validate_correct_answer(self) -> "QuestionDraft":
        """Choice answers must name a label; numeric answers must be numbers."""
        if self.options.kind in CHOICE_KINDS and self.correct_answer not in self.options.choices:
            raise ValueError(
                f"correct_answer '{self.correct_answer}' is not one of "
                f"{sorted(self.options.choices)}"
            )
        if self.options.kind == QuestionKind.NUMERIC:
            try:
                float(self.correct_answer)
            except ValueError:
                raise ValueError(f"numeric correct_answer '{self.correct_answer}' is not a number")
        return self


class Question(QuestionDraft):
    """A persisted quiz question. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    session_id: UUID
    chunk_id: UUID = Field(description="Chunk the question was generated from")

    @classmethod
    def from_draft(cls, draft: QuestionDraft, session_id: UUID, chunk_id: UUID) -> "Question":
        return cls(session_id=session_id, chunk_id=chunk_id, **draft.model_dump())


# ---------------------------------------------------------------------------
# Answers and badges
# ---------------------------------------------------------------------------

class Answer(BaseModel):
    """A learner's answer. At most one per (session, question); never changed."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    session_id: UUID
    question_id: UUID
    text: str
    is_correct: bool
    latency_ms: int = Field(default=0, ge=0)
    answered_at: datetime = Field(default_factory=utc_now)


class BadgeKind(str, Enum):
    DOCUMENT_COMPLETED = "document_completed"
    EXPERT = "expert"
    LEADER = "leader"


class Badge(BaseModel):
    """An achievement. At most one per (learner, kind, document)."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    learner_id: str
    kind: BadgeKind
    document_id: Optional[UUID] = None
    awarded_at: datetime = Field(default_factory=utc_now)
    points: int = Field(default=0, ge=0)
