"""
Pydantic models shared across the quiz toolkit.

Import from here rather than reaching into submodules:
    from quiz_toolkit.models import Chunk, Session, AnswerResult
"""

from .document import Chunk, ChunkMetadata, Document, DocumentType, DocumentUpdate
from .generation import GeneratedQuestion, GeneratedQuestionSet
from .quiz import (
    Answer,
    Badge,
    BadgeKind,
    Question,
    QuestionDraft,
    QuestionKind,
    QuestionOptions,
    Session,
    SessionStatus,
)
from .result import (
    AnswerResult,
    DocumentSummary,
    IngestionResult,
    LearnerProgress,
    QuestionView,
    RetrievalResult,
    ScoredChunk,
    SessionSummary,
)

__all__ = [
    # Document
    "Chunk",
    "ChunkMetadata",
    "Document",
    "DocumentType",
    "DocumentUpdate",
    # Generation
    "GeneratedQuestion",
    "GeneratedQuestionSet",
    # Quiz
    "Answer",
    "Badge",
    "BadgeKind",
    "Question",
    "QuestionDraft",
    "QuestionKind",
    "QuestionOptions",
    "Session",
    "SessionStatus",
    # Result
    "AnswerResult",
    "DocumentSummary",
    "IngestionResult",
    "LearnerProgress",
    "QuestionView",
    "RetrievalResult",
    "ScoredChunk",
    "SessionSummary",
]
