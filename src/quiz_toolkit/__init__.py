"""
Quiz Toolkit: turn training documents into adaptive quizzes.

Quick start:
    from quiz_toolkit import QuizToolkit, InMemoryRepository

    toolkit = QuizToolkit(InMemoryRepository())
    result = toolkit.upload_document(club_id, "alice", "handbook.pdf", stream, title="Handbook")
    summary = toolkit.start_session("alice", result.document.id)

Stages, each usable on its own:
    - indexing/:    extract → chunk → embed → store
    - retrieval/:   semantic search over stored chunks
    - generation/:  quiz questions (LLM → template → default curriculum)
    - quiz/:        session state machine, scoring, badges, progress
"""

from quiz_toolkit.config import (
    ChunkingConfig,
    EmbeddingConfig,
    LLMConfig,
    QuizConfig,
    RetrieverConfig,
    StorageConfig,
    ToolkitConfig,
)
from quiz_toolkit.errors import (
    ConflictError,
    DuplicateRecordError,
    NotFoundError,
    PersistenceError,
    QuestionGenerationError,
    QuizToolkitError,
)
from quiz_toolkit.storage import InMemoryRepository, LocalFileStorage
from quiz_toolkit.toolkit import QuizToolkit

__all__ = [
    # Facade (public API)
    "QuizToolkit",
    "InMemoryRepository",
    "LocalFileStorage",
    # Config
    "ChunkingConfig",
    "EmbeddingConfig",
    "LLMConfig",
    "QuizConfig",
    "RetrieverConfig",
    "StorageConfig",
    "ToolkitConfig",
    # Errors
    "ConflictError",
    "DuplicateRecordError",
    "NotFoundError",
    "PersistenceError",
    "QuestionGenerationError",
    "QuizToolkitError",
]

__version__ = "0.1.0"
