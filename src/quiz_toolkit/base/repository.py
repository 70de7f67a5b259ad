"""
Abstract base class for the persistence collaborator.

The core never talks to a database directly: every read and write goes
through a BaseRepository. The interface is what the pipeline needs and
nothing more: point lookups, per-owner listings, and atomic bulk
inserts for chunks and questions.

Implementations must enforce two uniqueness constraints in storage:
    answers   one per (session_id, question_id)
    badges    one per (learner_id, kind, document_id)
and raise DuplicateRecordError when an insert would break them. The
services check first (answer_exists / badge_exists) to fail fast, but
the constraint is what actually prevents duplicates under concurrent
submissions.

Storage failures are reported as PersistenceError.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from quiz_toolkit.models.document import Chunk, Document
from quiz_toolkit.models.quiz import Answer, Badge, BadgeKind, Question, Session


class BaseRepository(ABC):
    """Contract for document, chunk, session, question, answer and badge storage."""

    # -- Documents ----------------------------------------------------------

    @abstractmethod
    def get_document(self, document_id: UUID) -> Optional[Document]:
        ...

    @abstractmethod
    def list_documents_by_tenant(self, tenant_id: UUID) -> list[Document]:
        ...

    @abstractmethod
    def get_documents_by_ids(self, document_ids: list[UUID]) -> list[Document]:
        """Return the documents that exist, in the order of document_ids."""
        ...

    @abstractmethod
    def create_document(self, document: Document) -> Document:
        ...

    @abstractmethod
    def update_document(self, document: Document) -> Document:
        ...

    @abstractmethod
    def delete_document(self, document_id: UUID) -> bool:
        ...

    # -- Chunks -------------------------------------------------------------

    @abstractmethod
    def get_chunks_by_document(self, document_id: UUID) -> list[Chunk]:
        """Chunks of one document, ordered by index."""
        ...

    @abstractmethod
    def get_chunks_by_tenant(self, tenant_id: UUID) -> list[Chunk]:
        """Chunks of every document the tenant owns."""
        ...

    @abstractmethod
    def create_chunk(self, chunk: Chunk) -> Chunk:
        ...

    @abstractmethod
    def create_chunks(self, chunks: list[Chunk]) -> list[Chunk]:
        """Insert all chunks or none."""
        ...

    @abstractmethod
    def update_chunk_embedding(self, chunk_id: UUID, embedding: list[float]) -> Chunk:
        """Backfill the embedding of an existing chunk. Nothing else may change."""
        ...

    @abstractmethod
    def delete_chunks_by_document(self, document_id: UUID) -> int:
        ...

    # -- Sessions -----------------------------------------------------------

    @abstractmethod
    def get_session(self, session_id: UUID) -> Optional[Session]:
        ...

    @abstractmethod
    def list_sessions_by_learner(self, learner_id: str) -> list[Session]:
        ...

    @abstractmethod
    def list_sessions_by_document(self, document_id: UUID) -> list[Session]:
        ...

    @abstractmethod
    def create_session(self, session: Session) -> Session:
        ...

    @abstractmethod
    def update_session(self, session: Session) -> Session:
        ...

    @abstractmethod
    def delete_session(self, session_id: UUID) -> bool:
        """Delete a session together with its questions and answers."""
        ...

    # -- Questions ----------------------------------------------------------

    @abstractmethod
    def get_question(self, question_id: UUID) -> Optional[Question]:
        ...

    @abstractmethod
    def list_questions_by_session(self, session_id: UUID) -> list[Question]:
        ...

    @abstractmethod
    def create_questions(self, questions: list[Question]) -> list[Question]:
        """Insert all questions or none."""
        ...

    # -- Answers ------------------------------------------------------------

    @abstractmethod
    def answer_exists(self, question_id: UUID, session_id: UUID) -> bool:
        ...

    @abstractmethod
    def create_answer(self, answer: Answer) -> Answer:
        """
        Raises:
            DuplicateRecordError: An answer for (session, question) already exists.
        """
        ...

    @abstractmethod
    def list_answers_by_session(self, session_id: UUID) -> list[Answer]:
        ...

    # -- Badges -------------------------------------------------------------

    @abstractmethod
    def badge_exists(
        self,
        learner_id: str,
        kind: BadgeKind,
        document_id: Optional[UUID] = None,
    ) -> bool:
        ...

    @abstractmethod
    def create_badge(self, badge: Badge) -> Badge:
        """
        Raises:
            DuplicateRecordError: The learner already holds this badge.
        """
        ...

    @abstractmethod
    def list_badges_by_learner(self, learner_id: str) -> list[Badge]:
        ...

    # -- External entities --------------------------------------------------

    @abstractmethod
    def learner_exists(self, learner_id: str) -> bool:
        ...

    @abstractmethod
    def tenant_exists(self, tenant_id: UUID) -> bool:
        ...
