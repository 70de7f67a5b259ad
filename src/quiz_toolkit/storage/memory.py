"""
In-memory repository.

A complete BaseRepository kept in dictionaries. It behaves like a small
relational store: reads return copies (so callers must go through
update_* to change anything), foreign keys are checked on insert, bulk
inserts are all-or-nothing, and the answer/badge uniqueness constraints
are enforced under one lock.

Used by the test suite and for local experiments. Each instance is its
own store; there is no module-level state.

Usage:
    repo = InMemoryRepository(learners={"alice"})
    toolkit = QuizToolkit(repository=repo)
"""

import logging
import threading
from typing import Iterable, Optional
from uuid import UUID

from quiz_toolkit.base.repository import BaseRepository
from quiz_toolkit.errors import DuplicateRecordError, PersistenceError
from quiz_toolkit.models.document import Chunk, Document
from quiz_toolkit.models.quiz import Answer, Badge, BadgeKind, Question, Session

logger = logging.getLogger(__name__)


class InMemoryRepository(BaseRepository):
    """
    Dictionary-backed repository.

    learners / tenants are optional allow-lists standing in for the
    external member and club tables. Leaving them as None accepts any
    reference.
    """

    def __init__(
        self,
        learners: Optional[Iterable[str]] = None,
        tenants: Optional[Iterable[UUID]] = None,
    ):
        self._lock = threading.RLock()
        self._learners = set(learners) if learners is not None else None
        self._tenants = set(tenants) if tenants is not None else None

        self._documents: dict[UUID, Document] = {}
        self._chunks: dict[UUID, Chunk] = {}
        self._sessions: dict[UUID, Session] = {}
        self._questions: dict[UUID, Question] = {}
        self._answers: dict[tuple[UUID, UUID], Answer] = {}
        self._badges: dict[tuple[str, BadgeKind, Optional[UUID]], Badge] = {}

    # -- Documents ----------------------------------------------------------

    def get_document(self, document_id: UUID) -> Optional[Document]:
        with self._lock:
            return _copy(self._documents.get(document_id))

    def list_documents_by_tenant(self, tenant_id: UUID) -> list[Document]:
        with self._lock:
            documents = [d for d in self._documents.values() if d.tenant_id == tenant_id]
        documents.sort(key=lambda d: d.uploaded_at)
        return [_copy(d) for d in documents]

    def get_documents_by_ids(self, document_ids: list[UUID]) -> list[Document]:
        with self._lock:
            return [_copy(self._documents[i]) for i in document_ids if i in self._documents]

    def create_document(self, document: Document) -> Document:
        with self._lock:
            if document.id in self._documents:
                raise DuplicateRecordError(f"Document {document.id} already exists")
            self._documents[document.id] = _copy(document)
        return document

    def update_document(self, document: Document) -> Document:
        with self._lock:
            if document.id not in self._documents:
                raise PersistenceError(f"Document {document.id} does not exist")
            self._documents[document.id] = _copy(document)
        return document

    def delete_document(self, document_id: UUID) -> bool:
        with self._lock:
            return self._documents.pop(document_id, None) is not None

    # -- Chunks -------------------------------------------------------------

    def get_chunks_by_document(self, document_id: UUID) -> list[Chunk]:
        with self._lock:
            chunks = [c for c in self._chunks.values() if c.document_id == document_id]
        chunks.sort(key=lambda c: c.index)
        return [_copy(c) for c in chunks]

    def get_chunks_by_tenant(self, tenant_id: UUID) -> list[Chunk]:
        with self._lock:
            owned = {d.id for d in self._documents.values() if d.tenant_id == tenant_id}
            chunks = [c for c in self._chunks.values() if c.document_id in owned]
        chunks.sort(key=lambda c: (str(c.document_id), c.index))
        return [_copy(c) for c in chunks]

    def create_chunk(self, chunk: Chunk) -> Chunk:
        return self.create_chunks([chunk])[0]

    def create_chunks(self, chunks: list[Chunk]) -> list[Chunk]:
        with self._lock:
            taken = {(c.document_id, c.index) for c in self._chunks.values()}
            for chunk in chunks:
                if chunk.document_id not in self._documents:
                    raise PersistenceError(f"Chunk references unknown document {chunk.document_id}")
                key = (chunk.document_id, chunk.index)
                if chunk.id in self._chunks or key in taken:
                    raise DuplicateRecordError(
                        f"Chunk {chunk.index} of document {chunk.document_id} already exists"
                    )
                taken.add(key)
            for chunk in chunks:
                self._chunks[chunk.id] = _copy(chunk)
        return chunks

    def update_chunk_embedding(self, chunk_id: UUID, embedding: list[float]) -> Chunk:
        with self._lock:
            chunk = self._chunks.get(chunk_id)
            if chunk is None:
                raise PersistenceError(f"Chunk {chunk_id} does not exist")
            chunk.embedding = list(embedding)
            return _copy(chunk)

    def delete_chunks_by_document(self, document_id: UUID) -> int:
        with self._lock:
            doomed = [i for i, c in self._chunks.items() if c.document_id == document_id]
            for chunk_id in doomed:
                del self._chunks[chunk_id]
        return len(doomed)

    # -- Sessions -----------------------------------------------------------

    def get_session(self, session_id: UUID) -> Optional[Session]:
        with self._lock:
            return _copy(self._sessions.get(session_id))

    def list_sessions_by_learner(self, learner_id: str) -> list[Session]:
        with self._lock:
            sessions = [s for s in self._sessions.values() if s.learner_id == learner_id]
        sessions.sort(key=lambda s: s.started_at)
        return [_copy(s) for s in sessions]

    def list_sessions_by_document(self, document_id: UUID) -> list[Session]:
        with self._lock:
            sessions = [s for s in self._sessions.values() if s.document_id == document_id]
        sessions.sort(key=lambda s: s.started_at)
        return [_copy(s) for s in sessions]

    def create_session(self, session: Session) -> Session:
        with self._lock:
            if session.document_id not in self._documents:
                raise PersistenceError(f"Session references unknown document {session.document_id}")
            if session.id in self._sessions:
                raise DuplicateRecordError(f"Session {session.id} already exists")
            self._sessions[session.id] = _copy(session)
        return session

    def update_session(self, session: Session) -> Session:
        with self._lock:
            if session.id not in self._sessions:
                raise PersistenceError(f"Session {session.id} does not exist")
            self._sessions[session.id] = _copy(session)
        return session

    def delete_session(self, session_id: UUID) -> bool:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                return False
            for question_id in [i for i, q in self._questions.items() if q.session_id == session_id]:
                del self._questions[question_id]
            for key in [k for k in self._answers if k[0] == session_id]:
                del self._answers[key]
        logger.debug("Deleted session %s with its questions and answers", session_id)
        return True

    # -- Questions ----------------------------------------------------------

    def get_question(self, question_id: UUID) -> Optional[Question]:
        with self._lock:
            return self._questions.get(question_id)

    def list_questions_by_session(self, session_id: UUID) -> list[Question]:
        with self._lock:
            return [q for q in self._questions.values() if q.session_id == session_id]

    def create_questions(self, questions: list[Question]) -> list[Question]:
        with self._lock:
            for question in questions:
                if question.session_id not in self._sessions:
                    raise PersistenceError(f"Question references unknown session {question.session_id}")
                if question.chunk_id not in self._chunks:
                    raise PersistenceError(f"Question references unknown chunk {question.chunk_id}")
                if question.id in self._questions:
                    raise DuplicateRecordError(f"Question {question.id} already exists")
            for question in questions:
                self._questions[question.id] = question
        return questions

    # -- Answers ------------------------------------------------------------

    def answer_exists(self, question_id: UUID, session_id: UUID) -> bool:
        with self._lock:
            return (session_id, question_id) in self._answers

    def create_answer(self, answer: Answer) -> Answer:
        key = (answer.session_id, answer.question_id)
        with self._lock:
            if key in self._answers:
                raise DuplicateRecordError(
                    f"Question {answer.question_id} already answered in session {answer.session_id}"
                )
            if answer.question_id not in self._questions:
                raise PersistenceError(f"Answer references unknown question {answer.question_id}")
            self._answers[key] = answer
        return answer

    def list_answers_by_session(self, session_id: UUID) -> list[Answer]:
        with self._lock:
            answers = [a for (s, _), a in self._answers.items() if s == session_id]
        answers.sort(key=lambda a: a.answered_at)
        return answers

    # -- Badges -------------------------------------------------------------

    def badge_exists(
        self,
        learner_id: str,
        kind: BadgeKind,
        document_id: Optional[UUID] = None,
    ) -> bool:
        with self._lock:
            return (learner_id, kind, document_id) in self._badges

    def create_badge(self, badge: Badge) -> Badge:
        key = (badge.learner_id, badge.kind, badge.document_id)
        with self._lock:
            if key in self._badges:
                raise DuplicateRecordError(
                    f"Learner {badge.learner_id} already holds badge {badge.kind.value}"
                )
            self._badges[key] = badge
        return badge

    def list_badges_by_learner(self, learner_id: str) -> list[Badge]:
        with self._lock:
            badges = [b for b in self._badges.values() if b.learner_id == learner_id]
        badges.sort(key=lambda b: b.awarded_at)
        return badges

    # -- External entities --------------------------------------------------

    def learner_exists(self, learner_id: str) -> bool:
        return self._learners is None or learner_id in self._learners

    def tenant_exists(self, tenant_id: UUID) -> bool:
        return self._tenants is None or tenant_id in self._tenants


def _copy(model):
    """Detach a stored model from the caller (None passes through)."""
    return model.model_copy(deep=True) if model is not None else None
