"""
QuizToolkit: every stage wired together from one ToolkitConfig.

This is the entry point for callers that want a ready-made service
layer (an HTTP API, a CLI, a notebook):

    from quiz_toolkit import QuizToolkit, InMemoryRepository

    toolkit = QuizToolkit(InMemoryRepository())

    with open("handbook.pdf", "rb") as f:
        ingested = toolkit.upload_document(club_id, "alice", "handbook.pdf", f, title="Handbook")

    summary = toolkit.start_session("alice", ingested.document.id)
    for view in toolkit.get_questions(summary.session.id, "alice"):
        result = toolkit.submit_answer(summary.session.id, "alice", view.question.id, "B")

    print(toolkit.get_progress("alice").total_points)

Each stage is also exposed as an attribute (toolkit.ingestor,
toolkit.retriever, toolkit.sessions, ...) for anything the shortcuts
below don't cover. All configuration is optional; with no API keys the
toolkit runs fully offline on fallback embeddings and template questions.
"""

from typing import BinaryIO, Optional
from uuid import UUID

from quiz_toolkit.base.repository import BaseRepository
from quiz_toolkit.config import ToolkitConfig
from quiz_toolkit.generation.explanation import ExplanationGenerator
from quiz_toolkit.generation.questions import QuestionGenerator
from quiz_toolkit.indexing.chunking import ParagraphChunker
from quiz_toolkit.indexing.embeddings import EmbeddingGenerator
from quiz_toolkit.indexing.ingestion import DocumentIngestor
from quiz_toolkit.models.document import Document, DocumentType
from quiz_toolkit.models.result import (
    AnswerResult,
    IngestionResult,
    LearnerProgress,
    QuestionView,
    RetrievalResult,
    SessionSummary,
)
from quiz_toolkit.quiz.badges import BadgeAwarder
from quiz_toolkit.quiz.progress import ProgressTracker
from quiz_toolkit.quiz.sessions import QuizSessionService
from quiz_toolkit.retrieval.search import SemanticRetriever
from quiz_toolkit.storage.files import LocalFileStorage


class QuizToolkit:
    """
    Facade over ingestion, retrieval, quiz sessions and progress.

    The repository is the only required collaborator: it is the single
    source of truth, and nothing here caches what it returns.
    """

    def __init__(
        self,
        repository: BaseRepository,
        config: Optional[ToolkitConfig] = None,
        storage: Optional[LocalFileStorage] = None,
    ):
        self.config = config or ToolkitConfig()
        self.repository = repository

        self.embedder = EmbeddingGenerator(self.config.embedding)
        self.ingestor = DocumentIngestor(
            repository,
            chunker=ParagraphChunker(self.config.chunking),
            embedder=self.embedder,
            storage=storage or LocalFileStorage(self.config.storage),
        )
        self.retriever = SemanticRetriever(repository, self.embedder, self.config.retriever)
        self.sessions = QuizSessionService(
            repository,
            generator=QuestionGenerator(repository, self.config.llm, self.config.quiz),
            awarder=BadgeAwarder(repository),
            explainer=ExplanationGenerator(self.config.llm),
            config=self.config.quiz,
        )
        self.progress = ProgressTracker(repository)

    # -- Documents ----------------------------------------------------------

    def upload_document(
        self,
        tenant_id: UUID,
        uploader_id: str,
        filename: str,
        stream: BinaryIO,
        title: str,
        description: Optional[str] = None,
        document_type: DocumentType = DocumentType.OTHER,
    ) -> IngestionResult:
        return self.ingestor.upload_document(
            tenant_id, uploader_id, filename, stream, title, description, document_type,
        )

    def search(self, query: str, document_id: UUID) -> RetrievalResult:
        return self.retriever.search_document(query, document_id)

    def search_documents(self, query: str, tenant_id: UUID) -> list[Document]:
        return self.retriever.search_documents(query, tenant_id)

    # -- Quiz ---------------------------------------------------------------

    def start_session(self, learner_id: str, document_id: UUID, goal: Optional[int] = None) -> SessionSummary:
        return self.sessions.start_session(learner_id, document_id, goal)

    def get_questions(self, session_id: UUID, learner_id: str) -> list[QuestionView]:
        return self.sessions.get_questions(session_id, learner_id)

    def submit_answer(
        self,
        session_id: UUID,
        learner_id: str,
        question_id: UUID,
        text: str,
        latency_ms: int = 0,
    ) -> AnswerResult:
        return self.sessions.submit_answer(session_id, learner_id, question_id, text, latency_ms)

    def get_progress(self, learner_id: str) -> LearnerProgress:
        return self.progress.get_progress(learner_id)
