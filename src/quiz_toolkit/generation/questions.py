"""
Question generation for a quiz session.

    session ─► document ─► chunks ─► GenerationContext
                                          │
              LLMQuestionStrategy ──fail──► TemplateQuestionStrategy ──► DefaultCurriculumStrategy
                                          │
                               first success ─► Questions (one batch insert)

Every question is anchored to the document's first chunk. A document
without chunks gets a placeholder chunk so the anchor always exists;
that placeholder is reused by later sessions and never shown to the LLM.

Usage:
    generator = QuestionGenerator(repository, LLMConfig(), QuizConfig())
    questions = generator.generate_for_session(session.id)
"""

import logging
from uuid import UUID

from quiz_toolkit.base.generator import BaseQuestionStrategy, GenerationContext
from quiz_toolkit.base.repository import BaseRepository
from quiz_toolkit.config import LLMConfig, QuizConfig
from quiz_toolkit.errors import NotFoundError, QuestionGenerationError
from quiz_toolkit.generation.strategies import (
    DefaultCurriculumStrategy,
    LLMQuestionStrategy,
    TemplateQuestionStrategy,
)
from quiz_toolkit.models.document import Chunk, ChunkMetadata
from quiz_toolkit.models.quiz import Question

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_CONTENT = "Default content for organisation training questions"
DEFAULT_CHUNK_INDEX = 1


class QuestionGenerator:
    """Runs the strategy chain for a session and persists the result."""

    def __init__(
        self,
        repository: BaseRepository,
        llm_config: LLMConfig = None,
        quiz_config: QuizConfig = None,
        strategies: list[BaseQuestionStrategy] = None,
    ):
        self._repository = repository
        self._quiz_config = quiz_config or QuizConfig()
        self._strategies = strategies or [
            LLMQuestionStrategy(llm_config, self._quiz_config.max_context_chunks),
            TemplateQuestionStrategy(),
            DefaultCurriculumStrategy(),
        ]

    def generate_for_session(self, session_id: UUID, count: int = None) -> list[Question]:
        """
        Generate and store the questions for a session.

        Args:
            session_id: Session to generate for.
            count: Questions wanted. Defaults to QuizConfig.default_question_count.

        Returns:
            The persisted questions, in generation order.

        Raises:
            NotFoundError: The session or its document does not exist.
            QuestionGenerationError: No strategy produced any question.
            PersistenceError: Storing the questions failed.
        """
        session = self._repository.get_session(session_id)
        if session is None:
            raise NotFoundError(f"Session {session_id} not found")
        document = self._repository.get_document(session.document_id)
        if document is None:
            raise NotFoundError(f"Document {session.document_id} not found")

        stored = self._repository.get_chunks_by_document(document.id)
        chunks = [c for c in stored if not _is_default_chunk(c)]
        context = GenerationContext(
            session=session,
            document=document,
            chunks=chunks,
            count=count or self._quiz_config.default_question_count,
        )

        drafts, used = self._run_strategies(context)

        anchor = chunks[0] if chunks else self._default_chunk(document.id, stored)
        questions = [Question.from_draft(d, session_id=session.id, chunk_id=anchor.id) for d in drafts]
        self._repository.create_questions(questions)

        logger.info(
            "Generated %d question(s) for session %s with the %s strategy",
            len(questions), session.id, used,
        )
        return questions

    def _run_strategies(self, context: GenerationContext):
        for strategy in self._strategies:
            if not strategy.applies(context):
                continue
            try:
                drafts = strategy.generate(context)
            except QuestionGenerationError as exc:
                logger.warning("Question strategy '%s' failed: %s", strategy.name, exc)
                continue
            if drafts:
                return drafts, strategy.name
            logger.warning("Question strategy '%s' returned nothing", strategy.name)

        raise QuestionGenerationError(
            f"No question strategy could generate questions for session {context.session.id}"
        )

    def _default_chunk(self, document_id: UUID, stored: list[Chunk]) -> Chunk:
        for chunk in stored:
            if _is_default_chunk(chunk):
                return chunk

        chunk = Chunk(
            document_id=document_id,
            content=DEFAULT_CHUNK_CONTENT,
            index=DEFAULT_CHUNK_INDEX,
            metadata=ChunkMetadata(length=len(DEFAULT_CHUNK_CONTENT)),
        )
        logger.info("Document %s has no chunks; creating the default quiz chunk", document_id)
        return self._repository.create_chunk(chunk)


def _is_default_chunk(chunk: Chunk) -> bool:
    return chunk.index == DEFAULT_CHUNK_INDEX and chunk.content == DEFAULT_CHUNK_CONTENT
