"""Tests for the question generation pipeline: strategies stubbed or LLM mocked."""

from unittest.mock import MagicMock, patch
from uuid import uuid4

import pytest

from quiz_toolkit.base.generator import BaseQuestionStrategy
from quiz_toolkit.errors import NotFoundError, PersistenceError, QuestionGenerationError
from quiz_toolkit.generation.questions import DEFAULT_CHUNK_CONTENT, QuestionGenerator
from quiz_toolkit.generation.strategies import MAX_DEFAULT_QUESTIONS
from quiz_toolkit.models.quiz import QuestionKind, Session


class _FailingStrategy(BaseQuestionStrategy):
    name = "failing"

    def applies(self, context):
        return True

    def generate(self, context):
        raise QuestionGenerationError("always fails")


@pytest.fixture
def session(repository, document):
    return repository.create_session(Session(learner_id="alice", document_id=document.id))


class TestQuestionGenerator:

    @patch("quiz_toolkit.generation.strategies.get_llm")
    def test_llm_failure_falls_back_to_templates(
        self, mock_get_llm, repository, session, stored_chunks, llm_config, quiz_config,
    ):
        mock_get_llm.side_effect = RuntimeError("no credentials")

        questions = QuestionGenerator(repository, llm_config, quiz_config).generate_for_session(session.id)

        assert len(questions) == quiz_config.default_question_count
        assert questions[0].text == "Question 1 based on the document content"
        assert all(q.chunk_id == stored_chunks[0].id for q in questions)
        assert repository.list_questions_by_session(session.id) == questions

    def test_first_successful_strategy_wins(self, repository, session, stored_chunks, sample_drafts, quiz_config):
        good = MagicMock(spec=BaseQuestionStrategy)
        good.name = "good"
        good.applies.return_value = True
        good.generate.return_value = sample_drafts
        never = MagicMock(spec=BaseQuestionStrategy)

        generator = QuestionGenerator(repository, quiz_config=quiz_config, strategies=[_FailingStrategy(), good, never])
        questions = generator.generate_for_session(session.id)

        assert [q.text for q in questions] == [d.text for d in sample_drafts]
        never.generate.assert_not_called()

    def test_no_chunks_uses_default_curriculum_and_chunk(self, repository, session, document, llm_config):
        questions = QuestionGenerator(repository, llm_config).generate_for_session(session.id)

        assert len(questions) == MAX_DEFAULT_QUESTIONS
        assert questions[0].kind == QuestionKind.MULTIPLE_CHOICE

        chunks = repository.get_chunks_by_document(document.id)
        assert len(chunks) == 1
        assert chunks[0].index == 1
        assert chunks[0].content == DEFAULT_CHUNK_CONTENT
        assert chunks[0].embedding is None
        assert all(q.chunk_id == chunks[0].id for q in questions)

    def test_default_chunk_reused(self, repository, session, document, llm_config):
        generator = QuestionGenerator(repository, llm_config)
        generator.generate_for_session(session.id)
        second = repository.create_session(Session(learner_id="bob", document_id=document.id))

        questions = generator.generate_for_session(second.id)

        assert len(repository.get_chunks_by_document(document.id)) == 1
        assert len(questions) == MAX_DEFAULT_QUESTIONS

    def test_default_curriculum_respects_smaller_count(self, repository, session, quiz_config):
        questions = QuestionGenerator(repository, quiz_config=quiz_config).generate_for_session(session.id)
        assert len(questions) == quiz_config.default_question_count

    def test_all_strategies_fail(self, repository, session, stored_chunks):
        generator = QuestionGenerator(repository, strategies=[_FailingStrategy()])
        with pytest.raises(QuestionGenerationError):
            generator.generate_for_session(session.id)
        assert repository.list_questions_by_session(session.id) == []

    def test_unknown_session(self, repository):
        with pytest.raises(NotFoundError):
            QuestionGenerator(repository).generate_for_session(uuid4())

    def test_persistence_error_propagates(self, session, document, stored_chunks, quiz_config, repository):
        broken = MagicMock(wraps=repository)
        broken.create_questions.side_effect = PersistenceError("disk full")
        generator = QuestionGenerator(broken, quiz_config=quiz_config, strategies=[_template()])

        with pytest.raises(PersistenceError):
            generator.generate_for_session(session.id)


def _template():
    from quiz_toolkit.generation.strategies import TemplateQuestionStrategy

    return TemplateQuestionStrategy()
