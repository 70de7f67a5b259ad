"""Tests for quiz models: option validation and answer keys, no API calls."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from quiz_toolkit.models.quiz import (
    Answer,
    Question,
    QuestionDraft,
    QuestionKind,
    QuestionOptions,
    Session,
    SessionStatus,
)


class TestQuestionOptions:

    def test_multiple_choice_needs_two_choices(self):
        with pytest.raises(ValidationError):
            QuestionOptions(kind=QuestionKind.MULTIPLE_CHOICE, choices={"A": "Only one"})

    def test_true_false_needs_exact_labels(self):
        with pytest.raises(ValidationError):
            QuestionOptions(kind=QuestionKind.TRUE_FALSE, choices={"yes": "Yes", "no": "No"})

    def test_true_false_factory(self):
        options = QuestionOptions.true_false()
        assert set(options.choices) == {"true", "false"}

    def test_open_text_takes_no_choices(self):
        with pytest.raises(ValidationError):
            QuestionOptions(kind=QuestionKind.OPEN_TEXT, choices={"A": "x", "B": "y"})

    def test_json_round_trip(self):
        options = QuestionOptions(kind=QuestionKind.MULTIPLE_CHOICE, choices={"A": "One", "B": "Two"})
        restored = QuestionOptions.from_json(QuestionKind.MULTIPLE_CHOICE, options.to_json())
        assert restored == options

    def test_no_choices_serializes_to_none(self):
        assert QuestionOptions(kind=QuestionKind.NUMERIC).to_json() is None


class TestQuestionDraft:

    def test_choice_answer_must_be_a_label(self):
        with pytest.raises(ValidationError):
            QuestionDraft(
                text="Pick one",
                options=QuestionOptions(kind=QuestionKind.MULTIPLE_CHOICE, choices={"A": "x", "B": "y"}),
                correct_answer="C",
            )

    def test_numeric_answer_must_parse(self):
        with pytest.raises(ValidationError):
            QuestionDraft(
                text="How many?",
                options=QuestionOptions(kind=QuestionKind.NUMERIC),
                correct_answer="five",
            )

    def test_difficulty_range(self):
        with pytest.raises(ValidationError):
            QuestionDraft(
                text="Q",
                options=QuestionOptions(kind=QuestionKind.OPEN_TEXT),
                correct_answer="A",
                difficulty=6,
            )

    def test_question_from_draft(self, sample_drafts):
        session_id, chunk_id = uuid4(), uuid4()
        question = Question.from_draft(sample_drafts[0], session_id=session_id, chunk_id=chunk_id)

        assert question.session_id == session_id
        assert question.chunk_id == chunk_id
        assert question.kind == QuestionKind.MULTIPLE_CHOICE
        assert question.correct_answer == "B"

    def test_question_is_immutable(self, sample_drafts):
        question = Question.from_draft(sample_drafts[0], session_id=uuid4(), chunk_id=uuid4())
        with pytest.raises(ValidationError):
            question.text = "changed"


class TestSessionAndAnswer:

    def test_session_defaults(self):
        session = Session(learner_id="alice", document_id=uuid4())
        assert session.status == SessionStatus.IN_PROGRESS
        assert session.score == 0
        assert session.goal == 80
        assert not session.is_terminal

    @pytest.mark.parametrize("status", [SessionStatus.COMPLETED, SessionStatus.PASSED, SessionStatus.ABANDONED])
    def test_terminal_statuses(self, status):
        assert status.is_terminal

    def test_answer_text_length_limit(self):
        with pytest.raises(ValidationError):
            Answer(session_id=uuid4(), question_id=uuid4(), text="x" * 1001, is_correct=False)

    def test_negative_latency_rejected(self):
        with pytest.raises(ValidationError):
            Answer(session_id=uuid4(), question_id=uuid4(), text="A", is_correct=True, latency_ms=-1)
