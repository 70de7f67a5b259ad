"""
Quiz sessions: start, answer, finish.

    start_session ──► IN_PROGRESS ──submit_answer (last question)──► PASSED     (score ≥ goal)
                          │                                      └─► COMPLETED  (score < goal)
                          └──abandon_session──► ABANDONED

Terminal states never change again. A session is complete once it has
as many answers as questions; both counts are read back from storage
after every submission, and the score is recomputed from the stored
answers the same way. Within one service, session writes (answer,
score, status) happen under a lock on a freshly read session.

Usage:
    service = QuizSessionService(repository, generator, awarder, explainer)
    summary = service.start_session("alice", document_id)
    questions = service.get_questions(summary.session.id, "alice")
    result = service.submit_answer(summary.session.id, "alice", questions[0].question.id, "B")
"""

import logging
import threading
from typing import Optional
from uuid import UUID

from quiz_toolkit.base.repository import BaseRepository
from quiz_toolkit.config import QuizConfig
from quiz_toolkit.errors import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    QuestionGenerationError,
)
from quiz_toolkit.generation.explanation import ExplanationGenerator
from quiz_toolkit.generation.questions import QuestionGenerator
from quiz_toolkit.models.quiz import Answer, Session, SessionStatus
from quiz_toolkit.models.result import AnswerResult, QuestionView, SessionSummary
from quiz_toolkit.quiz.badges import BadgeAwarder
from quiz_toolkit.quiz.scoring import display_answer, evaluate_answer, score_delta
from quiz_toolkit.utils.helpers import utc_now

logger = logging.getLogger(__name__)


class QuizSessionService:
    """Owns the session state machine. All state lives in the repository."""

    def __init__(
        self,
        repository: BaseRepository,
        generator: QuestionGenerator = None,
        awarder: BadgeAwarder = None,
        explainer: ExplanationGenerator = None,
        config: QuizConfig = None,
    ):
        self._repository = repository
        self._config = config or QuizConfig()
        self._generator = generator or QuestionGenerator(repository, quiz_config=self._config)
        self._awarder = awarder or BadgeAwarder(repository)
        self._explainer = explainer or ExplanationGenerator()
        self._lock = threading.Lock()

    # -- Lifecycle ----------------------------------------------------------

    def start_session(self, learner_id: str, document_id: UUID, goal: Optional[int] = None) -> SessionSummary:
        """
        Open a session on a document and generate its questions.

        Raises:
            NotFoundError: Unknown learner or document.
            QuestionGenerationError: No questions could be generated or
                stored. The half-created session is removed first.
        """
        if not self._repository.learner_exists(learner_id):
            raise NotFoundError(f"Learner {learner_id} not found")
        if self._repository.get_document(document_id) is None:
            raise NotFoundError(f"Document {document_id} not found")

        session = self._repository.create_session(Session(
            learner_id=learner_id,
            document_id=document_id,
            goal=self._config.default_goal if goal is None else goal,
        ))

        try:
            questions = self._generator.generate_for_session(session.id)
        except (QuestionGenerationError, PersistenceError) as exc:
            self._repository.delete_session(session.id)
            logger.error("Could not generate questions for session %s: %s", session.id, exc)
            raise QuestionGenerationError(f"Could not generate questions for document {document_id}") from exc

        if not questions:
            self._repository.delete_session(session.id)
            raise QuestionGenerationError(f"No questions generated for document {document_id}")

        logger.info(
            "Started session %s for %s on document %s (%d questions, goal %d)",
            session.id, learner_id, document_id, len(questions), session.goal,
        )
        return SessionSummary(session=session, question_count=len(questions))

    def abandon_session(self, session_id: UUID, learner_id: str) -> Session:
        """
        Raises:
            NotFoundError: Unknown session, or owned by someone else.
            ConflictError: The session has already ended.
        """
        with self._lock:
            session = self._owned_session(session_id, learner_id)
            if session.is_terminal:
                raise ConflictError(f"Session {session_id} is already {session.status.value}")

            session.status = SessionStatus.ABANDONED
            session.ended_at = utc_now()
            self._repository.update_session(session)
        logger.info("Session %s abandoned by %s", session_id, learner_id)
        return session

    # -- Answers ------------------------------------------------------------

    def submit_answer(
        self,
        session_id: UUID,
        learner_id: str,
        question_id: UUID,
        text: str,
        latency_ms: int = 0,
    ) -> AnswerResult:
        """
        Record a learner's answer and advance the session.

        Raises:
            NotFoundError: Unknown session (or not the learner's), unknown question.
            ConflictError: The question belongs to another session, the
                session has ended, or the question was already answered.
            PersistenceError: Storage failed.
        """
        session = self._owned_session(session_id, learner_id)
        question = self._repository.get_question(question_id)
        if question is None:
            raise NotFoundError(f"Question {question_id} not found")
        if question.session_id != session.id:
            raise ConflictError(f"Question {question_id} does not belong to session {session_id}")

        is_correct = evaluate_answer(question, text)
        points = score_delta(question, is_correct)

        # Session state is re-read under the lock; every write below starts
        # from the latest stored session.
        with self._lock:
            session = self._owned_session(session_id, learner_id)
            if session.is_terminal:
                raise ConflictError(f"Session {session_id} is already {session.status.value}")
            if self._repository.answer_exists(question_id, session_id):
                raise ConflictError(f"Question {question_id} has already been answered")

            self._repository.create_answer(Answer(
                session_id=session_id,
                question_id=question_id,
                text=text,
                is_correct=is_correct,
                latency_ms=latency_ms,
            ))

            questions = {q.id: q for q in self._repository.list_questions_by_session(session_id)}
            answers = self._repository.list_answers_by_session(session_id)
            session.score = sum(
                score_delta(questions[a.question_id], a.is_correct)
                for a in answers if a.question_id in questions
            )

            complete = len(answers) >= len(questions)
            if complete:
                session.status = SessionStatus.PASSED if session.score >= session.goal else SessionStatus.COMPLETED
                session.ended_at = utc_now()
            self._repository.update_session(session)

        badges = []
        if session.status == SessionStatus.PASSED:
            logger.info("Session %s passed with %d/%d", session_id, session.score, session.goal)
            badges = self._awarder.evaluate(learner_id, session.document_id)

        correct_answer = display_answer(question)
        return AnswerResult(
            is_correct=is_correct,
            correct_answer=correct_answer,
            explanation=self._explainer.explain(question, correct_answer, text, is_correct),
            points_earned=points,
            total_score=session.score,
            session_complete=complete,
            goal_reached=session.score >= session.goal,
            status=session.status,
            badges_awarded=badges,
        )

    # -- Queries ------------------------------------------------------------

    def get_session(self, session_id: UUID, learner_id: str) -> SessionSummary:
        return self._summarize(self._owned_session(session_id, learner_id))

    def list_sessions(self, learner_id: str) -> list[SessionSummary]:
        return [self._summarize(s) for s in self._repository.list_sessions_by_learner(learner_id)]

    def list_document_sessions(self, document_id: UUID) -> list[SessionSummary]:
        return [self._summarize(s) for s in self._repository.list_sessions_by_document(document_id)]

    def get_questions(self, session_id: UUID, learner_id: str) -> list[QuestionView]:
        """The session's questions with the learner's answer status for each."""
        self._owned_session(session_id, learner_id)
        answers = {a.question_id: a for a in self._repository.list_answers_by_session(session_id)}

        views = []
        for question in self._repository.list_questions_by_session(session_id):
            answer = answers.get(question.id)
            views.append(QuestionView(
                question=question,
                answered=answer is not None,
                answered_correctly=answer.is_correct if answer else None,
            ))
        return views

    # -- Helpers ------------------------------------------------------------

    def _owned_session(self, session_id: UUID, learner_id: str) -> Session:
        session = self._repository.get_session(session_id)
        if session is None or session.learner_id != learner_id:
            raise NotFoundError(f"Session {session_id} not found")
        return session

    def _summarize(self, session: Session) -> SessionSummary:
        answers = self._repository.list_answers_by_session(session.id)
        return SessionSummary(
            session=session,
            question_count=len(self._repository.list_questions_by_session(session.id)),
            correct_count=sum(1 for a in answers if a.is_correct),
        )
