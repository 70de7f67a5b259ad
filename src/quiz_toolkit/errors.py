"""
Exception hierarchy for the quiz toolkit.

Callers only need to catch QuizToolkitError to handle everything the core
can reject. Provider failures (embedding, LLM) and unreadable documents
never show up here: they are absorbed by fallbacks. The one exception is
question generation at session start, where running out of fallbacks is
fatal and surfaces as QuestionGenerationError.
"""


class QuizToolkitError(Exception):
    """Base class for every error raised by the toolkit."""


class NotFoundError(QuizToolkitError, LookupError):
    """A document, session, question or learner is missing or not the caller's."""


class ConflictError(QuizToolkitError):
    """
    The request contradicts existing state.

    Raised for duplicate answers, answers to a question from another
    session, and answers or transitions on a session that already ended.
    """


class DuplicateRecordError(ConflictError):
    """
    A storage uniqueness constraint rejected an insert.

    This is the authoritative guard for (session, question) answers and
    (learner, kind, document) badges. The existence checks done before
    inserting are only a fast path.
    """


class QuestionGenerationError(QuizToolkitError):
    """Every question generation tier failed."""


class PersistenceError(QuizToolkitError):
    """The storage layer failed to read or write."""
