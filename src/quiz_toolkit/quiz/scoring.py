"""
Answer evaluation and scoring rules.

Answers are compared to the stored correct answer case-insensitively and
otherwise exactly: surrounding whitespace counts. For choice questions the stored
answer is the option label ("B", "true"), so that is what learners submit.
A correct answer is worth ten points per difficulty level.
"""

from quiz_toolkit.models.quiz import CHOICE_KINDS, Question

POINTS_PER_DIFFICULTY = 10


def evaluate_answer(question: Question, text: str) -> bool:
    return text.casefold() == question.correct_answer.casefold()


def score_for(difficulty: int) -> int:
    return difficulty * POINTS_PER_DIFFICULTY


def score_delta(question: Question, is_correct: bool) -> int:
    """Points a submission adds to the session score."""
    return score_for(question.difficulty) if is_correct else 0


def display_answer(question: Question) -> str:
    """The correct answer as a learner reads it: option text for choice questions."""
    if question.kind in CHOICE_KINDS:
        return question.options.choices.get(question.correct_answer, question.correct_answer)
    return question.correct_answer
