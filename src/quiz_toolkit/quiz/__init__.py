"""
Quiz: session state machine, scoring, badges and progress.

Usage:
    from quiz_toolkit.quiz import QuizSessionService, BadgeAwarder, ProgressTracker
"""

from .badges import BADGE_POINTS, EXPERT_THRESHOLD, LEADER_THRESHOLD, BadgeAwarder
from .progress import ProgressTracker
from .scoring import display_answer, evaluate_answer, score_delta, score_for
from .sessions import QuizSessionService

__all__ = [
    "BADGE_POINTS",
    "EXPERT_THRESHOLD",
    "LEADER_THRESHOLD",
    "BadgeAwarder",
    "ProgressTracker",
    "QuizSessionService",
    "display_answer",
    "evaluate_answer",
    "score_delta",
    "score_for",
]
