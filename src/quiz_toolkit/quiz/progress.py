"""
Learner progress: points, badges and session outcomes.

Usage:
    tracker = ProgressTracker(repository)
    progress = tracker.get_progress("alice")
    board = tracker.get_leaderboard(["alice", "bob", "carol"])
"""

import logging

from quiz_toolkit.base.repository import BaseRepository
from quiz_toolkit.errors import NotFoundError
from quiz_toolkit.models.quiz import SessionStatus
from quiz_toolkit.models.result import LearnerProgress

logger = logging.getLogger(__name__)


class ProgressTracker:
    def __init__(self, repository: BaseRepository):
        self._repository = repository

    def get_progress(self, learner_id: str) -> LearnerProgress:
        """
        Summarize a learner's training record.

        total_points counts badge points only; session scores feed
        average_score, which covers every session the learner started.

        Raises:
            NotFoundError: Unknown learner.
        """
        if not self._repository.learner_exists(learner_id):
            raise NotFoundError(f"Learner {learner_id} not found")

        sessions = self._repository.list_sessions_by_learner(learner_id)
        badges = self._repository.list_badges_by_learner(learner_id)

        return LearnerProgress(
            learner_id=learner_id,
            total_points=sum(b.points for b in badges),
            badge_count=len(badges),
            passed_sessions=sum(1 for s in sessions if s.status == SessionStatus.PASSED),
            in_progress_sessions=sum(1 for s in sessions if s.status == SessionStatus.IN_PROGRESS),
            average_score=sum(s.score for s in sessions) / len(sessions) if sessions else 0.0,
            badges=badges,
        )

    def get_leaderboard(self, learner_ids: list[str]) -> list[LearnerProgress]:
        """
        Progress for a group of learners (e.g. a club's members), best first.

        Unknown learners are skipped.
        """
        board = []
        for learner_id in learner_ids:
            try:
                board.append(self.get_progress(learner_id))
            except NotFoundError:
                logger.warning("Skipping unknown learner %s in leaderboard", learner_id)
        board.sort(key=lambda p: p.total_points, reverse=True)
        return board
