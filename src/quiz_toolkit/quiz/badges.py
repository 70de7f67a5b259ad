"""
Achievement badges.

    document_completed   50 pts   once per (learner, document), on passing it
    expert              100 pts   once per learner, at 5 passed sessions
    leader              200 pts   once per learner, at 10 passed sessions

badge_exists() is only a fast path. The repository's uniqueness guard
is what actually prevents double awards when two sessions pass at the
same moment, so a DuplicateRecordError here means "already awarded".
"""

import logging
from typing import Optional
from uuid import UUID

from quiz_toolkit.base.repository import BaseRepository
from quiz_toolkit.errors import DuplicateRecordError
from quiz_toolkit.models.quiz import Badge, BadgeKind, SessionStatus

logger = logging.getLogger(__name__)

BADGE_POINTS = {
    BadgeKind.DOCUMENT_COMPLETED: 50,
    BadgeKind.EXPERT: 100,
    BadgeKind.LEADER: 200,
}

EXPERT_THRESHOLD = 5
LEADER_THRESHOLD = 10


class BadgeAwarder:
    def __init__(self, repository: BaseRepository):
        self._repository = repository

    def evaluate(self, learner_id: str, document_id: UUID) -> list[Badge]:
        """
        Award whatever badges a freshly passed session has earned.

        Returns:
            Only the badges created by this call.
        """
        awarded = []

        badge = self._award(learner_id, BadgeKind.DOCUMENT_COMPLETED, document_id)
        if badge:
            awarded.append(badge)

        passed = sum(
            1 for s in self._repository.list_sessions_by_learner(learner_id)
            if s.status == SessionStatus.PASSED
        )
        if passed >= EXPERT_THRESHOLD:
            badge = self._award(learner_id, BadgeKind.EXPERT)
            if badge:
                awarded.append(badge)
        if passed >= LEADER_THRESHOLD:
            badge = self._award(learner_id, BadgeKind.LEADER)
            if badge:
                awarded.append(badge)

        return awarded

    def _award(self, learner_id: str, kind: BadgeKind, document_id: Optional[UUID] = None) -> Optional[Badge]:
        if self._repository.badge_exists(learner_id, kind, document_id):
            return None

        badge = Badge(
            learner_id=learner_id,
            kind=kind,
            document_id=document_id,
            points=BADGE_POINTS[kind],
        )
        try:
            self._repository.create_badge(badge)
        except DuplicateRecordError:
            logger.info("Badge %s already awarded to %s", kind.value, learner_id)
            return None

        logger.info("Awarded badge %s (%d pts) to %s", kind.value, badge.points, learner_id)
        return badge
