"""Tests for badge awarding: single award per (learner, kind, document)."""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from quiz_toolkit.errors import DuplicateRecordError
from quiz_toolkit.models.document import Document
from quiz_toolkit.models.quiz import BadgeKind, Session, SessionStatus
from quiz_toolkit.quiz.badges import BADGE_POINTS, BadgeAwarder


def _passed_sessions(repository, tenant_id, learner_id, count):
    """Create `count` passed sessions, each on its own document."""
    document_ids = []
    for i in range(count):
        document = repository.create_document(Document(
            title=f"Module {i}", file_path=f"m{i}.txt", uploaded_by=learner_id, tenant_id=tenant_id,
        ))
        repository.create_session(Session(
            learner_id=learner_id, document_id=document.id, status=SessionStatus.PASSED, score=100,
        ))
        document_ids.append(document.id)
    return document_ids


class TestBadgeAwarder:

    def test_first_pass_awards_document_badge(self, repository, tenant_id):
        [document_id] = _passed_sessions(repository, tenant_id, "alice", 1)

        badges = BadgeAwarder(repository).evaluate("alice", document_id)

        assert [b.kind for b in badges] == [BadgeKind.DOCUMENT_COMPLETED]
        assert badges[0].points == 50
        assert badges[0].document_id == document_id

    def test_document_badge_awarded_once(self, repository, tenant_id):
        [document_id] = _passed_sessions(repository, tenant_id, "alice", 1)
        awarder = BadgeAwarder(repository)

        awarder.evaluate("alice", document_id)
        assert awarder.evaluate("alice", document_id) == []
        assert len(repository.list_badges_by_learner("alice")) == 1

    def test_expert_at_five_passes(self, repository, tenant_id):
        document_ids = _passed_sessions(repository, tenant_id, "alice", 5)

        badges = BadgeAwarder(repository).evaluate("alice", document_ids[-1])

        kinds = {b.kind for b in badges}
        assert kinds == {BadgeKind.DOCUMENT_COMPLETED, BadgeKind.EXPERT}

    def test_expert_not_repeated_after_fifth_pass(self, repository, tenant_id):
        awarder = BadgeAwarder(repository)
        for document_id in _passed_sessions(repository, tenant_id, "alice", 5):
            awarder.evaluate("alice", document_id)

        for _ in range(2):
            [document_id] = _passed_sessions(repository, tenant_id, "alice", 1)
            badges = awarder.evaluate("alice", document_id)
            assert [b.kind for b in badges] == [BadgeKind.DOCUMENT_COMPLETED]

        kinds = [b.kind for b in repository.list_badges_by_learner("alice")]
        assert kinds.count(BadgeKind.EXPERT) == 1
        assert kinds.count(BadgeKind.DOCUMENT_COMPLETED) == 7

    def test_leader_at_ten_passes(self, repository, tenant_id):
        document_ids = _passed_sessions(repository, tenant_id, "alice", 10)
        awarder = BadgeAwarder(repository)

        badges = awarder.evaluate("alice", document_ids[-1])
        assert {b.kind for b in badges} == {BadgeKind.DOCUMENT_COMPLETED, BadgeKind.EXPERT, BadgeKind.LEADER}

        # Another document later: only its own completion badge is new
        more = _passed_sessions(repository, tenant_id, "alice", 1)
        assert [b.kind for b in awarder.evaluate("alice", more[0])] == [BadgeKind.DOCUMENT_COMPLETED]

    def test_points(self):
        assert BADGE_POINTS == {
            BadgeKind.DOCUMENT_COMPLETED: 50,
            BadgeKind.EXPERT: 100,
            BadgeKind.LEADER: 200,
        }

    def test_concurrent_award_treated_as_existing(self, repository, tenant_id):
        """badge_exists said no, but another writer got there first."""
        [document_id] = _passed_sessions(repository, tenant_id, "alice", 1)
        racing = MagicMock(wraps=repository)
        racing.badge_exists.return_value = False
        racing.create_badge.side_effect = DuplicateRecordError("already there")

        assert BadgeAwarder(racing).evaluate("alice", document_id) == []

    def test_other_learners_unaffected(self, repository, tenant_id):
        [document_id] = _passed_sessions(repository, tenant_id, "alice", 1)
        BadgeAwarder(repository).evaluate("alice", document_id)

        assert repository.list_badges_by_learner("bob") == []
        assert not repository.badge_exists("bob", BadgeKind.DOCUMENT_COMPLETED, document_id)
