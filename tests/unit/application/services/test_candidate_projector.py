"""Tests for CandidateProjector."""

import json

from datetime import UTC, datetime, timedelta

import pytest

from src.application.services.candidate_projector import CandidateProjector
from src.domain.entities.candidate import Candidate
from src.domain.entities.like import Like
from src.domain.value_objects.candidate_profile import (
    CandidateLinks,
    ContactInfo,
    ProgramInfo,
)
from src.domain.value_objects.user_reference import UserId


NOW = datetime(2026, 5, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def projector() -> CandidateProjector:
    return CandidateProjector()


@pytest.fixture
def candidate() -> Candidate:
    return Candidate(
        candidate_id="cand-001",
        first_name="Marie",
        last_name="Curie",
        contact=ContactInfo(
            postal="1 rue Pierre et Marie Curie, Paris",
            email="marie@example.com",
            phone="0612345678",
        ),
        links=CandidateLinks(wikipedia="https://fr.wikipedia.org/wiki/Marie_Curie"),
        program_info=ProgramInfo(title="Science", body="Research for all"),
        nominator_user_id=UserId("nominator-1"),
        own_user_id=UserId("marie"),
        accepted_nomination_at=NOW - timedelta(days=2),
        likes=[Like(user_id=UserId(f"user-{i}")) for i in range(3)],
        comment_ids=["comment-1"],
        created_at=NOW - timedelta(days=10),
        updated_at=NOW - timedelta(days=1),
        id=7,
    )


class TestHiddenCandidate:
    """非表示候補者の投影のテスト."""

    def test_hidden_projects_to_stub_only(self, projector, candidate) -> None:
        """非表示の候補者はstatusとhiddenの2キーのみになること."""
        candidate.hidden_at = NOW - timedelta(minutes=1)

        result = projector.to_dict(candidate, NOW)

        assert result == {"status": "hidden", "hidden": True}

    def test_hidden_json_matches_dict(self, projector, candidate) -> None:
        candidate.hidden_at = NOW - timedelta(minutes=1)

        assert json.loads(projector.to_json(candidate, NOW)) == {
            "status": "hidden",
            "hidden": True,
        }

    def test_hidden_and_locked_is_still_stub(self, projector, candidate) -> None:
        candidate.locked_at = NOW - timedelta(days=1)
        candidate.hidden_at = NOW - timedelta(days=1)

        assert projector.to_dict(candidate, NOW) == {"status": "hidden", "hidden": True}

    def test_scheduled_hide_is_not_applied_yet(self, projector, candidate) -> None:
        """未来日時の非表示はまだ適用されないこと."""
        candidate.hidden_at = NOW + timedelta(hours=1)

        result = projector.to_dict(candidate, NOW)

        assert result["status"] == "active"
        assert result["hidden"] is False
        assert result["fullName"] == "Marie Curie"


class TestVisibleCandidate:
    """active / locked 候補者の投影のテスト."""

    def test_active_projection(self, projector, candidate) -> None:
        result = projector.to_dict(candidate, NOW)

        assert result["id"] == 7
        assert result["candidateId"] == "cand-001"
        assert result["firstName"] == "Marie"
        assert result["lastName"] == "Curie"
        assert result["fullName"] == "Marie Curie"
        assert result["status"] == "active"
        assert result["active"] is True
        assert result["locked"] is False
        assert result["hidden"] is False
        assert result["acceptedNomination"] is True
        assert result["nominatorUser"] == "nominator-1"
        assert result["ownUser"] == "marie"
        assert result["comments"] == ["comment-1"]
        assert result["contact"]["email"] == "marie@example.com"
        assert result["links"]["wikipedia"] == (
            "https://fr.wikipedia.org/wiki/Marie_Curie"
        )
        assert result["links"]["facebook"] is None
        assert result["programInfo"] == {
            "title": "Science",
            "body": "Research for all",
        }

    def test_num_likes_without_likes_list(self, projector, candidate) -> None:
        """いいね数のみを公開し、個々のいいねは含めないこと."""
        result = projector.to_dict(candidate, NOW)

        assert result["numLikes"] == 3
        assert "likes" not in result
        assert "user-0" not in projector.to_json(candidate, NOW)

    def test_locked_projection(self, projector, candidate) -> None:
        candidate.locked_at = NOW - timedelta(hours=1)

        result = projector.to_dict(candidate, NOW)

        assert result["status"] == "locked"
        assert result["active"] is False
        assert result["locked"] is True
        assert result["numLikes"] == 3

    def test_accepted_nomination_in_future(self, projector, candidate) -> None:
        candidate.accepted_nomination_at = NOW + timedelta(days=1)
        assert projector.to_dict(candidate, NOW)["acceptedNomination"] is False

    def test_optional_profile_sections(self, projector) -> None:
        candidate = Candidate(candidate_id="cand-002", first_name="A", last_name="B")

        result = projector.to_dict(candidate, NOW)

        assert result["contact"] is None
        assert result["links"] is None
        assert result["programInfo"] is None
        assert result["numLikes"] == 0
        assert result["comments"] == []

    def test_dict_and_json_have_same_keys(self, projector, candidate) -> None:
        """構造化表現とJSON表現のキーが一致すること."""
        as_dict = projector.to_dict(candidate, NOW)
        as_json = json.loads(projector.to_json(candidate, NOW))

        assert set(as_dict) == set(as_json)
        assert as_json["numLikes"] == as_dict["numLikes"]
        assert as_json["status"] == as_dict["status"]

    def test_json_timestamps_are_iso_strings(self, projector, candidate) -> None:
        as_json = json.loads(projector.to_json(candidate, NOW))

        created_at = datetime.fromisoformat(as_json["createdAt"].replace("Z", "+00:00"))
        assert created_at == candidate.created_at
        assert as_json["lockedAt"] is None

    def test_default_now(self, projector, candidate) -> None:
        assert projector.to_dict(candidate)["status"] == "active"
