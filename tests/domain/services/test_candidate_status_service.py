"""Tests for CandidateStatusService."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from src.domain.services.candidate_status_service import (
    CandidateStatusService,
    ensure_utc,
)
from src.domain.value_objects.candidate_status import CandidateStatus


NOW = datetime(2026, 5, 1, 12, 0, tzinfo=UTC)
PAST = NOW - timedelta(days=1)
FUTURE = NOW + timedelta(days=1)


@pytest.fixture
def service() -> CandidateStatusService:
    return CandidateStatusService()


class TestEvaluate:
    """evaluateメソッドのテスト."""

    @pytest.mark.parametrize(
        ("locked_at", "hidden_at", "expected"),
        [
            (None, None, CandidateStatus.ACTIVE),
            (PAST, None, CandidateStatus.LOCKED),
            (None, PAST, CandidateStatus.HIDDEN),
            (PAST, PAST, CandidateStatus.HIDDEN),
            (FUTURE, None, CandidateStatus.ACTIVE),
            (None, FUTURE, CandidateStatus.ACTIVE),
            (FUTURE, FUTURE, CandidateStatus.ACTIVE),
            (PAST, FUTURE, CandidateStatus.LOCKED),
            (FUTURE, PAST, CandidateStatus.HIDDEN),
        ],
    )
    def test_status_for_timestamp_combinations(
        self, service, locked_at, hidden_at, expected
    ) -> None:
        """全組み合わせでステータスが一意に決まり、有効なhidden_atが優先されること."""
        assert service.evaluate(locked_at, hidden_at, NOW) == expected

    def test_timestamp_equal_to_now_is_effective(self, service) -> None:
        """現在時刻と同じタイムスタンプは有効とみなすこと."""
        assert service.evaluate(NOW, None, NOW) == CandidateStatus.LOCKED
        assert service.evaluate(None, NOW, NOW) == CandidateStatus.HIDDEN

    def test_future_timestamp_becomes_effective_later(self, service) -> None:
        """予約されたロックは指定時刻を過ぎると有効になること."""
        assert service.evaluate(FUTURE, None, NOW) == CandidateStatus.ACTIVE
        later = FUTURE + timedelta(seconds=1)
        assert service.evaluate(FUTURE, None, later) == CandidateStatus.LOCKED

    def test_naive_datetimes_are_treated_as_utc(self, service) -> None:
        """naiveなdatetimeはUTCとして比較されること."""
        naive_past = datetime(2026, 4, 30, 12, 0)
        assert service.evaluate(naive_past, None, NOW) == CandidateStatus.LOCKED

    def test_other_timezones_are_compared_by_instant(self, service) -> None:
        """別タイムゾーンのdatetimeは同じ瞬間として比較されること."""
        jst = timezone(timedelta(hours=9))
        # NOW + 1h in JST
        locked_at = datetime(2026, 5, 1, 22, 0, tzinfo=jst)
        assert service.evaluate(locked_at, None, NOW) == CandidateStatus.ACTIVE

    def test_defaults_to_current_time(self, service) -> None:
        """nowを省略した場合は現在時刻で判定すること."""
        yesterday = datetime.now(UTC) - timedelta(days=1)
        assert service.evaluate(yesterday, None) == CandidateStatus.LOCKED


class TestSnapshot:
    """snapshotメソッドのテスト."""

    def test_accepted_nomination_in_past(self, service) -> None:
        snapshot = service.snapshot(None, None, PAST, NOW)

        assert snapshot.status == CandidateStatus.ACTIVE
        assert snapshot.active is True
        assert snapshot.locked is False
        assert snapshot.hidden is False
        assert snapshot.accepted_nomination is True

    def test_accepted_nomination_in_future_is_not_accepted(self, service) -> None:
        snapshot = service.snapshot(None, None, FUTURE, NOW)
        assert snapshot.accepted_nomination is False

    def test_accepted_nomination_unset(self, service) -> None:
        snapshot = service.snapshot(PAST, None, None, NOW)

        assert snapshot.locked is True
        assert snapshot.accepted_nomination is False

    def test_hidden_candidate_is_never_accepted(self, service) -> None:
        """非表示の候補者は推薦受諾済みとして扱わないこと."""
        snapshot = service.snapshot(None, PAST, PAST, NOW)

        assert snapshot.hidden is True
        assert snapshot.active is False
        assert snapshot.accepted_nomination is False


class TestEnsureUtc:
    def test_none(self) -> None:
        assert ensure_utc(None) is None

    def test_naive_gets_utc(self) -> None:
        assert ensure_utc(datetime(2026, 1, 1)) == datetime(2026, 1, 1, tzinfo=UTC)

    def test_aware_is_converted(self) -> None:
        jst = timezone(timedelta(hours=9))
        value = ensure_utc(datetime(2026, 1, 1, 9, 0, tzinfo=jst))
        assert value == datetime(2026, 1, 1, 0, 0, tzinfo=UTC)
        assert value.tzinfo == UTC
