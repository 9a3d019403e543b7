"""候補者ステータス判定ドメインサービス."""

from datetime import UTC, datetime

from src.domain.value_objects.candidate_status import (
    CandidateStatus,
    CandidateStatusSnapshot,
)


def utc_now() -> datetime:
    """現在時刻（UTC, timezone-aware）を返す."""
    return datetime.now(UTC)


def ensure_utc(value: datetime | None) -> datetime | None:
    """naiveなdatetimeをUTCとして解釈し、aware UTCに揃える."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class CandidateStatusService:
    """タイムスタンプと現在時刻から候補者ステータスを導出する.

    ステータスは保存されず、読み取りのたびに再計算される。
    未来日時のタイムスタンプはまだ有効ではない（予約済みのロック・非表示）。
    判定の優先順位は hidden > locked > active。
    """

    @staticmethod
    def is_effective(timestamp: datetime | None, now: datetime | None = None) -> bool:
        """タイムスタンプが設定済みかつ現在時刻以前であればTrue."""
        if timestamp is None:
            return False
        current = ensure_utc(now) or utc_now()
        return ensure_utc(timestamp) <= current  # type: ignore[operator]

    def evaluate(
        self,
        locked_at: datetime | None,
        hidden_at: datetime | None,
        now: datetime | None = None,
    ) -> CandidateStatus:
        """ステータスを判定する.

        Args:
            locked_at: ロック日時
            hidden_at: 非表示日時
            now: 判定基準時刻（Noneの場合は現在時刻）

        Returns:
            active / locked / hidden のいずれか
        """
        current = ensure_utc(now) or utc_now()
        if self.is_effective(hidden_at, current):
            return CandidateStatus.HIDDEN
        if self.is_effective(locked_at, current):
            return CandidateStatus.LOCKED
        return CandidateStatus.ACTIVE

    def snapshot(
        self,
        locked_at: datetime | None,
        hidden_at: datetime | None,
        accepted_nomination_at: datetime | None,
        now: datetime | None = None,
    ) -> CandidateStatusSnapshot:
        """ステータスと派生フラグをまとめて判定する.

        非表示の候補者は推薦受諾済みとして扱わない。
        """
        current = ensure_utc(now) or utc_now()
        status = self.evaluate(locked_at, hidden_at, current)
        accepted = status != CandidateStatus.HIDDEN and self.is_effective(
            accepted_nomination_at, current
        )
        return CandidateStatusSnapshot(status=status, accepted_nomination=accepted)
