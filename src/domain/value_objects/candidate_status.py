"""候補者ステータスの Value Object."""

from dataclasses import dataclass
from enum import Enum


class CandidateStatus(str, Enum):
    """候補者ステータスを表す列挙型.

    タイムスタンプ（locked_at / hidden_at）と現在時刻から導出され、
    エンティティには保存されない。
    """

    ACTIVE = "active"
    LOCKED = "locked"
    HIDDEN = "hidden"


@dataclass(frozen=True)
class CandidateStatusSnapshot:
    """ある時刻における候補者ステータスと派生フラグ."""

    status: CandidateStatus
    accepted_nomination: bool

    @property
    def active(self) -> bool:
        return self.status == CandidateStatus.ACTIVE

    @property
    def locked(self) -> bool:
        return self.status == CandidateStatus.LOCKED

    @property
    def hidden(self) -> bool:
        return self.status == CandidateStatus.HIDDEN
