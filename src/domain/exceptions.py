"""Domain exceptions for the candidate aggregate.

候補者エンティティの操作で発生する例外を定義する。
ステータス・重複チェックは永続化前のガードとして発生し、状態は変更されない。
PersistenceErrorのみ、メモリ上の状態が永続化済みの状態より先行している
可能性を示す（呼び出し側は再取得して整合させること）。
"""

from typing import Any


class CandidateError(Exception):
    """候補者ドメインの基底例外."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InactiveError(CandidateError):
    """active以外（locked / hidden）の候補者に対する操作."""

    def __init__(self, candidate_id: str, status: str) -> None:
        super().__init__(
            "Candidate not active.",
            {"candidate_id": candidate_id, "status": status},
        )
        self.candidate_id = candidate_id
        self.status = status


class DuplicateLikeError(CandidateError):
    """同じユーザーによる二重のいいね."""

    def __init__(self, candidate_id: str) -> None:
        super().__init__("Already liked by user.", {"candidate_id": candidate_id})
        self.candidate_id = candidate_id


class NotFoundError(CandidateError):
    """候補者またはいいねが存在しない."""


class PersistenceError(CandidateError):
    """ストアへの永続化に失敗した.

    メモリ上のエンティティは既に変更されている。最終状態は不明なので、
    呼び出し側は再取得して確認すること。
    """


class ConcurrentModificationError(PersistenceError):
    """楽観的排他制御のバージョン競合."""


class ValidationError(CandidateError):
    """フィールド単位のバリデーションエラー.

    Attributes:
        errors: フィールドパス（例: "contact.email"）からエラーメッセージへの辞書
    """

    def __init__(self, errors: dict[str, str]) -> None:
        fields = ", ".join(sorted(errors))
        super().__init__(f"Invalid fields: {fields}", {"errors": dict(errors)})
        self.errors = dict(errors)
