"""候補者を外部表現へ投影するサービス.

信頼境界を越える前に必ず適用する赤塗り（redaction）ルール:

1. 非表示（hidden）の候補者は ``{"status": "hidden", "hidden": True}`` のみ。
   氏名・連絡先・いいね数を含め、他のフィールドは一切出さない。
2. それ以外は派生値（status, fullName, numLikes, acceptedNomination,
   active / locked / hidden）を解決して全フィールドを出すが、
   個々のいいね（投票者のID）は決して含めない。

構造化（dict）とテキスト（JSON）の2つのエンコーディングは、
どちらも同じ ``project()`` の結果から生成するため食い違わない。
"""

from datetime import datetime
from typing import Any

from src.application.dtos.candidate_dto import (
    CandidateView,
    ContactView,
    HiddenCandidateView,
    LinksView,
    ProgramInfoView,
)
from src.domain.entities.candidate import Candidate
from src.domain.services.candidate_status_service import ensure_utc, utc_now


class CandidateProjector:
    """候補者エンティティをビューモデルへ変換する."""

    def project(
        self, candidate: Candidate, now: datetime | None = None
    ) -> CandidateView | HiddenCandidateView:
        """赤塗りルールを適用したビューモデルを返す.

        Args:
            candidate: 候補者エンティティ
            now: 判定基準時刻（Noneの場合は現在時刻）

        Returns:
            非表示ならHiddenCandidateView、それ以外はCandidateView
        """
        current = ensure_utc(now) or utc_now()
        snapshot = candidate.snapshot_at(current)
        if snapshot.hidden:
            return HiddenCandidateView()

        contact = candidate.contact
        links = candidate.links
        program_info = candidate.program_info

        return CandidateView(
            id=candidate.id,
            candidate_id=candidate.candidate_id,
            first_name=candidate.first_name,
            last_name=candidate.last_name,
            full_name=candidate.full_name_at(current),
            contact=ContactView(**contact.to_dict()) if contact else None,
            links=LinksView(**links.to_dict()) if links else None,
            program_info=(
                ProgramInfoView(title=program_info.title, body=program_info.body)
                if program_info
                else None
            ),
            nominator_user=candidate.nominator_user_id,
            own_user=candidate.own_user_id,
            accepted_nomination_at=candidate.accepted_nomination_at,
            accepted_nomination=snapshot.accepted_nomination,
            locked_at=candidate.locked_at,
            hidden_at=candidate.hidden_at,
            status=snapshot.status.value,
            active=snapshot.active,
            locked=snapshot.locked,
            num_likes=candidate.num_likes_at(current),
            comments=list(candidate.comment_ids),
            created_at=candidate.created_at,
            updated_at=candidate.updated_at,
        )

    def to_dict(
        self, candidate: Candidate, now: datetime | None = None
    ) -> dict[str, Any]:
        """構造化された外部表現を返す."""
        return self.project(candidate, now).model_dump(by_alias=True)

    def to_json(self, candidate: Candidate, now: datetime | None = None) -> str:
        """テキスト（JSON）の外部表現を返す."""
        return self.project(candidate, now).model_dump_json(by_alias=True)
