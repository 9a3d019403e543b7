"""候補者管理のユースケース.

各操作は「読み込み → ガード・変更 → 保存」を1往復で行う。
同じ候補者への操作は CandidateMutex で直列化する。
保存失敗（PersistenceError）はそのまま呼び出し側へ伝播し、再試行はしない。
"""

from datetime import datetime
from typing import Any

from src.application.dtos.candidate_dto import UpdateCandidateProfileInputDto
from src.application.services.candidate_field_validator import (
    CandidateFieldValidator,
)
from src.application.services.candidate_mutex import CandidateMutex
from src.application.services.candidate_projector import CandidateProjector
from src.application.services.program_info_sanitizer import sanitize_program_info
from src.common.logging import get_logger
from src.domain.entities.candidate import Candidate
from src.domain.exceptions import NotFoundError, PersistenceError
from src.domain.repositories.candidate_repository import CandidateRepository
from src.domain.services.candidate_status_service import utc_now


logger = get_logger(__name__)


class ManageCandidatesUseCase:
    """候補者のいいね・ロック・非表示・プロフィール更新と投影を扱うユースケース."""

    def __init__(
        self,
        candidate_repository: CandidateRepository,
        projector: CandidateProjector | None = None,
        field_validator: CandidateFieldValidator | None = None,
        mutex: CandidateMutex | None = None,
    ) -> None:
        """ユースケースを初期化する.

        Args:
            candidate_repository: 候補者リポジトリ
            projector: 外部表現への投影サービス
            field_validator: 連絡先・リンクのバリデータ
            mutex: 候補者ごとの排他制御（プロセス内で共有すること）
        """
        self.candidate_repository = candidate_repository
        self.projector = projector or CandidateProjector()
        self.field_validator = field_validator or CandidateFieldValidator()
        self.mutex = mutex or CandidateMutex()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def load(self, candidate_id: str) -> Candidate:
        """候補者を取得する.

        Raises:
            NotFoundError: 候補者が存在しない場合
        """
        candidate = await self.candidate_repository.get_by_candidate_id(candidate_id)
        if candidate is None:
            raise NotFoundError(
                f"Candidate {candidate_id} not found",
                {"candidate_id": candidate_id},
            )
        return candidate

    async def get_candidate(
        self, candidate_id: str, now: datetime | None = None
    ) -> dict[str, Any]:
        """候補者の外部表現（構造化）を取得する."""
        candidate = await self.load(candidate_id)
        return self.projector.to_dict(candidate, now)

    async def get_candidate_json(
        self, candidate_id: str, now: datetime | None = None
    ) -> str:
        """候補者の外部表現（JSON）を取得する."""
        candidate = await self.load(candidate_id)
        return self.projector.to_json(candidate, now)

    async def list_visible_candidates(
        self,
        limit: int | None = None,
        offset: int | None = None,
        now: datetime | None = None,
    ) -> list[dict[str, Any]]:
        """非表示でない候補者の外部表現を新しい順に取得する."""
        current = now or utc_now()
        candidates = await self.candidate_repository.get_visible(
            current, limit=limit, offset=offset
        )
        return [self.projector.to_dict(c, current) for c in candidates]

    async def liked_by(self, candidate_id: str, user: Any) -> bool:
        """ユーザーが候補者にいいね済みかどうか."""
        candidate = await self.load(candidate_id)
        return candidate.liked_by(user)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def like(self, candidate_id: str, user: Any) -> Candidate:
        """いいねする.

        Raises:
            NotFoundError: 候補者が存在しない場合
            InactiveError: 候補者がactiveでない場合
            DuplicateLikeError: 既にいいね済みの場合
            PersistenceError: 保存に失敗した場合
        """
        async with self.mutex.hold(candidate_id):
            candidate = await self.load(candidate_id)
            candidate.like(user)
            saved = await self._save(candidate, "like")
        logger.info("Candidate liked", candidate_id=candidate_id)
        return saved

    async def unlike(self, candidate_id: str, user: Any) -> Candidate:
        """いいねを取り消す. いいねが無い場合も保存して正常終了する.

        Raises:
            NotFoundError: 候補者が存在しない場合
            InactiveError: 候補者がactiveでない場合
            PersistenceError: 保存に失敗した場合
        """
        async with self.mutex.hold(candidate_id):
            candidate = await self.load(candidate_id)
            removed = candidate.unlike(user)
            saved = await self._save(candidate, "unlike")
        logger.info("Candidate unliked", candidate_id=candidate_id, removed=removed)
        return saved

    async def lock(self, candidate_id: str, at: datetime | None = None) -> Candidate:
        """ロックする（atに未来日時を指定すると予約ロック）."""
        async with self.mutex.hold(candidate_id):
            candidate = await self.load(candidate_id)
            candidate.lock(at)
            saved = await self._save(candidate, "lock")
        logger.info(
            "Candidate locked", candidate_id=candidate_id, locked_at=saved.locked_at
        )
        return saved

    async def unlock(self, candidate_id: str) -> Candidate:
        """ロックを解除する."""
        async with self.mutex.hold(candidate_id):
            candidate = await self.load(candidate_id)
            candidate.unlock()
            saved = await self._save(candidate, "unlock")
        logger.info("Candidate unlocked", candidate_id=candidate_id)
        return saved

    async def hide(self, candidate_id: str, at: datetime | None = None) -> Candidate:
        """非表示にする（atに未来日時を指定すると予約非表示）."""
        async with self.mutex.hold(candidate_id):
            candidate = await self.load(candidate_id)
            candidate.hide(at)
            saved = await self._save(candidate, "hide")
        logger.info(
            "Candidate hidden", candidate_id=candidate_id, hidden_at=saved.hidden_at
        )
        return saved

    async def unhide(self, candidate_id: str) -> Candidate:
        """非表示を解除する."""
        async with self.mutex.hold(candidate_id):
            candidate = await self.load(candidate_id)
            candidate.unhide()
            saved = await self._save(candidate, "unhide")
        logger.info("Candidate unhidden", candidate_id=candidate_id)
        return saved

    async def update_profile(
        self, input_dto: UpdateCandidateProfileInputDto
    ) -> Candidate:
        """連絡先・リンク・政策情報を更新する.

        バリデーションは保存前に行い、不正なフィールドがあれば
        すべてのフィールドのエラーをまとめて ValidationError として送出する。

        Raises:
            NotFoundError: 候補者が存在しない場合
            ValidationError: 連絡先・リンクが不正な場合
            PersistenceError: 保存に失敗した場合
        """
        self.field_validator.ensure_valid(input_dto.contact, input_dto.links)

        async with self.mutex.hold(input_dto.candidate_id):
            candidate = await self.load(input_dto.candidate_id)
            candidate.update_profile(
                contact=input_dto.contact,
                links=input_dto.links,
                program_info=sanitize_program_info(input_dto.program_info),
            )
            saved = await self._save(candidate, "update_profile")
        logger.info("Candidate profile updated", candidate_id=input_dto.candidate_id)
        return saved

    async def _save(self, candidate: Candidate, operation: str) -> Candidate:
        try:
            return await self.candidate_repository.save(candidate)
        except PersistenceError as e:
            logger.error(
                "Failed to persist candidate",
                candidate_id=candidate.candidate_id,
                operation=operation,
                error=str(e),
            )
            raise
