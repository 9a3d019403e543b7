"""Candidate entity."""

from datetime import datetime
from typing import Any

from src.common.logging import get_logger
from src.domain.entities.base import BaseEntity
from src.domain.entities.like import Like
from src.domain.exceptions import DuplicateLikeError, InactiveError
from src.domain.services.candidate_status_service import (
    CandidateStatusService,
    ensure_utc,
    utc_now,
)
from src.domain.value_objects.candidate_profile import (
    CandidateLinks,
    ContactInfo,
    ProgramInfo,
)
from src.domain.value_objects.candidate_status import (
    CandidateStatus,
    CandidateStatusSnapshot,
)
from src.domain.value_objects.user_reference import UserId, resolve_user_id


logger = get_logger(__name__)


class Candidate(BaseEntity):
    """推薦・投票の対象となる候補者を表すエンティティ.

    ステータス（active / locked / hidden）はフィールドとして保持せず、
    locked_at / hidden_at と現在時刻から毎回導出する。
    いいねは1ユーザーにつき1件まで。いいね・取り消しはactiveの間のみ可能。

    ここでの操作はメモリ上の状態のみを変更する。永続化は
    ManageCandidatesUseCase がリポジトリ経由で行う。
    """

    def __init__(
        self,
        candidate_id: str,
        first_name: str,
        last_name: str,
        contact: ContactInfo | None = None,
        links: CandidateLinks | None = None,
        program_info: ProgramInfo | None = None,
        nominator_user_id: UserId | None = None,
        own_user_id: UserId | None = None,
        accepted_nomination_at: datetime | None = None,
        locked_at: datetime | None = None,
        hidden_at: datetime | None = None,
        likes: list[Like] | None = None,
        comment_ids: list[str] | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        version: int = 0,
        id: int | None = None,
        status_service: CandidateStatusService | None = None,
    ) -> None:
        """候補者エンティティを初期化する.

        Args:
            candidate_id: 外部に公開する安定した候補者ID（内部IDとは別）
            first_name: 名
            last_name: 姓
            contact: 連絡先
            links: 外部プロフィールへのリンク
            program_info: 政策情報
            nominator_user_id: 推薦したユーザーのID
            own_user_id: 候補者本人のユーザーID
            accepted_nomination_at: 推薦受諾日時
            locked_at: ロック日時（未来日時は予約扱い）
            hidden_at: 非表示日時（未来日時は予約扱い）
            likes: いいね（追加順）
            comment_ids: コメントへの参照
            created_at: 作成日時（ストアが管理）
            updated_at: 更新日時（ストアが管理）
            version: 楽観的排他制御用のバージョン（ストアが管理）
            id: 内部ID
            status_service: ステータス判定サービス
        """
        super().__init__(id)
        self.candidate_id = candidate_id
        self.first_name = first_name
        self.last_name = last_name
        self.contact = contact
        self.links = links
        self.program_info = program_info
        self.nominator_user_id = nominator_user_id
        self.own_user_id = own_user_id
        self.accepted_nomination_at = ensure_utc(accepted_nomination_at)
        self.locked_at = ensure_utc(locked_at)
        self.hidden_at = ensure_utc(hidden_at)
        self.likes: list[Like] = list(likes) if likes else []
        self.comment_ids: list[str] = list(comment_ids) if comment_ids else []
        self.created_at = ensure_utc(created_at)
        self.updated_at = ensure_utc(updated_at)
        self.version = version
        self._status_service = status_service or CandidateStatusService()

    # ------------------------------------------------------------------
    # Derived status
    # ------------------------------------------------------------------

    def status_at(self, now: datetime | None = None) -> CandidateStatus:
        """指定時刻におけるステータスを返す."""
        return self._status_service.evaluate(self.locked_at, self.hidden_at, now)

    def snapshot_at(self, now: datetime | None = None) -> CandidateStatusSnapshot:
        """指定時刻におけるステータスと派生フラグを返す."""
        return self._status_service.snapshot(
            self.locked_at, self.hidden_at, self.accepted_nomination_at, now
        )

    def full_name_at(self, now: datetime | None = None) -> str:
        """氏名. 非表示の場合は空文字列."""
        if self.status_at(now) == CandidateStatus.HIDDEN:
            return ""
        return f"{self.first_name} {self.last_name}"

    def num_likes_at(self, now: datetime | None = None) -> int:
        """いいね数. 非表示の場合は0."""
        if self.status_at(now) == CandidateStatus.HIDDEN:
            return 0
        return len(self.likes)

    @property
    def status(self) -> CandidateStatus:
        return self.status_at()

    @property
    def is_active(self) -> bool:
        return self.status == CandidateStatus.ACTIVE

    @property
    def is_locked(self) -> bool:
        return self.status == CandidateStatus.LOCKED

    @property
    def is_hidden(self) -> bool:
        return self.status == CandidateStatus.HIDDEN

    @property
    def accepted_nomination(self) -> bool:
        return self.snapshot_at().accepted_nomination

    @property
    def full_name(self) -> str:
        return self.full_name_at()

    @property
    def num_likes(self) -> int:
        return self.num_likes_at()

    # ------------------------------------------------------------------
    # Likes
    # ------------------------------------------------------------------

    def _likes_by(self, user_id: UserId) -> list[Like]:
        return [like for like in self.likes if like.belongs_to(user_id)]

    def _ensure_active(self, now: datetime | None) -> None:
        status = self.status_at(now)
        if status != CandidateStatus.ACTIVE:
            raise InactiveError(self.candidate_id, status.value)

    def liked_by(self, user: Any, now: datetime | None = None) -> bool:
        """ユーザーがいいね済みかどうか.

        ユーザー未指定、または非表示の候補者に対しては常にFalse。
        ちょうど1件のいいねが見つかった場合のみTrue。
        """
        if user is None or self.status_at(now) == CandidateStatus.HIDDEN:
            return False
        return len(self._likes_by(resolve_user_id(user))) == 1

    def like(self, user: Any, now: datetime | None = None) -> Like:
        """ユーザーのいいねを追加する.

        Args:
            user: ユーザーID、またはIDを持つオブジェクト
            now: 判定基準時刻（Noneの場合は現在時刻）

        Returns:
            追加されたいいね

        Raises:
            InactiveError: 候補者がactiveでない場合
            DuplicateLikeError: ユーザーが既にいいね済みの場合
        """
        current = ensure_utc(now) or utc_now()
        self._ensure_active(current)

        user_id = resolve_user_id(user)
        if self._likes_by(user_id):
            raise DuplicateLikeError(self.candidate_id)

        like = Like(user_id=user_id, created_at=current, updated_at=current)
        self.likes.append(like)
        return like

    def unlike(self, user: Any, now: datetime | None = None) -> int:
        """ユーザーのいいねをすべて取り消す.

        不変条件上は高々1件だが、重複が残っていた場合もすべて削除する。
        いいねが無い場合は何もしない（エラーにしない）。

        Returns:
            削除したいいねの件数

        Raises:
            InactiveError: 候補者がactiveでない場合
        """
        self._ensure_active(now)
        if user is None:
            return 0

        user_likes = self._likes_by(resolve_user_id(user))
        if len(user_likes) > 1:
            logger.warning(
                "Removing duplicate likes",
                candidate_id=self.candidate_id,
                count=len(user_likes),
            )

        removed_ids = {like.id for like in user_likes}
        self.likes = [like for like in self.likes if like.id not in removed_ids]
        return len(user_likes)

    # ------------------------------------------------------------------
    # Lock / hide
    # ------------------------------------------------------------------

    def lock(self, at: datetime | None = None) -> None:
        """ロックする. ``at`` に未来日時を渡すと予約ロックになる."""
        self.locked_at = ensure_utc(at) or utc_now()

    def unlock(self) -> None:
        """ロックを解除する."""
        self.locked_at = None

    def hide(self, at: datetime | None = None) -> None:
        """非表示にする. ``at`` に未来日時を渡すと予約非表示になる."""
        self.hidden_at = ensure_utc(at) or utc_now()

    def unhide(self) -> None:
        """非表示を解除する."""
        self.hidden_at = None

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def update_profile(
        self,
        contact: ContactInfo | None,
        links: CandidateLinks | None,
        program_info: ProgramInfo | None,
    ) -> None:
        """連絡先・リンク・政策情報を置き換える."""
        self.contact = contact
        self.links = links
        self.program_info = program_info

    def __str__(self) -> str:
        return f"{self.candidate_id} ({self.first_name} {self.last_name})"
