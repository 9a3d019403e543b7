"""Like entity."""

from datetime import datetime
from uuid import UUID, uuid4

from src.domain.entities.base import BaseEntity
from src.domain.services.candidate_status_service import ensure_utc, utc_now
from src.domain.value_objects.user_reference import UserId


class Like(BaseEntity):
    """ユーザーによる候補者への支持（いいね）を表すエンティティ.

    削除対象はユーザーではなくレコードそのものなので、
    ユーザーIDとは別に固有のID（UUID）を持つ。
    """

    def __init__(
        self,
        user_id: UserId,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        id: UUID | None = None,
    ) -> None:
        super().__init__(id or uuid4())
        self.user_id = user_id
        self.created_at = ensure_utc(created_at) or utc_now()
        self.updated_at = ensure_utc(updated_at) or self.created_at

    def belongs_to(self, user_id: UserId) -> bool:
        """このいいねが指定ユーザーのものかどうか."""
        return self.user_id == user_id
