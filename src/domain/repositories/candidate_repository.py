"""Candidate repository interface."""

from abc import abstractmethod
from datetime import datetime

from src.domain.entities.candidate import Candidate
from src.domain.entities.like import Like
from src.domain.repositories.base import BaseRepository
from src.domain.value_objects.user_reference import UserId


class CandidateRepository(BaseRepository[Candidate]):
    """Repository interface for candidates."""

    @abstractmethod
    async def get_by_candidate_id(self, candidate_id: str) -> Candidate | None:
        """外部公開用の候補者IDで候補者（いいねを含む）を取得.

        Args:
            candidate_id: 候補者ID

        Returns:
            候補者エンティティ、見つからない場合はNone
        """
        pass

    @abstractmethod
    async def save(self, entity: Candidate) -> Candidate:
        """候補者といいねを保存する.

        メモリ上で変更済みのエンティティをそのまま渡してよい。
        保存は entity.version を条件とする楽観的排他制御で行う。

        Args:
            entity: 保存する候補者

        Returns:
            保存後の候補者（version・タイムスタンプ更新済み）

        Raises:
            ConcurrentModificationError: 他の書き込みと競合した場合
            DuplicateLikeError: 同一ユーザーのいいねが一意制約に違反した場合
            PersistenceError: その他の保存失敗
        """
        pass

    @abstractmethod
    async def find_like_by_user(self, candidate_id: str, user_id: UserId) -> Like | None:
        """候補者に対するユーザーのいいねを1件取得.

        Args:
            candidate_id: 候補者ID
            user_id: 正規化済みユーザーID

        Returns:
            いいね、存在しない場合はNone
        """
        pass

    @abstractmethod
    async def get_visible(
        self,
        now: datetime,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Candidate]:
        """指定時刻に非表示でない候補者を作成日時の降順で取得.

        Args:
            now: 判定基準時刻
            limit: 最大件数
            offset: スキップ件数

        Returns:
            候補者エンティティのリスト
        """
        pass
