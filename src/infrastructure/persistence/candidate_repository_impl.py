"""Candidate repository implementation using SQLAlchemy."""

import logging

from datetime import datetime

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from src.domain.entities.candidate import Candidate
from src.domain.entities.like import Like
from src.domain.exceptions import (
    ConcurrentModificationError,
    DuplicateLikeError,
    NotFoundError,
    PersistenceError,
)
from src.domain.repositories.candidate_repository import CandidateRepository
from src.domain.repositories.session_adapter import ISessionAdapter
from src.domain.services.candidate_status_service import utc_now
from src.domain.value_objects.candidate_profile import (
    CandidateLinks,
    ContactInfo,
    ProgramInfo,
)
from src.domain.value_objects.user_reference import UserId
from src.infrastructure.exceptions import DatabaseError
from src.infrastructure.persistence.base_repository_impl import BaseRepositoryImpl
from src.infrastructure.persistence.sqlalchemy_models import (
    LIKES_UNIQUE_CONSTRAINT,
    CandidateLikeModel,
    CandidateModel,
)


logger = logging.getLogger(__name__)


class CandidateRepositoryImpl(BaseRepositoryImpl[Candidate], CandidateRepository):
    """Candidate repository implementation using SQLAlchemy.

    save() is the serialization point for concurrent writers: the UPDATE is
    conditional on the version the entity was loaded with, and the unique
    (candidate, user) index on candidate_likes backs up the one-like-per-user
    invariant.
    """

    def __init__(self, session: AsyncSession | ISessionAdapter):
        """Initialize repository with database session.

        Args:
            session: AsyncSession for database operations
        """
        super().__init__(
            session=session,
            entity_class=Candidate,
            model_class=CandidateModel,
        )

    async def get_by_candidate_id(self, candidate_id: str) -> Candidate | None:
        """外部公開用の候補者IDで候補者を取得.

        Args:
            candidate_id: 候補者ID

        Returns:
            候補者エンティティ、見つからない場合はNone
        """
        try:
            query = select(CandidateModel).where(
                CandidateModel.candidate_id == candidate_id
            )
            result = await self.session.execute(query)
            model = result.scalars().first()
            return self._to_entity(model) if model else None

        except SQLAlchemyError as e:
            logger.error(f"Database error getting candidate by candidate_id: {e}")
            raise PersistenceError(
                "Failed to get candidate",
                {"candidate_id": candidate_id, "error": str(e)},
            ) from e

    async def find_like_by_user(
        self, candidate_id: str, user_id: UserId
    ) -> Like | None:
        """候補者に対するユーザーのいいねを1件取得.

        Args:
            candidate_id: 候補者ID
            user_id: 正規化済みユーザーID

        Returns:
            いいね、存在しない場合はNone
        """
        try:
            query = (
                select(CandidateLikeModel)
                .join(CandidateModel)
                .where(
                    CandidateModel.candidate_id == candidate_id,
                    CandidateLikeModel.user_id == user_id,
                )
                .order_by(CandidateLikeModel.id)
                .limit(1)
            )
            result = await self.session.execute(query)
            model = result.scalars().first()
            return self._like_to_entity(model) if model else None

        except SQLAlchemyError as e:
            logger.error(f"Database error finding like: {e}")
            raise PersistenceError(
                "Failed to find like",
                {"candidate_id": candidate_id, "error": str(e)},
            ) from e

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
        try:
            query = (
                select(CandidateModel)
                .where(
                    or_(
                        CandidateModel.hidden_at.is_(None),
                        CandidateModel.hidden_at > now,
                    )
                )
                .order_by(CandidateModel.created_at.desc(), CandidateModel.id.desc())
            )
            if offset:
                query = query.offset(offset)
            if limit:
                query = query.limit(limit)

            result = await self.session.execute(query)
            return [self._to_entity(model) for model in result.scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Database error getting visible candidates: {e}")
            raise PersistenceError(
                "Failed to get visible candidates", {"error": str(e)}
            ) from e

    async def save(self, entity: Candidate) -> Candidate:
        """候補者といいねを保存する.

        Args:
            entity: 保存する候補者（メモリ上で変更済みでよい）

        Returns:
            保存後の候補者

        Raises:
            NotFoundError: 既存IDの行が存在しない場合
            ConcurrentModificationError: バージョンが競合した場合
            DuplicateLikeError: いいねの一意制約に違反した場合
            PersistenceError: その他のデータベースエラー
        """
        try:
            if entity.id is None:
                model = self._to_model(entity)
                self.session.add(model)
            else:
                model = await self.session.get(CandidateModel, entity.id)
                if model is None:
                    raise NotFoundError(
                        f"Candidate with ID {entity.id} not found",
                        {"candidate_id": entity.candidate_id},
                    )
                if model.version != entity.version:
                    raise ConcurrentModificationError(
                        "Candidate was modified concurrently",
                        {
                            "candidate_id": entity.candidate_id,
                            "expected_version": entity.version,
                            "actual_version": model.version,
                        },
                    )
                self._update_model(model, entity)

            await self.session.flush()
            await self.session.commit()
            await self.session.refresh(model)
            return self._to_entity(model)

        except StaleDataError as e:
            logger.warning(f"Version conflict saving candidate: {e}")
            await self.session.rollback()
            raise ConcurrentModificationError(
                "Candidate was modified concurrently",
                {"candidate_id": entity.candidate_id, "error": str(e)},
            ) from e

        except IntegrityError as e:
            await self.session.rollback()
            if LIKES_UNIQUE_CONSTRAINT in str(e.orig):
                raise DuplicateLikeError(entity.candidate_id) from e
            logger.error(f"Integrity error saving candidate: {e}")
            raise PersistenceError(
                "Failed to save candidate",
                {"candidate_id": entity.candidate_id, "error": str(e)},
            ) from e

        except SQLAlchemyError as e:
            logger.error(f"Database error saving candidate: {e}")
            await self.session.rollback()
            raise PersistenceError(
                "Failed to save candidate",
                {"candidate_id": entity.candidate_id, "error": str(e)},
            ) from e

    async def create(self, entity: Candidate) -> Candidate:
        """Create a new candidate."""
        if entity.id is not None:
            raise ValueError("Entity already has an ID")
        return await self.save(entity)

    async def update(self, entity: Candidate) -> Candidate:
        """Update an existing candidate."""
        if not entity.id:
            raise ValueError("Entity must have an ID to update")
        return await self.save(entity)

    async def delete(self, entity_id: int) -> bool:
        """Delete a candidate and its likes by ID.

        Args:
            entity_id: Internal candidate ID

        Returns:
            True if deleted, False if not found
        """
        try:
            deleted = await super().delete(entity_id)
            if deleted:
                await self.session.commit()
            return deleted

        except SQLAlchemyError as e:
            logger.error(f"Database error deleting candidate: {e}")
            await self.session.rollback()
            raise DatabaseError(
                "Failed to delete candidate", {"id": entity_id, "error": str(e)}
            ) from e

    def _to_entity(self, model: CandidateModel) -> Candidate:
        """Convert database model to domain entity.

        Args:
            model: Database model

        Returns:
            Domain entity
        """
        contact = None
        if model.contact_postal or model.contact_email or model.contact_phone:
            contact = ContactInfo(
                postal=model.contact_postal,
                email=model.contact_email,
                phone=model.contact_phone,
            )

        links = None
        if (
            model.link_facebook
            or model.link_personal
            or model.link_twitter
            or model.link_wikipedia
        ):
            links = CandidateLinks(
                facebook=model.link_facebook,
                personal=model.link_personal,
                twitter=model.link_twitter,
                wikipedia=model.link_wikipedia,
            )

        program_info = None
        if model.program_title is not None or model.program_body is not None:
            program_info = ProgramInfo(
                title=model.program_title, body=model.program_body
            )

        return Candidate(
            id=model.id,
            candidate_id=model.candidate_id,
            first_name=model.first_name,
            last_name=model.last_name,
            contact=contact,
            links=links,
            program_info=program_info,
            nominator_user_id=(
                UserId(model.nominator_user_id) if model.nominator_user_id else None
            ),
            own_user_id=UserId(model.own_user_id) if model.own_user_id else None,
            accepted_nomination_at=model.accepted_nomination_at,
            locked_at=model.locked_at,
            hidden_at=model.hidden_at,
            likes=[self._like_to_entity(like) for like in model.likes],
            comment_ids=list(model.comment_ids or []),
            created_at=model.created_at,
            updated_at=model.updated_at,
            version=model.version,
        )

    def _to_model(self, entity: Candidate) -> CandidateModel:
        """Convert domain entity to database model.

        Args:
            entity: Domain entity

        Returns:
            Database model
        """
        now = utc_now()
        model = CandidateModel(
            candidate_id=entity.candidate_id,
            created_at=entity.created_at or now,
            likes=[],
        )
        self._update_model(model, entity)
        return model

    def _update_model(self, model: CandidateModel, entity: Candidate) -> None:
        """Update model from entity.

        Likes are matched by their UUID: kept likes reuse their rows, new
        likes get new rows, and rows for removed likes are deleted as orphans.

        Args:
            model: Database model to update
            entity: Source entity
        """
        contact = entity.contact or ContactInfo()
        links = entity.links or CandidateLinks()
        program_info = entity.program_info

        model.first_name = entity.first_name
        model.last_name = entity.last_name
        model.contact_postal = contact.postal
        model.contact_email = contact.email
        model.contact_phone = contact.phone
        model.link_facebook = links.facebook
        model.link_personal = links.personal
        model.link_twitter = links.twitter
        model.link_wikipedia = links.wikipedia
        model.program_title = program_info.title if program_info else None
        model.program_body = program_info.body if program_info else None
        model.nominator_user_id = entity.nominator_user_id
        model.own_user_id = entity.own_user_id
        model.accepted_nomination_at = entity.accepted_nomination_at
        model.locked_at = entity.locked_at
        model.hidden_at = entity.hidden_at
        model.comment_ids = list(entity.comment_ids)
        # 子行だけの変更でも親行をUPDATEしてバージョンを進める
        model.updated_at = utc_now()

        existing = {like.like_uuid: like for like in model.likes}
        model.likes = [
            existing.get(like.id) or self._like_to_model(like) for like in entity.likes
        ]

    @staticmethod
    def _like_to_entity(model: CandidateLikeModel) -> Like:
        return Like(
            id=model.like_uuid,
            user_id=UserId(model.user_id),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _like_to_model(like: Like) -> CandidateLikeModel:
        return CandidateLikeModel(
            like_uuid=like.id,
            user_id=like.user_id,
            created_at=like.created_at,
            updated_at=like.updated_at,
        )

