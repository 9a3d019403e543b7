"""SQLAlchemy ORM models for candidates and likes."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    JSON,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


LIKES_UNIQUE_CONSTRAINT = "uq_candidate_likes_candidate_user"


class Base(DeclarativeBase):
    """Declarative base for ORM models."""


class CandidateModel(Base):
    """candidates テーブル."""

    __tablename__ = "candidates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    candidate_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)

    contact_postal: Mapped[str | None] = mapped_column(Text)
    contact_email: Mapped[str | None] = mapped_column(String(320))
    contact_phone: Mapped[str | None] = mapped_column(String(32))

    link_facebook: Mapped[str | None] = mapped_column(Text)
    link_personal: Mapped[str | None] = mapped_column(Text)
    link_twitter: Mapped[str | None] = mapped_column(Text)
    link_wikipedia: Mapped[str | None] = mapped_column(Text)

    program_title: Mapped[str | None] = mapped_column(Text)
    program_body: Mapped[str | None] = mapped_column(Text)

    nominator_user_id: Mapped[str | None] = mapped_column(String(64))
    own_user_id: Mapped[str | None] = mapped_column(String(64))

    accepted_nomination_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True)
    )
    locked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    hidden_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    comment_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    likes: Mapped[list["CandidateLikeModel"]] = relationship(
        back_populates="candidate",
        cascade="all, delete-orphan",
        order_by="CandidateLikeModel.id",
        lazy="selectin",
    )

    # UPDATE ... WHERE version = :old となり、競合時は StaleDataError
    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        Index("idx_candidates_created_at", created_at.desc()),
        Index("idx_candidates_locked_at", locked_at.desc()),
        Index("idx_candidates_hidden_at", hidden_at.desc()),
        Index("idx_candidates_name", "last_name", "first_name"),
    )


class CandidateLikeModel(Base):
    """candidate_likes テーブル."""

    __tablename__ = "candidate_likes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    like_uuid: Mapped[UUID] = mapped_column(Uuid, nullable=False, unique=True)
    candidate_pk: Mapped[int] = mapped_column(
        ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    candidate: Mapped[CandidateModel] = relationship(back_populates="likes")

    __table_args__ = (
        UniqueConstraint("candidate_pk", "user_id", name=LIKES_UNIQUE_CONSTRAINT),
    )
