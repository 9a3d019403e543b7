"""ISessionAdapter implementation backed by SQLAlchemy's AsyncSession."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.repositories.session_adapter import ISessionAdapter


class SQLAlchemySessionAdapter(ISessionAdapter):
    """Delegates every session operation to a wrapped AsyncSession.

    CandidateRepositoryImpl only talks to ISessionAdapter, so tests can hand
    it a mock instead of a live database session.
    """

    def __init__(self, async_session: AsyncSession):
        self._session = async_session

    async def execute(self, statement: Any, params: dict[str, Any] | None = None) -> Any:
        if params:
            return await self._session.execute(statement, params)
        return await self._session.execute(statement)

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    async def close(self) -> None:
        await self._session.close()

    def add(self, instance: Any) -> None:
        self._session.add(instance)

    async def flush(self) -> None:
        await self._session.flush()

    async def refresh(self, instance: Any) -> None:
        await self._session.refresh(instance)

    async def get(self, entity_type: Any, entity_id: Any) -> Any | None:
        return await self._session.get(entity_type, entity_id)

    async def delete(self, instance: Any) -> None:
        await self._session.delete(instance)
