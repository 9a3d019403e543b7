"""Async database configuration and session management."""

import asyncio

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import ClassVar

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.infrastructure.config.settings import get_settings


class AsyncDatabase:
    """Async database manager.

    イベントループごとにエンジンを管理する。CLIのように
    asyncio.run() を繰り返し呼ぶ環境でも、別ループで作られた
    コネクションを使い回さない。
    """

    _engines: ClassVar[dict[tuple[str, int], AsyncEngine]] = {}
    _session_makers: ClassVar[
        dict[tuple[str, int], async_sessionmaker[AsyncSession]]
    ] = {}

    def __init__(self, database_url: str | None = None, echo: bool | None = None):
        """Initialize async database manager.

        Args:
            database_url: 接続先URL（未指定の場合は設定から取得）
            echo: SQLをログ出力するかどうか
        """
        settings = get_settings()
        self._async_url = database_url or settings.get_async_database_url()
        self._echo = settings.DATABASE_ECHO if echo is None else echo

    def _get_engine_and_session_maker(
        self,
    ) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
        """現在のイベントループに対応するエンジンとセッションメーカーを取得する。"""
        try:
            loop_id = id(asyncio.get_running_loop())
        except RuntimeError:
            # イベントループが存在しない場合は0をIDとして使用
            loop_id = 0
        key = (self._async_url, loop_id)

        if key not in self._engines:
            engine = create_async_engine(self._async_url, echo=self._echo)
            self._engines[key] = engine
            self._session_makers[key] = async_sessionmaker(
                engine, class_=AsyncSession, expire_on_commit=False
            )

        return self._engines[key], self._session_makers[key]

    @property
    def engine(self) -> AsyncEngine:
        """現在のイベントループに対応するエンジンを取得する。"""
        engine, _ = self._get_engine_and_session_maker()
        return engine

    @property
    def async_session_maker(self) -> async_sessionmaker[AsyncSession]:
        """現在のイベントループに対応するセッションメーカーを取得する。"""
        _, session_maker = self._get_engine_and_session_maker()
        return session_maker

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession]:
        """Get an async database session.

        Repositories commit their own writes; this context only rolls back
        on error and always closes the session.

        Yields:
            AsyncSession: Database session
        """
        async with self.async_session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def dispose(self) -> None:
        """現在のイベントループのエンジンを破棄する。"""
        try:
            loop_id = id(asyncio.get_running_loop())
        except RuntimeError:
            loop_id = 0
        key = (self._async_url, loop_id)
        engine = self._engines.pop(key, None)
        self._session_makers.pop(key, None)
        if engine is not None:
            await engine.dispose()
