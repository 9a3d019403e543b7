"""Commands for operating on candidates.

候補者の参照（投影済みJSON）と、いいね・ロック・非表示の操作を行う。
出力は常に CandidateProjector を通すため、非表示の候補者や
投票者のIDが表示されることはない。
"""

import asyncio
import json

from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any, TypeVar

import click

from src.application.services.candidate_field_validator import (
    CandidateFieldValidator,
)
from src.application.usecases.manage_candidates_usecase import (
    ManageCandidatesUseCase,
)
from src.domain.exceptions import CandidateError
from src.infrastructure.config.async_database import AsyncDatabase
from src.infrastructure.config.settings import get_settings
from src.infrastructure.persistence.candidate_repository_impl import (
    CandidateRepositoryImpl,
)
from src.infrastructure.persistence.sqlalchemy_session_adapter import (
    SQLAlchemySessionAdapter,
)
from src.interfaces.cli.base import BaseCommand


T = TypeVar("T")

DATETIME_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S"]


def run_with_usecase(operation: Callable[[ManageCandidatesUseCase], Awaitable[T]]) -> T:
    """DBセッションを開いてユースケースを組み立て、操作を実行する."""

    async def runner() -> T:
        settings = get_settings()
        database = AsyncDatabase()
        try:
            async with database.get_session() as session:
                use_case = ManageCandidatesUseCase(
                    candidate_repository=CandidateRepositoryImpl(
                        SQLAlchemySessionAdapter(session)
                    ),
                    field_validator=CandidateFieldValidator(settings.PHONE_REGION),
                )
                return await operation(use_case)
        finally:
            await database.dispose()

    return asyncio.run(runner())


class CandidateCommands(BaseCommand):
    """Commands for candidates."""

    def get_commands(self) -> list[click.Command]:
        """Get list of candidate commands"""
        return [
            CandidateCommands.show,
            CandidateCommands.list_candidates,
            CandidateCommands.like,
            CandidateCommands.unlike,
            CandidateCommands.lock,
            CandidateCommands.unlock,
            CandidateCommands.hide,
            CandidateCommands.unhide,
        ]

    @staticmethod
    def _execute(
        operation: Callable[[ManageCandidatesUseCase], Awaitable[Any]],
    ) -> Any:
        """操作を実行し、ドメイン例外はエラー表示して終了コード1で終える."""
        try:
            return run_with_usecase(operation)
        except CandidateError as e:
            CandidateCommands.echo_error(e.message)
            raise SystemExit(1) from e

    @staticmethod
    def _mutate(
        operation: Callable[[ManageCandidatesUseCase], Awaitable[Any]],
        candidate_id: str,
        message: str,
    ) -> None:
        """変更操作を実行し、結果の候補者を投影して表示する."""

        async def mutate_and_project(use_case: ManageCandidatesUseCase) -> str:
            saved = await operation(use_case)
            return use_case.projector.to_json(saved)

        projected = CandidateCommands._execute(mutate_and_project)
        CandidateCommands.echo_success(f"{message}: {candidate_id}")
        CandidateCommands.echo_info(projected)

    @staticmethod
    @click.command("show")
    @click.argument("candidate_id")
    def show(candidate_id: str):
        """候補者を表示（非表示の候補者は最小限の情報のみ）"""
        projected = CandidateCommands._execute(
            lambda uc: uc.get_candidate_json(candidate_id)
        )
        CandidateCommands.echo_info(projected)

    @staticmethod
    @click.command("list")
    @click.option("--limit", type=int, default=20, show_default=True, help="最大件数")
    @click.option("--offset", type=int, default=0, show_default=True, help="スキップ件数")
    def list_candidates(limit: int, offset: int):
        """非表示でない候補者を新しい順に一覧表示"""
        views = CandidateCommands._execute(
            lambda uc: uc.list_visible_candidates(limit=limit, offset=offset)
        )
        if not views:
            CandidateCommands.echo_info("候補者がいません")
            return
        for view in views:
            CandidateCommands.echo_info(json.dumps(view, default=str, ensure_ascii=False))

    @staticmethod
    @click.command("like")
    @click.argument("candidate_id")
    @click.argument("user_id")
    def like(candidate_id: str, user_id: str):
        """ユーザーとして候補者にいいねする"""
        CandidateCommands._mutate(
            lambda uc: uc.like(candidate_id, user_id), candidate_id, "いいねしました"
        )

    @staticmethod
    @click.command("unlike")
    @click.argument("candidate_id")
    @click.argument("user_id")
    def unlike(candidate_id: str, user_id: str):
        """ユーザーのいいねを取り消す"""
        CandidateCommands._mutate(
            lambda uc: uc.unlike(candidate_id, user_id),
            candidate_id,
            "いいねを取り消しました",
        )

    @staticmethod
    @click.command("lock")
    @click.argument("candidate_id")
    @click.option(
        "--at",
        type=click.DateTime(formats=DATETIME_FORMATS),
        help="ロック日時（UTC）。未来日時を指定すると予約ロック",
    )
    def lock(candidate_id: str, at: datetime | None = None):
        """候補者をロックする"""
        CandidateCommands._mutate(
            lambda uc: uc.lock(candidate_id, at), candidate_id, "ロックしました"
        )

    @staticmethod
    @click.command("unlock")
    @click.argument("candidate_id")
    def unlock(candidate_id: str):
        """候補者のロックを解除する"""
        CandidateCommands._mutate(
            lambda uc: uc.unlock(candidate_id), candidate_id, "ロックを解除しました"
        )

    @staticmethod
    @click.command("hide")
    @click.argument("candidate_id")
    @click.option(
        "--at",
        type=click.DateTime(formats=DATETIME_FORMATS),
        help="非表示日時（UTC）。未来日時を指定すると予約非表示",
    )
    def hide(candidate_id: str, at: datetime | None = None):
        """候補者を非表示にする"""
        CandidateCommands._mutate(
            lambda uc: uc.hide(candidate_id, at), candidate_id, "非表示にしました"
        )

    @staticmethod
    @click.command("unhide")
    @click.argument("candidate_id")
    def unhide(candidate_id: str):
        """候補者の非表示を解除する"""
        CandidateCommands._mutate(
            lambda uc: uc.unhide(candidate_id), candidate_id, "非表示を解除しました"
        )
