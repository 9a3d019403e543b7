"""候補者ごとの排他制御.

同じ候補者に対する「読み込み→チェック→保存」を直列化し、
同一ユーザーの同時いいねが両方成功しないようにする。
プロセスをまたぐ競合はリポジトリの楽観的排他制御（version）で検出する。
"""

import asyncio

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class CandidateMutex:
    """候補者IDごとに asyncio.Lock を払い出す."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiters: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, candidate_id: str) -> AsyncIterator[None]:
        """候補者のロックを取得して保持する.

        待機者がいなくなったロックは破棄する。
        """
        lock = self._locks.setdefault(candidate_id, asyncio.Lock())
        self._waiters[candidate_id] = self._waiters.get(candidate_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._waiters[candidate_id] -= 1
            if self._waiters[candidate_id] == 0:
                del self._waiters[candidate_id]
                del self._locks[candidate_id]

    def is_held(self, candidate_id: str) -> bool:
        """候補者のロックが保持されているかどうか."""
        lock = self._locks.get(candidate_id)
        return lock is not None and lock.locked()
