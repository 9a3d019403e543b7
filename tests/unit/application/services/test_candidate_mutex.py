"""Tests for CandidateMutex."""

import asyncio

import pytest

from src.application.services.candidate_mutex import CandidateMutex


class TestCandidateMutex:
    @pytest.mark.asyncio
    async def test_hold_marks_candidate_as_held(self) -> None:
        mutex = CandidateMutex()

        async with mutex.hold("cand-001"):
            assert mutex.is_held("cand-001") is True
            assert mutex.is_held("cand-002") is False

        assert mutex.is_held("cand-001") is False

    @pytest.mark.asyncio
    async def test_same_candidate_is_serialized(self) -> None:
        """同じ候補者に対するクリティカルセクションが重ならないこと."""
        mutex = CandidateMutex()
        events: list[str] = []

        async def worker(name: str) -> None:
            async with mutex.hold("cand-001"):
                events.append(f"{name}:start")
                await asyncio.sleep(0.01)
                events.append(f"{name}:end")

        await asyncio.gather(worker("a"), worker("b"))

        assert events in (
            ["a:start", "a:end", "b:start", "b:end"],
            ["b:start", "b:end", "a:start", "a:end"],
        )

    @pytest.mark.asyncio
    async def test_different_candidates_do_not_block(self) -> None:
        mutex = CandidateMutex()
        entered = asyncio.Event()

        async def holder() -> None:
            async with mutex.hold("cand-001"):
                await asyncio.wait_for(entered.wait(), timeout=1)

        async def other() -> None:
            async with mutex.hold("cand-002"):
                entered.set()

        await asyncio.gather(holder(), other())

        assert entered.is_set()

    @pytest.mark.asyncio
    async def test_lock_released_on_error(self) -> None:
        mutex = CandidateMutex()

        with pytest.raises(RuntimeError):
            async with mutex.hold("cand-001"):
                raise RuntimeError("boom")

        assert mutex.is_held("cand-001") is False
        async with mutex.hold("cand-001"):
            assert mutex.is_held("cand-001") is True

    @pytest.mark.asyncio
    async def test_unused_locks_are_discarded(self) -> None:
        mutex = CandidateMutex()

        await asyncio.gather(
            *(self._touch(mutex, "cand-001") for _ in range(5)),
            self._touch(mutex, "cand-002"),
        )

        assert mutex._locks == {}
        assert mutex._waiters == {}

    @staticmethod
    async def _touch(mutex: CandidateMutex, candidate_id: str) -> None:
        async with mutex.hold(candidate_id):
            await asyncio.sleep(0)
