"""
Tests for the background matchmaking sweep.
"""
import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock

from database.models import Gender
from engine import run_matchmaking_worker
from engine.service import PAIRED_TEXT
from tests.conftest import make_entry


class TestMatchmakingWorker:
    """Periodic sweep loop."""

    @pytest.mark.asyncio
    async def test_worker_pairs_users_left_in_pool(self, engine, transport):
        # Entered the pool without an immediate match attempt
        await engine.pool.enqueue(make_entry(1, Gender.MALE, Gender.FEMALE))
        await engine.pool.enqueue(make_entry(2, Gender.FEMALE, Gender.MALE))

        task = asyncio.create_task(run_matchmaking_worker(engine, 0.01))
        await asyncio.sleep(0.1)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert engine.sessions.find(1) is engine.sessions.find(2) is not None
        assert (1, PAIRED_TEXT, "chat") in transport.sent
        assert (2, PAIRED_TEXT, "chat") in transport.sent

    @pytest.mark.asyncio
    async def test_worker_survives_sweep_errors(self):
        engine = MagicMock()
        engine.pool.__len__.return_value = 2
        engine.sweep = AsyncMock(side_effect=RuntimeError("boom"))

        task = asyncio.create_task(run_matchmaking_worker(engine, 0.01))
        await asyncio.sleep(0.1)
        assert not task.done()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert engine.sweep.await_count >= 2

    @pytest.mark.asyncio
    async def test_worker_skips_small_pool(self):
        engine = MagicMock()
        engine.pool.__len__.return_value = 1
        engine.sweep = AsyncMock()

        task = asyncio.create_task(run_matchmaking_worker(engine, 0.01))
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        engine.sweep.assert_not_awaited()
