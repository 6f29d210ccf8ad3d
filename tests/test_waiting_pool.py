"""
Tests for the waiting pool.
"""
import pytest

from database.models import Gender
from engine.errors import AlreadyWaiting, AlreadyInSession, NotWaiting
from tests.conftest import make_entry

MALE, FEMALE = Gender.MALE, Gender.FEMALE


class TestEnqueueAndCancel:
    """Pool membership changes."""

    @pytest.mark.asyncio
    async def test_enqueue_adds_entry(self, pool):
        entry = make_entry(1, MALE, FEMALE)
        await pool.enqueue(entry)

        assert 1 in pool
        assert pool.get(1) is entry
        assert len(pool) == 1

    @pytest.mark.asyncio
    async def test_enqueue_twice_is_rejected(self, pool):
        await pool.enqueue(make_entry(1, MALE, FEMALE))

        with pytest.raises(AlreadyWaiting):
            await pool.enqueue(make_entry(1, MALE, MALE))

        # Original preference is kept
        assert pool.get(1).requested_gender is FEMALE

    @pytest.mark.asyncio
    async def test_enqueue_while_paired_is_rejected(self, pool, registry):
        async with registry.lock:
            registry.open_locked(1, 2)

        with pytest.raises(AlreadyInSession):
            await pool.enqueue(make_entry(1, MALE, FEMALE))
        assert 1 not in pool

    @pytest.mark.asyncio
    async def test_cancel_removes_entry(self, pool):
        entry = make_entry(1, MALE, FEMALE)
        await pool.enqueue(entry)

        removed = await pool.cancel(1)

        assert removed is entry
        assert 1 not in pool
        assert len(pool) == 0

    @pytest.mark.asyncio
    async def test_cancel_when_not_waiting(self, pool):
        with pytest.raises(NotWaiting):
            await pool.cancel(42)

    @pytest.mark.asyncio
    async def test_cancelled_user_can_search_again(self, pool):
        await pool.enqueue(make_entry(1, MALE, FEMALE))
        await pool.cancel(1)
        await pool.enqueue(make_entry(1, MALE, MALE))

        assert pool.get(1).requested_gender is MALE


class TestCandidates:
    """Candidate selection."""

    @pytest.mark.asyncio
    async def test_only_mutually_compatible_candidates(self, pool):
        seeker = make_entry(1, MALE, FEMALE)
        await pool.enqueue(seeker)
        await pool.enqueue(make_entry(2, FEMALE, MALE))    # compatible
        await pool.enqueue(make_entry(3, FEMALE, FEMALE))  # wants a girl
        await pool.enqueue(make_entry(4, MALE, FEMALE))    # not a girl

        candidates = await pool.candidates_for(seeker)

        assert [c.identity for c in candidates] == [2]

    @pytest.mark.asyncio
    async def test_excludes_self(self, pool):
        seeker = make_entry(1, MALE, MALE)
        await pool.enqueue(seeker)

        assert await pool.candidates_for(seeker) == []

    @pytest.mark.asyncio
    async def test_longest_waiting_first(self, pool):
        seeker = make_entry(1, FEMALE, MALE)
        for identity in (10, 11, 12):
            await pool.enqueue(make_entry(identity, MALE, FEMALE))

        candidates = await pool.candidates_for(seeker)

        assert [c.identity for c in candidates] == [10, 11, 12]

    @pytest.mark.asyncio
    async def test_cancelled_entry_is_not_a_candidate(self, pool):
        seeker = make_entry(1, FEMALE, MALE)
        await pool.enqueue(make_entry(10, MALE, FEMALE))
        await pool.enqueue(make_entry(11, MALE, FEMALE))
        await pool.cancel(10)

        candidates = await pool.candidates_for(seeker)

        assert [c.identity for c in candidates] == [11]

    @pytest.mark.asyncio
    async def test_identities_in_enqueue_order(self, pool):
        for identity in (5, 3, 9):
            await pool.enqueue(make_entry(identity, MALE, FEMALE))

        assert pool.identities() == [5, 3, 9]
