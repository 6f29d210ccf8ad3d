"""
Matcher pairing compatible users from the waiting pool.

Pairing is one critical section under the pool lock: the candidate
search, the re-validation and the promotion into the session registry
cannot interleave with enqueue, cancel or end.
"""

import logging
from typing import Optional, List

from database.models import Session, WaitingEntry
from engine.errors import NotWaiting, InvariantViolation
from engine.waiting_pool import WaitingPool

logger = logging.getLogger(__name__)


class Matcher:
    """Pairs waiting users with mutual gender preference."""

    def __init__(self, pool: WaitingPool) -> None:
        self.pool = pool
        self.sessions = pool.sessions

    async def try_match(self, identity: int) -> Optional[Session]:
        """
        Find a partner for a waiting user and open a session.

        Args:
            identity: Waiting user's identity

        Returns:
            Created session or None if no compatible user is waiting

        Raises:
            NotWaiting: If the user is not in the waiting pool
        """
        async with self.pool.lock:
            entry = self.pool.get(identity)
            if entry is None:
                raise NotWaiting(identity)

            for candidate in self.pool.candidates_for_locked(entry):
                if not self._still_eligible(entry, candidate):
                    continue
                return self._promote(entry, candidate)

        logger.debug(f"No match found for user {identity}")
        return None

    def _still_eligible(self, entry: WaitingEntry, candidate: WaitingEntry) -> bool:
        """Re-validate a pair against the current pool and registry state."""
        for current in (entry, candidate):
            if self.pool.get(current.identity) is not current:
                return False
            if current.identity in self.sessions:
                raise InvariantViolation(
                    current.identity, f"User {current.identity} is both waiting and in a session"
                )

        return entry.is_compatible(candidate)

    def _promote(self, entry: WaitingEntry, candidate: WaitingEntry) -> Session:
        self.pool.remove_locked(entry.identity)
        self.pool.remove_locked(candidate.identity)
        # Longest-waiting user first
        first, second = sorted((entry, candidate), key=lambda e: e.order_key)
        session = self.sessions.open_locked(first.identity, second.identity)

        logger.info(f"Match found: {first.identity} <-> {second.identity}")
        return session

    async def sweep(self) -> List[Session]:
        """
        Re-run matching for every waiting user.

        Returns:
            Sessions created during this pass
        """
        created = []
        for identity in self.pool.identities():
            if identity not in self.pool:
                # Matched earlier in this pass or cancelled meanwhile
                continue
            try:
                session = await self.try_match(identity)
            except NotWaiting:
                continue
            if session:
                created.append(session)

        if created:
            logger.info(f"Sweep paired {len(created)} sessions")
        return created
