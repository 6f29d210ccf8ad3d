"""
Waiting pool of users currently searching for a partner.

Entries are bucketed by (gender, requested_gender) so that the compatible
candidates of any entry live in a single bucket, kept in enqueue order.
"""

import logging
from typing import Dict, List, Optional, Tuple

from database.models import Gender, WaitingEntry
from engine.errors import AlreadyWaiting, AlreadyInSession, NotWaiting
from engine.session_registry import SessionRegistry

logger = logging.getLogger(__name__)


class WaitingPool:
    """In-memory pool of searching users."""

    def __init__(self, sessions: SessionRegistry) -> None:
        """
        Initialize the pool on top of a session registry.

        Args:
            sessions: Registry whose lock the pool shares
        """
        self.sessions = sessions
        self.lock = sessions.lock
        # identity -> WaitingEntry, insertion order is enqueue order
        self._entries: Dict[int, WaitingEntry] = {}
        # (gender, requested_gender) -> {identity: WaitingEntry}
        self._buckets: Dict[Tuple[Gender, Gender], Dict[int, WaitingEntry]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identity: int) -> bool:
        return identity in self._entries

    def get(self, identity: int) -> Optional[WaitingEntry]:
        """Get a user's waiting entry, if any."""
        return self._entries.get(identity)

    def identities(self) -> List[int]:
        """Return waiting identities, longest-waiting first."""
        return [entry.identity for entry in sorted(self._entries.values(), key=lambda e: e.order_key)]

    async def enqueue(self, entry: WaitingEntry) -> None:
        """
        Add a user to the pool.

        Args:
            entry: Waiting entry to insert

        Raises:
            AlreadyWaiting: If the user is already searching
            AlreadyInSession: If the user is currently paired
        """
        async with self.lock:
            self.enqueue_locked(entry)

    def enqueue_locked(self, entry: WaitingEntry) -> None:
        if entry.identity in self._entries:
            raise AlreadyWaiting(entry.identity)
        if entry.identity in self.sessions:
            raise AlreadyInSession(entry.identity)

        self._entries[entry.identity] = entry
        bucket = self._buckets.setdefault((entry.gender, entry.requested_gender), {})
        bucket[entry.identity] = entry

        logger.info(
            f"User {entry.identity} waiting: {entry.gender.value} looking for {entry.requested_gender.value}"
        )

    async def cancel(self, identity: int) -> WaitingEntry:
        """
        Remove a user from the pool.

        Once this returns, no pairing attempt can see the entry.

        Args:
            identity: User identity

        Returns:
            The removed entry

        Raises:
            NotWaiting: If the user is not in the pool
        """
        async with self.lock:
            entry = self.remove_locked(identity)
        logger.info(f"User {identity} stopped waiting")
        return entry

    def remove_locked(self, identity: int) -> WaitingEntry:
        entry = self._entries.pop(identity, None)
        if entry is None:
            raise NotWaiting(identity)

        key = (entry.gender, entry.requested_gender)
        bucket = self._buckets.get(key, {})
        bucket.pop(identity, None)
        if not bucket:
            self._buckets.pop(key, None)

        return entry

    async def candidates_for(self, entry: WaitingEntry) -> List[WaitingEntry]:
        """
        Get compatible waiting users for an entry.

        Args:
            entry: Entry looking for a partner

        Returns:
            Compatible entries, longest-waiting first
        """
        async with self.lock:
            return self.candidates_for_locked(entry)

    def candidates_for_locked(self, entry: WaitingEntry) -> List[WaitingEntry]:
        # Candidates are the users whose gender is what entry wants and who want entry's gender
        bucket = self._buckets.get((entry.requested_gender, entry.gender), {})
        candidates = [other for other in bucket.values() if entry.is_compatible(other)]
        candidates.sort(key=lambda e: e.order_key)
        return candidates
