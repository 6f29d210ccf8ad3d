"""
Active session registry.

Holds one-to-one chat sessions in memory, indexed by both participants.
"""

import asyncio
import logging
from typing import Optional, Dict

from database.models import Session
from engine.errors import AlreadyInSession, NotInSession, InvariantViolation

logger = logging.getLogger(__name__)


class SessionRegistry:
    """
    Registry of active chat sessions.

    The registry lock is shared with the waiting pool so that pairing,
    cancellation and termination are serialized against each other.
    Methods ending in ``_locked`` expect the caller to hold ``lock``.
    """

    def __init__(self, lock: Optional[asyncio.Lock] = None) -> None:
        self.lock = lock or asyncio.Lock()
        # identity -> Session, two keys per session
        self._by_identity: Dict[int, Session] = {}

    def __len__(self) -> int:
        return len(self._by_identity) // 2

    def __contains__(self, identity: int) -> bool:
        return identity in self._by_identity

    def find(self, identity: int) -> Optional[Session]:
        """
        Get the active session containing a user.

        Args:
            identity: User identity

        Returns:
            Session or None if the user is not paired
        """
        return self._by_identity.get(identity)

    def open_locked(self, identity_a: int, identity_b: int) -> Session:
        """
        Insert a new session for a pair.

        Args:
            identity_a: First participant
            identity_b: Second participant

        Returns:
            Created session

        Raises:
            AlreadyInSession: If either participant is already paired
        """
        for identity in (identity_a, identity_b):
            if identity in self._by_identity:
                raise AlreadyInSession(identity)

        session = Session(participant_a=identity_a, participant_b=identity_b)
        self._by_identity[identity_a] = session
        self._by_identity[identity_b] = session

        logger.info(f"Session opened: {session.session_id} ({identity_a} <-> {identity_b})")
        return session

    def end_locked(self, identity: int) -> Session:
        """
        Remove the whole session containing a user.

        Args:
            identity: Either participant

        Returns:
            The removed session

        Raises:
            NotInSession: If the user has no active session
            InvariantViolation: If the partner index is out of sync
        """
        session = self._by_identity.get(identity)
        if session is None:
            raise NotInSession(identity)

        partner = session.partner_of(identity)
        if self._by_identity.get(partner) is not session:
            # Drop the dangling half before reporting
            del self._by_identity[identity]
            raise InvariantViolation(
                identity, f"Session {session.session_id} indexed for {identity} but not for {partner}"
            )

        del self._by_identity[identity]
        del self._by_identity[partner]

        logger.info(f"Session ended: {session.session_id} by {identity}")
        return session

    async def end(self, identity: int) -> int:
        """
        End the session containing a user.

        Args:
            identity: Either participant

        Returns:
            Counterpart identity, so the caller can notify them

        Raises:
            NotInSession: If the session was already ended
        """
        async with self.lock:
            session = self.end_locked(identity)
        return session.partner_of(identity)

    def discard_locked(self, identity: int) -> Optional[Session]:
        """Remove any trace of a user, including a half-indexed session."""
        session = self._by_identity.pop(identity, None)
        if session is None:
            return None

        partner = session.partner_of(identity)
        if self._by_identity.get(partner) is session:
            del self._by_identity[partner]
        return session
