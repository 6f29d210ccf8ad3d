"""
Chat engine facade.

Wires the waiting pool, matcher, session registry and relay together and
exposes the transport events the bot front end dispatches to. External
calls (profile lookups, deliveries) never run while the pool lock is held.
"""

import logging
from typing import Optional, List

from database.models import Gender, Session, UserState, WaitingEntry
from engine.errors import (
    NotRegistered,
    NotWaiting,
    AlreadyWaiting,
    AlreadyInSession,
    InvariantViolation
)
from engine.interfaces import ProfileGateway, Transport
from engine.matcher import Matcher
from engine.relay import Relay
from engine.session_registry import SessionRegistry
from engine.waiting_pool import WaitingPool

logger = logging.getLogger(__name__)


SEARCHING_TEXT = "🔍 Searching started...\n\nWe'll let you know as soon as someone is found."
PAIRED_TEXT = (
    "✅ Partner Found!\n\n"
    "🎭 Chat started anonymously.\n"
    "Start the conversation with greetings and respect."
)
CANCELLED_TEXT = "Operation cancelled"
ENDED_TEXT = "👋 Chat Ended\n\nThe chat session has been ended."
PARTNER_LEFT_TEXT = "👋 Chat Ended\n\nYour partner has left the chat."
RESET_TEXT = "⚠️ Something went wrong with your chat and it has been reset."


class ChatEngine:
    """Matchmaking and relay engine for anonymous one-to-one chats."""

    def __init__(self, profiles: ProfileGateway, transport: Transport) -> None:
        """
        Initialize the engine with its collaborators.

        Args:
            profiles: Profile lookup used before searching
            transport: Outbound delivery to users
        """
        self.profiles = profiles
        self.transport = transport
        self.sessions = SessionRegistry()
        self.pool = WaitingPool(self.sessions)
        self.matcher = Matcher(self.pool)
        self.relay = Relay(self.sessions, transport)

    def state_of(self, identity: int) -> UserState:
        """
        Get a user's lifecycle state.

        Raises:
            InvariantViolation: If the user is both waiting and paired
        """
        waiting = identity in self.pool
        paired = identity in self.sessions

        if waiting and paired:
            raise InvariantViolation(identity, f"User {identity} is both waiting and in a session")
        if paired:
            return UserState.PAIRED
        if waiting:
            return UserState.SEARCHING
        return UserState.IDLE

    async def on_search_requested(self, identity: int, requested_gender: Gender) -> Optional[Session]:
        """
        Start searching and try to pair the user right away.

        Args:
            identity: Searching user
            requested_gender: Gender the user wants to chat with

        Returns:
            Created session or None if the user stays in the pool

        Raises:
            NotRegistered: If the user has no profile
            AlreadyWaiting: If the user is already searching
            AlreadyInSession: If the user is already paired
        """
        # Reject early before hitting the profile store; enqueue re-checks under the lock
        state = self.state_of(identity)
        if state is UserState.SEARCHING:
            raise AlreadyWaiting(identity)
        if state is UserState.PAIRED:
            raise AlreadyInSession(identity)

        profile = await self.profiles.get_profile(identity)
        if profile is None:
            raise NotRegistered(identity)

        entry = WaitingEntry(
            identity=identity,
            gender=profile.gender,
            requested_gender=Gender(requested_gender),
            fullname=profile.fullname,
        )
        await self.pool.enqueue(entry)
        await self.transport.send(identity, SEARCHING_TEXT, keyboard="searching")

        try:
            session = await self.matcher.try_match(identity)
        except NotWaiting:
            # Cancelled or paired by the sweeper while the notice was in flight
            return None

        if session:
            await self._announce(session)
        return session

    async def on_cancel_requested(self, identity: int) -> None:
        """
        Stop searching.

        Raises:
            NotWaiting: If the user is not searching
        """
        await self.pool.cancel(identity)
        await self.transport.send(identity, CANCELLED_TEXT, keyboard="home")

    async def on_end_requested(self, identity: int) -> int:
        """
        End the user's chat and notify both sides.

        Returns:
            Former partner's identity

        Raises:
            NotInSession: If the chat was already ended
        """
        partner = await self.sessions.end(identity)

        await self.transport.send(identity, ENDED_TEXT, keyboard="home")
        await self.transport.send(partner, PARTNER_LEFT_TEXT, keyboard="home")
        return partner

    async def on_disconnect(self, identity: int) -> Optional[int]:
        """
        Drop a user who can no longer be reached.

        Cancels a pending search or ends the active chat. Idle users are a no-op.

        Returns:
            Former partner's identity, if the user was paired
        """
        partner = None
        async with self.pool.lock:
            if identity in self.pool:
                self.pool.remove_locked(identity)
                logger.info(f"User {identity} disconnected while waiting")
            if identity in self.sessions:
                session = self.sessions.end_locked(identity)
                partner = session.partner_of(identity)
                logger.info(f"User {identity} disconnected from session {session.session_id}")

        if partner is not None:
            await self.transport.send(partner, PARTNER_LEFT_TEXT, keyboard="home")
        return partner

    async def on_message(self, identity: int, text: str) -> bool:
        """
        Relay a text message to the user's partner.

        Returns:
            False if the partner was unreachable

        Raises:
            NotInSession: If the user has no active chat
        """
        return await self.relay.relay(identity, text)

    async def on_copy(self, identity: int, message_id: int) -> bool:
        """Relay a copy of a non-text message to the user's partner."""
        return await self.relay.relay_copy(identity, message_id)

    async def sweep(self) -> List[Session]:
        """Re-run matching over the whole pool and announce new sessions."""
        created = await self.matcher.sweep()
        for session in created:
            await self._announce(session)
        return created

    async def reset(self, identity: int) -> None:
        """Forcibly return a user (and any partner) to idle."""
        async with self.pool.lock:
            if identity in self.pool:
                self.pool.remove_locked(identity)
            session = self.sessions.discard_locked(identity)

        logger.warning(f"User {identity} forcibly reset to idle")
        await self.transport.send(identity, RESET_TEXT, keyboard="home")
        if session:
            partner = session.partner_of(identity)
            await self.transport.send(partner, PARTNER_LEFT_TEXT, keyboard="home")

    async def _announce(self, session: Session) -> None:
        for participant in session.participants:
            delivered = await self.transport.send(participant, PAIRED_TEXT, keyboard="chat")
            if not delivered:
                logger.warning(f"Could not notify {participant} about session {session.session_id}")
