"""
Message relay between session participants.
"""

import logging

from engine.errors import NotInSession
from engine.interfaces import Transport
from engine.session_registry import SessionRegistry

logger = logging.getLogger(__name__)


class Relay:
    """Forwards messages from one participant to the other, unmodified."""

    def __init__(self, sessions: SessionRegistry, transport: Transport) -> None:
        self.sessions = sessions
        self.transport = transport

    def _partner(self, identity: int):
        session = self.sessions.find(identity)
        if session is None:
            raise NotInSession(identity)
        return session, session.partner_of(identity)

    async def relay(self, identity: int, text: str) -> bool:
        """
        Forward a text message to the sender's partner.

        Args:
            identity: Sender
            text: Message text

        Returns:
            True if delivered, False if the partner was unreachable

        Raises:
            NotInSession: If the sender has no active session
        """
        session, partner = self._partner(identity)

        delivered = await self.transport.send(partner, text)
        if delivered:
            session.messages_count += 1
        else:
            logger.warning(f"Relay to {partner} failed in session {session.session_id}")
        return delivered

    async def relay_copy(self, identity: int, message_id: int) -> bool:
        """
        Forward a copy of any message (photo, sticker, voice...) to the partner.

        Raises:
            NotInSession: If the sender has no active session
        """
        session, partner = self._partner(identity)

        delivered = await self.transport.copy(partner, identity, message_id)
        if delivered:
            session.messages_count += 1
        else:
            logger.warning(f"Copy relay to {partner} failed in session {session.session_id}")
        return delivered
