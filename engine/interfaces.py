"""
Collaborator interfaces consumed by the chat engine.
"""

from typing import Optional, Protocol

from database.models import Profile


class ProfileGateway(Protocol):
    """Read-only access to registered user profiles."""

    async def get_profile(self, identity: int) -> Optional[Profile]:
        """Return the user's profile or None if not registered."""
        ...


class Transport(Protocol):
    """Outbound delivery to chat participants."""

    async def send(self, identity: int, text: str, keyboard: Optional[str] = None) -> bool:
        """
        Deliver text to a user.

        Args:
            identity: Recipient
            text: Message text
            keyboard: Name of the reply keyboard to attach (home, searching, chat)

        Returns:
            False if the recipient is unreachable
        """
        ...

    async def copy(self, identity: int, from_identity: int, message_id: int) -> bool:
        """Deliver an anonymous copy of another user's message."""
        ...
