"""
Invariant guard middleware.

Catches engine state inconsistencies at the handler boundary and resets
the affected user instead of letting the update fail.
"""

import logging
from typing import Callable, Dict, Any, Awaitable

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject

from engine import InvariantViolation

logger = logging.getLogger(__name__)


class InvariantGuardMiddleware(BaseMiddleware):
    """Middleware resetting users whose engine state is corrupted."""

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any]
    ) -> Any:
        """
        Run the handler and recover from invariant violations.

        Args:
            handler: Next handler in chain
            event: Incoming event
            data: Additional data, including the chat engine

        Returns:
            Handler result, or None after a forced reset
        """
        try:
            return await handler(event, data)
        except InvariantViolation as e:
            logger.error(f"Invariant violation for user {e.identity}: {e}", exc_info=True)
            await data["engine"].reset(e.identity)
            return None
