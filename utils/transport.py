"""
Telegram transport for the chat engine.

Delivers engine output through the aiogram Bot API client.
"""

import logging
from typing import Optional

from aiogram import Bot
from aiogram.exceptions import (
    TelegramBadRequest,
    TelegramForbiddenError,
    TelegramNetworkError,
    TelegramRetryAfter
)

from utils.keyboards import get_keyboard

logger = logging.getLogger(__name__)

DELIVERY_ERRORS = (
    TelegramBadRequest,
    TelegramForbiddenError,
    TelegramNetworkError,
    TelegramRetryAfter
)


class BotTransport:
    """Sends messages to users' private chats."""

    def __init__(self, bot: Bot) -> None:
        self.bot = bot

    async def send(self, identity: int, text: str, keyboard: Optional[str] = None) -> bool:
        """
        Send a text message to a user.

        Args:
            identity: Telegram user ID
            text: Message text, sent as plain text
            keyboard: Reply keyboard name

        Returns:
            True if delivered
        """
        try:
            await self.bot.send_message(
                chat_id=identity,
                text=text,
                parse_mode=None,
                reply_markup=get_keyboard(keyboard)
            )
            return True
        except DELIVERY_ERRORS as e:
            logger.warning(f"Could not deliver message to {identity}: {e}")
            return False

    async def copy(self, identity: int, from_identity: int, message_id: int) -> bool:
        """
        Send an anonymous copy of a message to a user.

        Args:
            identity: Recipient Telegram user ID
            from_identity: Sender Telegram user ID
            message_id: Message ID in the sender's chat

        Returns:
            True if delivered
        """
        try:
            await self.bot.copy_message(
                chat_id=identity,
                from_chat_id=from_identity,
                message_id=message_id
            )
            return True
        except DELIVERY_ERRORS as e:
            logger.warning(f"Could not copy message {message_id} to {identity}: {e}")
            return False
