"""
System event handlers.

Treats a user blocking the bot as a disconnect.
"""

import logging

from aiogram import Router
from aiogram.filters import ChatMemberUpdatedFilter, KICKED
from aiogram.types import ChatMemberUpdated

from engine import ChatEngine

logger = logging.getLogger(__name__)
router = Router()


@router.my_chat_member(ChatMemberUpdatedFilter(member_status_changed=KICKED))
async def user_blocked_bot(event: ChatMemberUpdated, engine: ChatEngine) -> None:
    """
    Drop a user who blocked the bot from search and chat.

    Args:
        event: Chat member update
        engine: Chat engine
    """
    partner = await engine.on_disconnect(event.from_user.id)
    logger.info(f"User {event.from_user.id} blocked the bot (partner: {partner})")
