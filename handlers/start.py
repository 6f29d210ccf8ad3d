"""
Start and help handlers.
"""

import logging

from aiogram import Router
from aiogram.filters import CommandStart, Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from engine import ChatEngine
from database.models import UserState
from utils.keyboards import get_keyboard

logger = logging.getLogger(__name__)
router = Router()


@router.message(CommandStart())
async def cmd_start(message: Message, state: FSMContext, engine: ChatEngine) -> None:
    """
    Handle /start command.

    Args:
        message: Incoming message
        state: FSM context
        engine: Chat engine
    """
    if engine.state_of(message.from_user.id) is not UserState.IDLE:
        await message.answer("⚠️ You already have an operation in progress.")
        return

    await state.clear()

    profile = await engine.profiles.get_profile(message.from_user.id)
    if profile:
        await message.answer("What can I do for you?", reply_markup=get_keyboard("home"))
        return

    await message.answer(
        "👋 <b>Welcome to Anonymous Chat!</b>\n\n"
        "Please register first to get started."
    )


@router.message(Command("help"))
async def cmd_help(message: Message) -> None:
    """Show help message."""
    await message.answer(
        "📖 <b>Anonymous Chat Help</b>\n\n"
        "/search - Find a chat partner\n"
        "/cancel - Stop searching\n"
        "/end - End current chat\n"
        "/help - Show this message\n\n"
        "Messages, photos and stickers are relayed anonymously to your partner."
    )
