"""
Chat handlers.

Translates bot commands and keyboard buttons into chat engine events:
searching, cancelling, ending chats and relaying messages.
"""

import logging

from aiogram import Router, F
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.fsm.state import State, StatesGroup
from aiogram.types import Message

from engine import (
    ChatEngine,
    NotRegistered,
    AlreadyWaiting,
    AlreadyInSession,
    NotWaiting,
    NotInSession
)
from database.models import UserState
from utils.keyboards import START_SEARCH, CANCEL, END_CHAT, get_keyboard
from utils.validators import parse_requested_gender

logger = logging.getLogger(__name__)
router = Router()

REGISTER_FIRST_TEXT = "❌ Please register first."
BUSY_TEXT = "⚠️ You already have an operation in progress."
NOT_IN_CHAT_TEXT = "❌ You're not in an active chat."

# Commands fall through to their own handlers
NOT_A_COMMAND = ~F.text.startswith("/")


class SearchStates(StatesGroup):
    """States for the search request flow."""
    choosing_gender = State()


@router.message(Command("search"))
@router.message(F.text == START_SEARCH)
async def cmd_search(message: Message, state: FSMContext, engine: ChatEngine) -> None:
    """
    Ask who the user wants to chat with.

    Args:
        message: Incoming message
        state: FSM context
        engine: Chat engine
    """
    if engine.state_of(message.from_user.id) is not UserState.IDLE:
        await message.answer(BUSY_TEXT)
        return

    profile = await engine.profiles.get_profile(message.from_user.id)
    if not profile:
        await message.answer(REGISTER_FIRST_TEXT)
        return

    await message.answer(
        "<b>Who would you like to chat with?</b>",
        reply_markup=get_keyboard("choose_gender")
    )
    await state.set_state(SearchStates.choosing_gender)


@router.message(SearchStates.choosing_gender, Command("cancel"))
@router.message(SearchStates.choosing_gender, F.text == CANCEL)
async def cancel_gender_choice(message: Message, state: FSMContext) -> None:
    """Leave the search flow before searching started."""
    await state.clear()
    await message.answer("Operation cancelled", reply_markup=get_keyboard("home"))


@router.message(SearchStates.choosing_gender, F.text, NOT_A_COMMAND)
async def process_gender_choice(message: Message, state: FSMContext, engine: ChatEngine) -> None:
    """
    Start searching for the chosen gender.

    Args:
        message: Incoming message
        state: FSM context
        engine: Chat engine
    """
    requested_gender = parse_requested_gender(message.text)
    if requested_gender is None:
        await message.answer("Choose either Boy or Girl.")
        return

    await state.clear()

    try:
        await engine.on_search_requested(message.from_user.id, requested_gender)
    except NotRegistered:
        await message.answer(REGISTER_FIRST_TEXT, reply_markup=get_keyboard("home"))
    except (AlreadyWaiting, AlreadyInSession):
        await message.answer(BUSY_TEXT)


@router.message(Command("cancel"))
@router.message(F.text == CANCEL)
async def cmd_cancel(message: Message, engine: ChatEngine) -> None:
    """Stop searching for a partner."""
    try:
        await engine.on_cancel_requested(message.from_user.id)
    except NotWaiting:
        await message.answer("❌ You're not searching right now.", reply_markup=get_keyboard("home"))


@router.message(Command("end"))
@router.message(F.text == END_CHAT)
async def cmd_end(message: Message, engine: ChatEngine) -> None:
    """End the current chat."""
    try:
        partner = await engine.on_end_requested(message.from_user.id)
    except NotInSession:
        # Partner may have ended it first
        await message.answer(NOT_IN_CHAT_TEXT, reply_markup=get_keyboard("home"))
        return

    logger.info(f"User {message.from_user.id} ended chat with {partner}")


@router.message(F.text)
async def handle_message(message: Message, engine: ChatEngine) -> None:
    """
    Forward text messages to the chat partner.

    Args:
        message: Incoming message
        engine: Chat engine
    """
    # Skip commands
    if message.text.startswith('/'):
        return

    try:
        delivered = await engine.on_message(message.from_user.id, message.text)
    except NotInSession:
        await message.answer(NOT_IN_CHAT_TEXT, reply_markup=get_keyboard("home"))
        return

    if not delivered:
        await message.answer("❌ Failed to send message. Please try again.")


@router.message()
async def handle_media(message: Message, engine: ChatEngine) -> None:
    """Forward photos, stickers, voice notes and other media as anonymous copies."""
    try:
        delivered = await engine.on_copy(message.from_user.id, message.message_id)
    except NotInSession:
        await message.answer(NOT_IN_CHAT_TEXT, reply_markup=get_keyboard("home"))
        return

    if not delivered:
        await message.answer("❌ Failed to send message. Please try again.")
