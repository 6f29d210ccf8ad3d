"""
Tests for the search flow handlers.
"""
import pytest
from unittest.mock import AsyncMock, MagicMock

from database.models import Gender
from handlers.chat import NOT_A_COMMAND, cancel_gender_choice, process_gender_choice
from utils.keyboards import BOY


def make_message(text: str, user_id: int = 1) -> MagicMock:
    message = MagicMock()
    message.text = text
    message.from_user.id = user_id
    message.answer = AsyncMock()
    return message


class TestGenderChoice:
    """Answering the "who would you like to chat with" prompt."""

    @pytest.mark.parametrize("text", ["/cancel", "/end", "/start"])
    def test_commands_are_not_gender_answers(self, text):
        assert NOT_A_COMMAND.resolve(make_message(text)) is False

    @pytest.mark.parametrize("text", [BOY, "Girl", "something else"])
    def test_plain_text_is_a_gender_answer(self, text):
        assert NOT_A_COMMAND.resolve(make_message(text)) is True

    @pytest.mark.asyncio
    async def test_cancel_leaves_the_flow(self):
        message = make_message("/cancel")
        state = AsyncMock()

        await cancel_gender_choice(message, state)

        state.clear.assert_awaited_once()
        assert message.answer.await_args.args[0] == "Operation cancelled"

    @pytest.mark.asyncio
    async def test_valid_choice_starts_search(self):
        message = make_message(BOY)
        state = AsyncMock()
        engine = MagicMock()
        engine.on_search_requested = AsyncMock(return_value=None)

        await process_gender_choice(message, state, engine)

        state.clear.assert_awaited_once()
        engine.on_search_requested.assert_awaited_once_with(1, Gender.MALE)

    @pytest.mark.asyncio
    async def test_invalid_choice_asks_again(self):
        message = make_message("maybe")
        state = AsyncMock()
        engine = MagicMock()
        engine.on_search_requested = AsyncMock()

        await process_gender_choice(message, state, engine)

        state.clear.assert_not_awaited()
        engine.on_search_requested.assert_not_awaited()
        message.answer.assert_awaited_once_with("Choose either Boy or Girl.")
