"""
Reply keyboards shown to users.
"""

from typing import Optional

from aiogram.types import ReplyKeyboardMarkup, KeyboardButton

START_SEARCH = "Start searching for someone to chat"
BOY = "Boy"
GIRL = "Girl"
CANCEL = "Cancel"
END_CHAT = "End Chat"


def build_keyboard(*labels: str) -> ReplyKeyboardMarkup:
    """
    Build a one-button-per-row reply keyboard.

    Args:
        labels: Button labels, top to bottom

    Returns:
        ReplyKeyboardMarkup
    """
    return ReplyKeyboardMarkup(
        keyboard=[[KeyboardButton(text=label)] for label in labels],
        resize_keyboard=True,
        one_time_keyboard=False
    )


KEYBOARDS = {
    "home": (START_SEARCH,),
    "choose_gender": (BOY, GIRL, CANCEL),
    "searching": (CANCEL,),
    "chat": (END_CHAT,),
}


def get_keyboard(name: Optional[str]) -> Optional[ReplyKeyboardMarkup]:
    """Get a named reply keyboard, or None for no keyboard change."""
    if name is None:
        return None
    return build_keyboard(*KEYBOARDS[name])
