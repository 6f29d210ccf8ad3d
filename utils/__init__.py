"""Utils package initialization."""

from .keyboards import get_keyboard
from .transport import BotTransport
from .validators import parse_requested_gender

__all__ = [
    'get_keyboard',
    'BotTransport',
    'parse_requested_gender'
]
