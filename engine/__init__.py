"""Chat engine package initialization."""

from .errors import (
    ChatEngineError,
    NotRegistered,
    AlreadyWaiting,
    AlreadyInSession,
    NotWaiting,
    NotInSession,
    InvariantViolation
)
from .service import ChatEngine
from .worker import run_matchmaking_worker

__all__ = [
    'ChatEngine',
    'ChatEngineError',
    'NotRegistered',
    'AlreadyWaiting',
    'AlreadyInSession',
    'NotWaiting',
    'NotInSession',
    'InvariantViolation',
    'run_matchmaking_worker'
]
