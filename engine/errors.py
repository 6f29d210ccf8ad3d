"""
Chat engine exceptions.

Every outcome except InvariantViolation is a benign per-user condition
that handlers report back to the user.
"""


class ChatEngineError(Exception):
    """Base class for chat engine errors."""

    def __init__(self, identity: int, message: str = ""):
        self.identity = identity
        super().__init__(message or f"{self.__class__.__name__}: {identity}")


class NotRegistered(ChatEngineError):
    """User has no profile and cannot search."""


class AlreadyWaiting(ChatEngineError):
    """User is already in the waiting pool."""


class AlreadyInSession(ChatEngineError):
    """User is already paired with someone."""


class NotWaiting(ChatEngineError):
    """User is not in the waiting pool."""


class NotInSession(ChatEngineError):
    """User has no active session."""


class InvariantViolation(ChatEngineError):
    """Engine state is inconsistent for an identity (programming defect)."""
