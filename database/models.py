"""
Data models for the chat engine.

Defines profiles read from MongoDB and the in-memory waiting and
session records owned by the engine.
"""

import itertools
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Dict, Any, Tuple
from dataclasses import dataclass, field


class Gender(str, Enum):
    """Declared or requested gender of a chat participant."""
    MALE = "male"
    FEMALE = "female"


class UserState(str, Enum):
    """Per-identity lifecycle state."""
    IDLE = "idle"
    SEARCHING = "searching"
    PAIRED = "paired"


_enqueue_counter = itertools.count()


@dataclass(frozen=True)
class Profile:
    """Registered user profile as stored by the profile service."""
    identity: int
    gender: Gender
    fullname: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Profile":
        """Build a profile from a MongoDB user document."""
        return cls(
            identity=int(doc["telegramId"]),
            gender=Gender(doc["gender"]),
            fullname=doc.get("fullname"),
        )


@dataclass(frozen=True)
class WaitingEntry:
    """A searching user's queued preference record."""
    identity: int
    gender: Gender
    requested_gender: Gender
    fullname: Optional[str] = None
    enqueued_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    # Tie-breaker for entries created within the same clock tick
    seq: int = field(default_factory=lambda: next(_enqueue_counter))

    @property
    def order_key(self) -> Tuple[datetime, int]:
        return (self.enqueued_at, self.seq)

    def is_compatible(self, other: "WaitingEntry") -> bool:
        """
        Check mutual preference against another entry.

        Args:
            other: Candidate waiting entry

        Returns:
            True if each side's gender is what the other requested
        """
        return (
            self.identity != other.identity
            and self.gender == other.requested_gender
            and other.gender == self.requested_gender
        )


@dataclass
class Session:
    """Active chat session between two users."""
    participant_a: int
    participant_b: int
    session_id: str = field(default_factory=lambda: f"sess_{uuid.uuid4().hex[:12]}")
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    messages_count: int = 0

    @property
    def participants(self) -> Tuple[int, int]:
        return (self.participant_a, self.participant_b)

    def partner_of(self, identity: int) -> Optional[int]:
        """
        Get the counterpart of a participant.

        Args:
            identity: One participant's identity

        Returns:
            The other participant's identity or None if not a participant
        """
        if identity == self.participant_a:
            return self.participant_b
        elif identity == self.participant_b:
            return self.participant_a

        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging and inspection."""
        return {
            "session_id": self.session_id,
            "participant_a": self.participant_a,
            "participant_b": self.participant_b,
            "started_at": self.started_at,
            "messages_count": self.messages_count
        }
