"""
Shared fixtures for chat engine tests.
"""
import os

# Settings validate on import; keep them importable in tests
os.environ.setdefault("BOT_TOKEN", "123456:test-token")
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017/anonchat_test")

from typing import Dict, List, Optional, Set, Tuple

import pytest

from database.models import Gender, Profile, WaitingEntry
from engine import ChatEngine
from engine.session_registry import SessionRegistry
from engine.waiting_pool import WaitingPool


class FakeProfiles:
    """In-memory profile gateway."""

    def __init__(self) -> None:
        self.profiles: Dict[int, Profile] = {}

    def register(self, identity: int, gender: Gender) -> None:
        self.profiles[identity] = Profile(identity=identity, gender=gender, fullname=f"user{identity}")

    async def get_profile(self, identity: int) -> Optional[Profile]:
        return self.profiles.get(identity)


class FakeTransport:
    """Transport recording every delivery."""

    def __init__(self) -> None:
        self.sent: List[Tuple[int, str, Optional[str]]] = []
        self.copied: List[Tuple[int, int, int]] = []
        self.unreachable: Set[int] = set()

    async def send(self, identity: int, text: str, keyboard: Optional[str] = None) -> bool:
        if identity in self.unreachable:
            return False
        self.sent.append((identity, text, keyboard))
        return True

    async def copy(self, identity: int, from_identity: int, message_id: int) -> bool:
        if identity in self.unreachable:
            return False
        self.copied.append((identity, from_identity, message_id))
        return True

    def texts_for(self, identity: int) -> List[str]:
        return [text for to, text, _ in self.sent if to == identity]


def make_entry(identity: int, gender: Gender, requested: Gender) -> WaitingEntry:
    return WaitingEntry(identity=identity, gender=gender, requested_gender=requested)


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture
def pool(registry: SessionRegistry) -> WaitingPool:
    return WaitingPool(registry)


@pytest.fixture
def profiles() -> FakeProfiles:
    return FakeProfiles()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def engine(profiles: FakeProfiles, transport: FakeTransport) -> ChatEngine:
    return ChatEngine(profiles, transport)
