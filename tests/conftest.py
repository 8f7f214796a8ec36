"""
Pytest will auto-discover / import this file called 'conftest.py'. ]
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings
from src.db.memory_repository import InMemoryGameRepository
from src.db.schema import Base
from src.games.session import SessionTools
from src.games.tokens import TokenAuthority
from src.services.chess_service import ChessService
from src.services.registry import GameRegistry

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


# --- MOCK COLLABORATORS ----
class CountingRandomSource:
    """Deterministic stand-in for the secure random source: every call returns different bytes."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self, n: int) -> bytes:
        self.calls += 1
        return bytes([self.calls % 256]) * n


class TickingClock:
    """Every call is 1000 ns later than the previous one."""

    def __init__(self, start: int = 1_000) -> None:
        self.now = start

    def __call__(self) -> int:
        self.now += 1_000
        return self.now


@pytest.fixture
def db_session_factory() -> Generator[sessionmaker[Session], None, None]:
    """Session factory for a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    try:
        yield TestingSessionLocal
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def random_source() -> CountingRandomSource:
    return CountingRandomSource()


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def tools(random_source: CountingRandomSource) -> SessionTools:
    return SessionTools.default(TokenAuthority(random_source=random_source))


@pytest.fixture
def registry(tools: SessionTools, clock: TickingClock) -> GameRegistry:
    return GameRegistry(InMemoryGameRepository(), tools, clock)


@pytest.fixture
def settings() -> Settings:
    return Settings(debug_inspect=True, list_limit_max=50)


@pytest.fixture
def service(registry: GameRegistry, settings: Settings) -> ChessService:
    return ChessService(registry, settings)
