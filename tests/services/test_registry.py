"""Unit tests for src/services/registry.py"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from src.core.exceptions import GameNotFoundError, IllegalMoveError
from src.core.models import GameRecord
from src.db.memory_repository import InMemoryGameRepository
from src.games.session import GameSession, SessionTools
from src.games.tokens import UnclaimedSeat
from src.services.registry import GameRegistry, MonotonicClock


class RecordingRepository:
    """Mock the GameRepository and remember every write."""

    def __init__(self) -> None:
        self._games: dict[int, GameRecord] = {}
        self.writes: list[int] = []

    def get_game(self, game_id: int) -> GameRecord | None:
        return self._games.get(game_id)

    def create_game(self, game: GameRecord) -> tuple[GameRecord, int]:
        game_id = len(self._games) + 1
        self._games[game_id] = game
        self.writes.append(game_id)
        return game, game_id

    def update_game(self, game_id: int, game: GameRecord) -> GameRecord | None:
        self._games[game_id] = game
        self.writes.append(game_id)
        return game

    def list_games(self, offset: int, limit: int) -> list[tuple[int, GameRecord]]:
        ids = sorted(self._games, reverse=True)[offset : offset + limit]
        return [(game_id, self._games[game_id]) for game_id in ids]

    def count_games(self) -> int:
        return len(self._games)


def test_ids_start_at_one_and_increase(registry: GameRegistry) -> None:
    ids = [registry.create_game()[0].game_id for _ in range(3)]
    assert ids == [1, 2, 3]
    assert registry.count() == 3


def test_new_game_is_empty(registry: GameRegistry, tools: SessionTools) -> None:
    session, white_secret, black_secret = registry.create_game()

    assert session.move_history == []
    assert session.status.is_terminal is False
    assert session.created_at == session.updated_at
    assert isinstance(session.white_seat, UnclaimedSeat)
    assert isinstance(session.black_seat, UnclaimedSeat)
    assert session.white_seat.secret_hash == tools.tokens.hash_secret(white_secret)
    assert session.black_seat.secret_hash == tools.tokens.hash_secret(black_secret)
    assert white_secret != black_secret


def test_secrets_are_not_stored(tools: SessionTools) -> None:
    repository = RecordingRepository()
    registry = GameRegistry(repository, tools)
    _, white_secret, black_secret = registry.create_game()

    stored = repr(repository.get_game(1))
    assert white_secret not in stored
    assert black_secret not in stored


def test_get_unknown_game(registry: GameRegistry) -> None:
    assert registry.get(42) is None
    with pytest.raises(GameNotFoundError):
        registry.require(42)


def test_list_recent_is_newest_first(registry: GameRegistry) -> None:
    for _ in range(5):
        registry.create_game()

    assert [s.game_id for s in registry.list_recent(0, 3)] == [5, 4, 3]
    assert [s.game_id for s in registry.list_recent(3, 10)] == [2, 1]
    assert registry.list_recent(5, 10) == []
    assert registry.list_recent(99, 10) == []
    assert registry.list_recent(0, 0) == []


def test_update_stores_the_mutation(registry: GameRegistry, tools: SessionTools) -> None:
    session, _, _ = registry.create_game()

    def _move(game: GameSession) -> str:
        return game.make_move("anyone", "e4", tools, now=registry.clock())

    updated, san = registry.update(session.game_id, _move)
    assert san == "e4"
    assert updated.move_history == ["e4"]

    stored = registry.get(session.game_id)
    assert stored is not None
    assert stored.move_history == ["e4"]
    assert stored.updated_at > stored.created_at


def test_failed_mutation_stores_nothing(tools: SessionTools) -> None:
    repository = RecordingRepository()
    registry = GameRegistry(repository, tools)
    session, _, _ = registry.create_game()
    writes_before = list(repository.writes)

    def _illegal(game: GameSession) -> None:
        game.make_move("anyone", "e2e5", tools, now=1)

    with pytest.raises(IllegalMoveError):
        registry.update(session.game_id, _illegal)
    assert repository.writes == writes_before


def test_update_unknown_game(registry: GameRegistry) -> None:
    with pytest.raises(GameNotFoundError):
        registry.update(7, lambda game: None)


# -- Clock --
def test_default_clock_is_monotonic(tools: SessionTools) -> None:
    registry = GameRegistry(InMemoryGameRepository(), tools)
    assert isinstance(registry.clock, MonotonicClock)


def test_clock_never_goes_backwards() -> None:
    readings = iter([5_000, 4_000, 4_000, 9_000])
    clock = MonotonicClock(source=lambda: next(readings))
    assert [clock() for _ in range(4)] == [5_000, 5_001, 5_002, 9_000]


def test_clock_readings_are_unique_across_threads() -> None:
    clock = MonotonicClock(source=lambda: 42)
    with ThreadPoolExecutor(max_workers=8) as pool:
        readings = list(pool.map(lambda _: clock(), range(200)))
    assert len(set(readings)) == 200
