"""Implementation of (Game)Repository keeping every record in process memory"""

from copy import deepcopy

from src.core.models import GameRecord


class InMemoryGameRepository:
    """Records live in a dictionary keyed by game ID. Copies go in and out, so callers never share state with the store."""

    def __init__(self) -> None:
        self._games: dict[int, GameRecord] = {}
        self._next_id = 1

    def get_game(self, game_id: int) -> GameRecord | None:
        """Get game by ID, if record exists."""
        record = self._games.get(game_id)
        return deepcopy(record) if record is not None else None

    def create_game(self, game: GameRecord) -> tuple[GameRecord, int]:
        """Store new game and return the stored data + newly created game ID."""
        game_id = self._next_id
        self._next_id += 1
        self._games[game_id] = deepcopy(game)
        return deepcopy(game), game_id

    def update_game(self, game_id: int, game: GameRecord) -> GameRecord | None:
        """Add new info to existing record."""
        if game_id not in self._games:
            return None
        self._games[game_id] = deepcopy(game)
        return deepcopy(game)

    def list_games(self, offset: int, limit: int) -> list[tuple[int, GameRecord]]:
        """Newest games first (by ID, descending), skipping the first `offset`."""
        newest_first = sorted(self._games, reverse=True)[offset : offset + limit]
        return [(game_id, deepcopy(self._games[game_id])) for game_id in newest_first]

    def count_games(self) -> int:
        return len(self._games)
