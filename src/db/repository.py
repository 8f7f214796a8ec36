"""Protocol repository (implemented in memory and with SQLAlchemy)"""

from typing import Protocol

from src.core.models import GameRecord


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def get_game(self, game_id: int) -> GameRecord | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameRecord) -> tuple[GameRecord, int]:
        """Store new game and return the stored data + newly created game ID (strictly increasing, never reused)."""
        ...

    def update_game(self, game_id: int, game: GameRecord) -> GameRecord | None:
        """Add new info to existing record."""
        ...

    def list_games(self, offset: int, limit: int) -> list[tuple[int, GameRecord]]:
        """Newest games first (by ID, descending), skipping the first `offset`."""
        ...

    def count_games(self) -> int:
        """Number of stored games."""
        ...
