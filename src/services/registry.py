"""
Registry of all game sessions.

Owns the repository, hands out game IDs (through the repository) and serialises every state change:
a mutation runs on a session rebuilt from the stored record, and the result is only written back if
the mutation returns normally.
"""

import logging
import threading
import time
from typing import Callable, Optional, TypeVar

from src.core.exceptions import GameNotFoundError
from src.core.models import GameRecord
from src.db.repository import GameRepository
from src.games.session import GameSession, SessionTools

logger = logging.getLogger(__name__)

Clock = Callable[[], int]
T = TypeVar("T")


class MonotonicClock:
    """
    Nanosecond wall-clock time that never repeats or goes backwards.
    ----

    `time.time_ns` alone can step back (NTP adjustments) or return the same value to two threads.
    Each reading is therefore at least one nanosecond after the previous one.
    """

    def __init__(self, source: Clock = time.time_ns) -> None:
        self.source = source
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            self._last = max(self.source(), self._last + 1)
            return self._last


class GameRegistry:
    def __init__(
        self,
        repository: GameRepository,
        tools: SessionTools,
        clock: Optional[Clock] = None,
    ) -> None:
        self.repo = repository
        self.tools = tools
        self.clock = clock if clock is not None else MonotonicClock()
        self._lock = threading.RLock()

    def create_game(self) -> tuple[GameSession, str, str]:
        """
        New game with two unclaimed seats. Returns the session and the plaintext white and black secrets.
        ----

        Both secrets are generated (and hashed) before anything is stored, so a game never becomes
        visible half-created. The secrets themselves are not kept anywhere.
        """
        white_secret, white_seat = self.tools.tokens.new_seat()
        black_secret, black_seat = self.tools.tokens.new_seat()

        rules = self.tools.rules
        now = self.clock()
        record = GameRecord(
            current_fen=rules.to_board_string(rules.initial_position()),
            white_token_hash=white_seat.secret_hash,
            black_token_hash=black_seat.secret_hash,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            stored, game_id = self.repo.create_game(record)

        logger.info("Game %s created", game_id)
        return GameSession.from_record(game_id, stored, rules), white_secret, black_secret

    def get(self, game_id: int) -> Optional[GameSession]:
        with self._lock:
            record = self.repo.get_game(game_id)
        if record is None:
            return None
        return GameSession.from_record(game_id, record, self.tools.rules)

    def require(self, game_id: int) -> GameSession:
        """Attempt to find the game in the repository and raise error if it fails."""
        session = self.get(game_id)
        if session is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return session

    def list_recent(self, offset: int, limit: int) -> list[GameSession]:
        """Newest first. Empty once offset runs past the number of games."""
        if limit <= 0:
            return []
        with self._lock:
            records = self.repo.list_games(max(offset, 0), limit)
        rules = self.tools.rules
        return [GameSession.from_record(game_id, record, rules) for game_id, record in records]

    def count(self) -> int:
        with self._lock:
            return self.repo.count_games()

    def update(self, game_id: int, mutation: Callable[[GameSession], T]) -> tuple[GameSession, T]:
        """
        Apply a mutation to one game and store the result.
        ----

        Fetch, mutate and store happen under the registry lock. If the mutation raises, nothing is
        stored and the exception reaches the caller.
        """
        with self._lock:
            session = self.require(game_id)
            result = mutation(session)
            self.repo.update_game(game_id, session.to_record(self.tools.rules))
        return session, result
