"""Implementation of (Game)Repository using SQLAlchemy"""

from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from src.core.models import GameRecord
from src.db.schema import DBGame


class SQLGameRepository:
    """
    Data stored using SQL / methods implemented using SQLAlchemy
    ----

    Every method opens its own database session, so the repository can be shared between threads.
    Writes run in `session_factory.begin()`: committed when the block ends, rolled back if it raises.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory

    def get_game(self, game_id: int) -> GameRecord | None:
        """Get game by ID, if record exists."""
        with self.session_factory() as db:
            game_db = self._fetch_game(db, game_id)
            if game_db:
                return self._to_record(game_db)
            return None

    def create_game(self, game: GameRecord) -> tuple[GameRecord, int]:
        """Store new game and return the stored data + newly created game ID."""
        with self.session_factory.begin() as db:
            game_db = DBGame()
            self._copy_into(game_db, game)
            db.add(game_db)
            # flush to get the autoincrement ID before the commit
            db.flush()
            return self._to_record(game_db), game_db.id

    def update_game(self, game_id: int, game: GameRecord) -> GameRecord | None:
        """Add new info to existing record."""
        with self.session_factory.begin() as db:
            game_db = self._fetch_game(db, game_id)
            if not game_db:
                return None
            self._copy_into(game_db, game)
            db.flush()
            return self._to_record(game_db)

    def list_games(self, offset: int, limit: int) -> list[tuple[int, GameRecord]]:
        """Newest games first (by ID, descending), skipping the first `offset`."""
        query = select(DBGame).order_by(DBGame.id.desc()).offset(offset).limit(limit)
        with self.session_factory() as db:
            return [(game_db.id, self._to_record(game_db)) for game_db in db.scalars(query)]

    def count_games(self) -> int:
        with self.session_factory() as db:
            return db.scalar(select(func.count()).select_from(DBGame)) or 0

    def _fetch_game(self, db: Session, game_id: int) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return db.scalar(query)

    def _copy_into(self, game_db: DBGame, game: GameRecord) -> None:
        game_db.current_fen = game.current_fen
        game_db.moves_san = list(game.moves_san)
        game_db.white_player = game.white_player
        game_db.white_token_hash = game.white_token_hash
        game_db.black_player = game.black_player
        game_db.black_token_hash = game.black_token_hash
        game_db.status = game.status
        game_db.winner = game.winner
        game_db.draw_reason = game.draw_reason
        game_db.created_at = game.created_at
        game_db.updated_at = game.updated_at

    def _to_record(self, game_db: DBGame) -> GameRecord:
        """Convert SQLAlchemy model to data transfer model."""
        return GameRecord(
            current_fen=game_db.current_fen,
            moves_san=list(game_db.moves_san),
            white_player=game_db.white_player,
            white_token_hash=game_db.white_token_hash,
            black_player=game_db.black_player,
            black_token_hash=game_db.black_token_hash,
            status=game_db.status,
            winner=game_db.winner,
            draw_reason=game_db.draw_reason,
            created_at=game_db.created_at,
            updated_at=game_db.updated_at,
        )
