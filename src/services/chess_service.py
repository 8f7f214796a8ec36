"""Orchestration of communication from the host's operation calls to the session and persistence layers (and the reverse direction)."""

import logging
from typing import Callable, Optional, Self

from src.api.models import (
    CreateGameResponse,
    GameView,
    GetGameRequest,
    JoinGameRequest,
    ListGamesRequest,
    MoveRequest,
    ResignRequest,
    SeatInspection,
)
from src.core.config import Settings, get_settings
from src.core.exceptions import (
    GameError,
    GameNotFoundError,
    InspectionDisabledError,
    InvalidRequestError,
)
from src.core.logging_config import configure_logging
from src.core.shared_types import Actor, Role
from src.db.database import build_session_factory
from src.db.memory_repository import InMemoryGameRepository
from src.db.repository import GameRepository
from src.db.sql_repository import SQLGameRepository
from src.games.pgn import export_pgn
from src.games.session import GameSession, SessionTools
from src.games.tokens import TokenAuthority
from src.services.projection import inspect_seats, role_in, to_view
from src.services.registry import Clock, GameRegistry

logger = logging.getLogger(__name__)


class ChessService:
    """
    The operation catalog.
    ----

    `actor` is the caller identity the host resolved for the current invocation. Every failure is raised
    as a GameError subclass whose `code` names the error; a failed call leaves every game unchanged.
    """

    def __init__(self, registry: GameRegistry, settings: Optional[Settings] = None) -> None:
        self.registry = registry
        self.settings = settings if settings is not None else get_settings()

    @classmethod
    def from_settings(cls, settings: Settings, clock: Optional[Clock] = None) -> Self:
        """Wire the default collaborators: python-chess rules, secrets-backed tokens, and the configured repository."""
        configure_logging(settings)

        repository: GameRepository
        if settings.database_url:
            repository = SQLGameRepository(build_session_factory(settings))
        else:
            repository = InMemoryGameRepository()

        tools = SessionTools.default(TokenAuthority(token_bytes=settings.token_bytes))
        return cls(GameRegistry(repository, tools, clock), settings)

    # -- Operations that change state ---
    def create_game(self) -> CreateGameResponse:
        """Create a game. The secrets in the response are not retrievable afterwards."""
        session, white_secret, black_secret = self.registry.create_game()
        return CreateGameResponse(
            game_id=session.game_id,
            white_secret=white_secret,
            black_secret=black_secret,
        )

    def join(self, request: JoinGameRequest, actor: Actor) -> GameView:
        """Claim a seat with a one-time secret."""
        tools = self.registry.tools

        def _join(session: GameSession) -> None:
            session.join(request.secret, actor, tools, self.registry.clock())

        session = self._mutate(request.game_id, "join", _join)
        return self._view(session)

    def make_move(self, request: MoveRequest, actor: Actor) -> GameView:
        """Make a move attempt (coordinate or SAN notation)."""
        tools = self.registry.tools

        def _move(session: GameSession) -> None:
            session.make_move(actor, request.notation, tools, self.registry.clock())

        session = self._mutate(request.game_id, "move", _move)
        return self._view(session)

    def resign(self, request: ResignRequest, actor: Actor) -> GameView:
        def _resign(session: GameSession) -> None:
            session.resign(actor, self.registry.clock())

        session = self._mutate(request.game_id, "resign", _resign)
        return self._view(session)

    # -- Read-only operations ---
    def get_game(self, request: GetGameRequest) -> Optional[GameView]:
        """
        Retrieve current game state (None for an unknown game).
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        session = self.registry.get(request.game_id)
        return self._view(session) if session is not None else None

    def list_recent(self, request: ListGamesRequest) -> list[GameView]:
        """Newest games first, one page at a time. A page larger than settings.list_limit_max is refused."""
        if request.limit > self.settings.list_limit_max:
            raise InvalidRequestError(
                f"Page size {request.limit} exceeds the maximum of {self.settings.list_limit_max}."
            )
        return [
            self._view(session)
            for session in self.registry.list_recent(request.offset, request.limit)
        ]

    def count_games(self) -> int:
        """Number of games created so far (for paging through list_recent)."""
        return self.registry.count()

    def role_of(self, request: GetGameRequest, actor: Actor) -> Role:
        """The caller's role in a game. Unknown games make everyone a spectator."""
        session = self.registry.get(request.game_id)
        if session is None:
            return Role.SPECTATOR
        return role_in(session, actor)

    def export_record(self, request: GetGameRequest) -> str:
        """The game's moves as PGN."""
        session = self.registry.get(request.game_id)
        if session is None:
            raise GameNotFoundError(f"Game with game_id={request.game_id} not found.")
        return export_pgn(session.game_id, session.move_history, event=self.settings.pgn_event)

    def inspect(self, request: GetGameRequest) -> Optional[SeatInspection]:
        """Debug only: seat occupants and token hashes. Refused unless settings.debug_inspect is on."""
        if not self.settings.debug_inspect:
            raise InspectionDisabledError("Seat inspection is disabled.")
        session = self.registry.get(request.game_id)
        return inspect_seats(session) if session is not None else None

    # -- Internal helpers --
    def _view(self, session: GameSession) -> GameView:
        return to_view(session, self.registry.tools.rules)

    def _mutate(
        self, game_id: int, operation: str, mutation: Callable[[GameSession], None]
    ) -> GameSession:
        """Run a mutation through the registry, logging rejections by their error code."""
        try:
            session, _ = self.registry.update(game_id, mutation)
        except GameError as e:
            logger.info("Game %s: %s rejected (%s): %s", game_id, operation, e.code, e)
            raise
        return session
