"""
The GameSession is the entrypoint into the domain layer for the registry/service layers.
It holds one game (position, SAN history, seats, status, timestamps) and decides whether a join,
move or resignation is allowed. Every operation checks all of its preconditions before it assigns
anything, so a rejected request leaves the session exactly as it was.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import (
    AlreadySeatedError,
    GameFinishedError,
    GameStateError,
    InvalidTokenError,
    NotSeatedError,
    WrongTurnError,
)
from src.core.models import GameRecord
from src.core.shared_types import Actor, Color, GameStatus, Status
from src.games.notation import MoveResolver
from src.games.rules import Position, RulesEngine
from src.games.status import StatusEvaluator
from src.games.tokens import ClaimedSeat, Seat, TokenAuthority, UnclaimedSeat

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionTools:
    """The collaborators a session needs to act on a request."""

    rules: RulesEngine
    tokens: TokenAuthority
    resolver: MoveResolver
    evaluator: StatusEvaluator

    @classmethod
    def default(cls, tokens: Optional[TokenAuthority] = None) -> Self:
        rules = RulesEngine()
        return cls(
            rules=rules,
            tokens=tokens if tokens is not None else TokenAuthority(),
            resolver=MoveResolver(rules),
            evaluator=StatusEvaluator(rules),
        )


@dataclass
class GameSession:
    game_id: int
    position: Position
    white_seat: Seat
    black_seat: Seat
    move_history: list[str] = field(default_factory=list)
    status: GameStatus = field(default_factory=GameStatus.ongoing)
    created_at: int = 0
    updated_at: int = 0

    # --- CONSTRUCTION / CONVERSION ---
    @classmethod
    def from_record(cls, game_id: int, record: GameRecord, rules: RulesEngine) -> Self:
        """Rebuild a session from what the repository stored."""

        if record.status not in [status.value for status in Status]:
            raise GameStateError(
                f"Invalid status code: {record.status!r}. \nPick one from {','.join(Status)}"
            )
        winner = Color(record.winner) if record.winner else None
        status = GameStatus(Status(record.status), winner=winner, reason=record.draw_reason)

        try:
            position = rules.from_board_string(record.current_fen)
        except ValueError as e:
            raise GameStateError(f"Stored position of game {game_id} is not valid FEN.") from e

        return cls(
            game_id=game_id,
            position=position,
            white_seat=_seat_from_record(record.white_player, record.white_token_hash),
            black_seat=_seat_from_record(record.black_player, record.black_token_hash),
            move_history=list(record.moves_san),
            status=status,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def to_record(self, rules: RulesEngine) -> GameRecord:
        """Encode back into the format the repository stores."""
        white_player, white_hash = _seat_to_record(self.white_seat)
        black_player, black_hash = _seat_to_record(self.black_seat)
        return GameRecord(
            current_fen=rules.to_board_string(self.position),
            moves_san=list(self.move_history),
            white_player=white_player,
            white_token_hash=white_hash,
            black_player=black_player,
            black_token_hash=black_hash,
            status=self.status.kind.value,
            winner=self.status.winner.value if self.status.winner else None,
            draw_reason=self.status.reason,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    # --- QUERIES ---
    def seat(self, color: Color) -> Seat:
        return self.white_seat if color == Color.WHITE else self.black_seat

    def occupant(self, color: Color) -> Optional[Actor]:
        seat = self.seat(color)
        return seat.actor if isinstance(seat, ClaimedSeat) else None

    def seat_of(self, actor: Actor) -> Optional[Color]:
        """Color of the seat this actor claimed, if any."""
        for color in (Color.WHITE, Color.BLACK):
            if self.occupant(color) == actor:
                return color
        return None

    # --- OPERATIONS ---
    def join(self, secret: str, actor: Actor, tools: SessionTools, now: int) -> Color:
        """
        Claim a seat with a one-time secret.
        ----

        White is tried first, then black. A successful claim burns the secret.
        NOTE joining is possible whatever the status is, finished games included.
        """
        if self.seat_of(actor) is not None:
            raise AlreadySeatedError("You already occupy a seat in this game.")

        for color in (Color.WHITE, Color.BLACK):
            seat = self.seat(color)
            if not tools.tokens.matches(seat, secret):
                continue
            claimed = tools.tokens.claim(seat, secret, actor)
            self._set_seat(color, claimed)
            self.updated_at = now
            logger.info("Game %s: %s seat claimed", self.game_id, color)
            return color

        raise InvalidTokenError("Invalid or already-used token.")

    def make_move(self, actor: Actor, notation: str, tools: SessionTools, now: int) -> str:
        """
        Attempt a move and return its SAN.
        ----

        1. game must be ongoing
        2. a claimed seat only moves for its occupant (an unclaimed seat lets anyone move that side)
        3. resolve the text into a legal move
        4. compute SAN and the new position, then commit both with the new status
        """
        self._assert_ongoing()
        self._assert_your_turn(actor, tools.rules)

        move = tools.resolver.resolve(self.position, notation)
        san = tools.rules.to_notation(self.position, move)
        new_position = tools.rules.apply(self.position, move)
        new_status = tools.evaluator.evaluate(new_position)

        # commit
        self.position = new_position
        self.move_history.append(san)
        self.status = new_status
        self.updated_at = now

        logger.info("Game %s: ply %d %s", self.game_id, len(self.move_history), san)
        if new_status.is_terminal:
            logger.info("Game %s finished: %s (winner: %s)", self.game_id, new_status.kind, new_status.winner)
        return san

    def resign(self, actor: Actor, now: int) -> Color:
        """Give up the game. Returns the winning color."""
        self._assert_ongoing()

        color = self.seat_of(actor)
        if color is None:
            raise NotSeatedError("You are not seated in this game.")

        self.status = GameStatus.resigned(winner=color.opponent)
        self.updated_at = now
        logger.info("Game %s: %s resigned", self.game_id, color)
        return color.opponent

    # -- PRIVATE HELPERS ---
    def _set_seat(self, color: Color, seat: Seat) -> None:
        if color == Color.WHITE:
            self.white_seat = seat
        else:
            self.black_seat = seat

    def _assert_ongoing(self) -> None:
        if self.status.is_terminal:
            raise GameFinishedError(f"Game finished. status: {self.status.kind}")

    def _assert_your_turn(self, actor: Actor, rules: RulesEngine) -> None:
        color_to_move = rules.side_to_move(self.position)
        occupant = self.occupant(color_to_move)
        if occupant is not None and occupant != actor:
            raise WrongTurnError(f"It is not your turn. Waiting for {color_to_move} to move.")


def _seat_from_record(player: Optional[Actor], token_hash: Optional[bytes]) -> Seat:
    if (player is None) == (token_hash is None):
        raise GameStateError("A seat must hold exactly one of a player or a token hash.")
    if player is not None:
        return ClaimedSeat(player)
    # for the type checker
    assert token_hash is not None
    return UnclaimedSeat(bytes(token_hash))


def _seat_to_record(seat: Seat) -> tuple[Optional[Actor], Optional[bytes]]:
    if isinstance(seat, ClaimedSeat):
        return seat.actor, None
    return None, seat.secret_hash
