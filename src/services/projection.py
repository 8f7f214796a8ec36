"""Read-only representations of a GameSession."""

from src.api.models import GameView, SeatInspection, StatusView
from src.core.shared_types import Actor, Color, Role
from src.games.rules import RulesEngine
from src.games.session import GameSession
from src.games.tokens import UnclaimedSeat


def to_view(session: GameSession, rules: RulesEngine) -> GameView:
    """Snapshot for callers. Secrets and their hashes never end up in here."""
    return GameView(
        game_id=session.game_id,
        white=session.occupant(Color.WHITE),
        black=session.occupant(Color.BLACK),
        fen=rules.to_board_string(session.position),
        moves_san=list(session.move_history),
        status=StatusView(
            kind=session.status.kind,
            winner=session.status.winner,
            reason=session.status.reason,
        ),
        created_at=session.created_at,
        updated_at=session.updated_at,
        to_move=rules.side_to_move(session.position),
    )


def role_in(session: GameSession, actor: Actor) -> Role:
    color = session.seat_of(actor)
    if color is None:
        return Role.SPECTATOR
    return Role.WHITE if color == Color.WHITE else Role.BLACK


def inspect_seats(session: GameSession) -> SeatInspection:
    """Seat occupants and token hashes. For tests/debugging only."""

    def _hash_hex(color: Color) -> str | None:
        seat = session.seat(color)
        return seat.secret_hash.hex() if isinstance(seat, UnclaimedSeat) else None

    return SeatInspection(
        game_id=session.game_id,
        white=session.occupant(Color.WHITE),
        black=session.occupant(Color.BLACK),
        white_token_hash=_hash_hex(Color.WHITE),
        black_token_hash=_hash_hex(Color.BLACK),
    )
