"""
Adapter around python-chess.

All chess rules (move generation, check detection, SAN, FEN) live in python-chess.
This class narrows it down to the handful of questions the session layer asks, and treats a
position as a value: applying a move returns a new board and never touches the one passed in.
"""

import chess

from src.core.exceptions import IllegalMoveError
from src.core.shared_types import Color

Position = chess.Board
EngineMove = chess.Move


class RulesEngine:
    """Chess rules, backed by python-chess."""

    def initial_position(self) -> Position:
        return chess.Board()

    def from_board_string(self, fen: str) -> Position:
        """Rebuild a position from FEN. python-chess raises ValueError for malformed strings."""
        return chess.Board(fen)

    def to_board_string(self, position: Position) -> str:
        return position.fen()

    def legal_moves(self, position: Position) -> list[EngineMove]:
        return list(position.legal_moves)

    def has_legal_move(self, position: Position) -> bool:
        return any(True for _ in position.legal_moves)

    def apply(self, position: Position, move: EngineMove) -> Position:
        """New position after the move. The given position is left as it was."""
        if not position.is_legal(move):
            raise IllegalMoveError(f"Move not allowed: {move.uci()}")
        new_position = position.copy(stack=False)
        new_position.push(move)
        return new_position

    def to_notation(self, position: Position, move: EngineMove) -> str:
        """Standard algebraic notation of a move, from the position before it is played."""
        return position.san(move)

    def parse_notation(self, position: Position, text: str) -> EngineMove:
        """
        SAN parsing, python-chess exceptions pass through:

        * chess.InvalidMoveError: text is not SAN at all
        * chess.IllegalMoveError / chess.AmbiguousMoveError: SAN that does not name exactly one legal move
        """
        return position.parse_san(text)

    def side_to_move(self, position: Position) -> Color:
        return Color.WHITE if position.turn == chess.WHITE else Color.BLACK

    def in_check(self, position: Position) -> bool:
        return position.is_check()
