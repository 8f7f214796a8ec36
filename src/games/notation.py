"""
Turn the move text a caller sends into a legal engine move.

Two grammars are accepted, tried in order:

1. coordinate form: "e2e4", "e7e8q" (origin, destination, optional promotion letter)
2. standard algebraic notation: "e4", "Nf3", "exd5", "O-O", "e8=Q+"

A parser returns None when the text is not written in its grammar, so the next one gets a try.
It raises when the text is in its grammar but does not describe a legal move.
"""

import logging
from typing import Optional, Protocol

import chess

from src.core.exceptions import IllegalMoveError, MoveParseError
from src.games.rules import EngineMove, Position, RulesEngine

logger = logging.getLogger(__name__)

PROMOTION_LETTERS: dict[str, chess.PieceType] = {
    "q": chess.QUEEN,
    "r": chess.ROOK,
    "b": chess.BISHOP,
    "n": chess.KNIGHT,
}


class MoveParser(Protocol):
    def parse(self, position: Position, text: str) -> Optional[EngineMove]: ...


def _square_or_none(name: str) -> Optional[chess.Square]:
    try:
        return chess.parse_square(name)
    except ValueError:
        return None


class CoordinateMoveParser:
    """Origin + destination squares, with an optional promotion letter (case-insensitive)."""

    def __init__(self, rules: RulesEngine) -> None:
        self.rules = rules

    def parse(self, position: Position, text: str) -> Optional[EngineMove]:
        if len(text) not in (4, 5):
            return None

        from_square = _square_or_none(text[0:2])
        to_square = _square_or_none(text[2:4])
        if from_square is None or to_square is None:
            return None

        promotion: Optional[chess.PieceType] = None
        if len(text) == 5:
            letter = text[4].lower()
            if letter not in PROMOTION_LETTERS:
                return None
            promotion = PROMOTION_LETTERS[letter]

        candidates = [
            move
            for move in self.rules.legal_moves(position)
            if move.from_square == from_square and move.to_square == to_square
        ]
        for move in candidates:
            if promotion is not None:
                if move.promotion == promotion:
                    return move
            # promotion letter left out: plain move, or a queen if the pawn has to promote
            elif move.promotion is None or move.promotion == chess.QUEEN:
                return move

        raise IllegalMoveError(f"Move not allowed: {text}")


class AlgebraicMoveParser:
    """Standard algebraic notation, parsed by the rules engine."""

    def __init__(self, rules: RulesEngine) -> None:
        self.rules = rules

    def parse(self, position: Position, text: str) -> Optional[EngineMove]:
        try:
            move = self.rules.parse_notation(position, text)
        except chess.InvalidMoveError:
            return None
        except (chess.IllegalMoveError, chess.AmbiguousMoveError) as e:
            raise IllegalMoveError(f"Move not allowed: {text} ({e})") from e

        # python-chess reads "--" and friends as a null move
        if not move:
            raise IllegalMoveError(f"Move not allowed: {text}")
        return move


class MoveResolver:
    """First parser that recognises the text decides the outcome."""

    def __init__(self, rules: RulesEngine, parsers: Optional[list[MoveParser]] = None) -> None:
        self.rules = rules
        self.parsers: list[MoveParser] = (
            parsers
            if parsers is not None
            else [CoordinateMoveParser(rules), AlgebraicMoveParser(rules)]
        )

    def resolve(self, position: Position, text: str) -> EngineMove:
        notation = text.strip()
        if not notation:
            raise MoveParseError("Empty move.")

        for parser in self.parsers:
            move = parser.parse(position, notation)
            if move is not None:
                logger.debug("Resolved %r with %s", notation, type(parser).__name__)
                return move

        raise MoveParseError(
            f"Cannot read move {notation!r}. Use SAN (e.g. 'e4', 'Nf3') or coordinates (e.g. 'e2e4', 'e7e8q')."
        )
