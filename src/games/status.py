"""Derive the game status from the position right after a move."""

from src.core.shared_types import GameStatus
from src.games.rules import Position, RulesEngine


class StatusEvaluator:
    """
    Checks for the end of the game.
    ----

    Only checkmate and stalemate end a game here. Draw rules (repetition, move counters, material)
    are not evaluated; anything producing a GameStatus.draw(...) belongs in evaluate().
    """

    def __init__(self, rules: RulesEngine) -> None:
        self.rules = rules

    def evaluate(self, position: Position) -> GameStatus:
        if self.rules.has_legal_move(position):
            return GameStatus.ongoing()

        # The side to move is stuck, so the side that just moved delivered mate (or stalemate).
        if self.rules.in_check(position):
            return GameStatus.checkmate(winner=self.rules.side_to_move(position).opponent)
        return GameStatus.stalemate()
