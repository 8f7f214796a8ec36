"""
Boundary layer data model(s).

The registry hands GameRecord objects to the repository and rebuilds sessions from them.
(Decouples the data model specific to the DB layer from the domain layer's GameSession.)
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make GameRecord easier to read
PlayerName = str
TokenHash = bytes


@dataclass
class GameRecord:
    """Transport-safe snapshot of a game session. A seat holds either a player or a token hash, never both."""

    current_fen: str
    moves_san: list[str] = field(default_factory=list)
    white_player: Optional[PlayerName] = None
    white_token_hash: Optional[TokenHash] = None
    black_player: Optional[PlayerName] = None
    black_token_hash: Optional[TokenHash] = None
    status: str = "ongoing"
    winner: Optional[str] = None
    draw_reason: Optional[str] = None
    created_at: int = 0
    updated_at: int = 0
