"""
Type definitions used across layers
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional, Self

# Opaque caller identity, resolved by the host for every invocation.
Actor = str


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class Role(StrEnum):
    WHITE = "white"
    BLACK = "black"
    SPECTATOR = "spectator"


class Status(StrEnum):
    ONGOING = "ongoing"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW = "draw"
    RESIGNED = "resigned"


@dataclass(frozen=True)
class GameStatus:
    """Status of a game, plus the winner or draw reason where the status carries one."""

    kind: Status
    winner: Optional[Color] = None
    reason: Optional[str] = None

    @classmethod
    def ongoing(cls) -> Self:
        return cls(Status.ONGOING)

    @classmethod
    def checkmate(cls, winner: Color) -> Self:
        return cls(Status.CHECKMATE, winner=winner)

    @classmethod
    def stalemate(cls) -> Self:
        return cls(Status.STALEMATE)

    @classmethod
    def draw(cls, reason: str) -> Self:
        return cls(Status.DRAW, reason=reason)

    @classmethod
    def resigned(cls, winner: Color) -> Self:
        return cls(Status.RESIGNED, winner=winner)

    @property
    def is_terminal(self) -> bool:
        """Every status except ONGOING is absorbing."""
        return self.kind != Status.ONGOING
