"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError, MoveParseError
from src.core.shared_types import Color, Status

PlayerName = str

MAX_NOTATION_LENGTH = 16


# --- REQUEST MODELS ---
class JoinGameRequest(BaseModel):
    """Any secret is accepted here; one that matches no seat fails with InvalidToken on join."""

    game_id: int
    secret: str


class MoveRequest(BaseModel):
    game_id: int
    notation: str

    @field_validator("notation")
    @classmethod
    def validate_notation(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise MoveParseError("Move must not be empty.")
        if len(value) > MAX_NOTATION_LENGTH:
            raise MoveParseError(
                f"Cannot interpret {value[:MAX_NOTATION_LENGTH]!r}... as a move: longer than {MAX_NOTATION_LENGTH} characters."
            )
        return value


class ResignRequest(BaseModel):
    game_id: int


class GetGameRequest(BaseModel):
    game_id: int


class ListGamesRequest(BaseModel):
    offset: int = 0
    limit: int = 20

    @field_validator(*["offset", "limit"])
    @classmethod
    def validate_not_negative(cls, value: int) -> int:
        if value < 0:
            raise InvalidRequestError(f"Paging values cannot be negative: {value}")
        return value


# --- RESPONSE MODELS ---
class StatusView(BaseModel):
    kind: Status
    winner: Optional[Color] = None
    reason: Optional[str] = None


class GameView(BaseModel):
    game_id: int
    white: Optional[PlayerName]
    black: Optional[PlayerName]
    fen: str
    moves_san: list[str]
    status: StatusView
    created_at: int
    updated_at: int
    to_move: Color


class CreateGameResponse(BaseModel):
    """The only time the plaintext secrets are ever handed out."""

    game_id: int
    white_secret: str
    black_secret: str


class SeatInspection(BaseModel):
    """Debug-only view of the seats, token hashes included (hex)."""

    game_id: int
    white: Optional[PlayerName]
    black: Optional[PlayerName]
    white_token_hash: Optional[str]
    black_token_hash: Optional[str]
