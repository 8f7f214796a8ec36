import pytest

from src.api.models import GameView, JoinGameRequest, ListGamesRequest, MoveRequest, StatusView
from src.core.exceptions import InvalidRequestError, MoveParseError
from src.core.shared_types import Color, Status


# -- Validation - JoinGameRequest --
def test_join_request() -> None:
    request = JoinGameRequest(game_id=1, secret="abc")
    assert request.secret == "abc"


def test_join_request_with_empty_secret() -> None:
    """Whether a secret is valid is decided against the seats, not here."""
    assert JoinGameRequest(game_id=1, secret="").secret == ""


# -- Validation - MoveRequest --
@pytest.mark.parametrize("notation, expected", [("e2e4", "e2e4"), ("  Nf3 ", "Nf3"), ("e7e8=Q+", "e7e8=Q+")])
def test_valid_notation(notation: str, expected: str) -> None:
    """Whitespace around the move is dropped; the notation itself is checked later, against the position."""
    assert MoveRequest(game_id=1, notation=notation).notation == expected


@pytest.mark.parametrize(
    "notation",
    [
        "",  # nothing
        "   ",  # only whitespace
        "e2e4" * 5,  # far too long for any move
    ],
)
def test_invalid_notation(notation: str) -> None:
    with pytest.raises(MoveParseError):
        _ = MoveRequest(game_id=1, notation=notation)


# -- Validation - ListGamesRequest --
def test_list_defaults() -> None:
    request = ListGamesRequest()
    assert (request.offset, request.limit) == (0, 20)


@pytest.mark.parametrize("offset, limit", [(-1, 10), (0, -5)])
def test_negative_paging(offset: int, limit: int) -> None:
    with pytest.raises(InvalidRequestError):
        _ = ListGamesRequest(offset=offset, limit=limit)


# -- Response - GameView --
def test_game_view_serialises_enums_as_text() -> None:
    view = GameView(
        game_id=1,
        white="alice",
        black=None,
        fen="8/8/8/8/8/8/8/8 w - - 0 1",
        moves_san=["e4"],
        status=StatusView(kind=Status.CHECKMATE, winner=Color.WHITE),
        created_at=1,
        updated_at=2,
        to_move=Color.BLACK,
    )
    dumped = view.model_dump(mode="json")
    assert dumped["status"] == {"kind": "checkmate", "winner": "white", "reason": None}
    assert dumped["to_move"] == "black"
