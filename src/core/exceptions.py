"""
Custom exceptions shared by all layers.

Every error a caller can trigger derives from GameError and carries a stable `code`,
so the host can hand it back as an explicit result without inspecting the message.
"""


class GameError(Exception):
    """Top-level exception for anything going wrong while handling a game."""

    code = "GameError"


# --- REQUEST / STATE ERRORS ---
class InvalidRequestError(GameError):
    code = "InvalidRequest"


class GameStateError(GameError):
    """A stored record cannot be turned back into a valid game session."""

    code = "GameState"


class GameNotFoundError(GameError):
    code = "NotFound"


class InspectionDisabledError(GameError):
    """The debug-only seat inspection was requested while it is switched off."""

    code = "InspectionDisabled"


# --- SEATING ERRORS ---
class AlreadySeatedError(GameError):
    code = "AlreadySeated"


class SeatTakenError(GameError):
    code = "SeatTaken"


class InvalidTokenError(GameError):
    code = "InvalidToken"


class NotSeatedError(GameError):
    code = "NotSeated"


# --- PLAY ERRORS ---
class GameFinishedError(GameError):
    code = "GameFinished"


class WrongTurnError(GameError):
    code = "WrongTurn"


class IllegalMoveError(GameError):
    code = "IllegalMove"


class MoveParseError(GameError):
    code = "ParseError"
