"""Unit tests for src/core/config.py"""

import pytest
from pydantic import ValidationError

from src.core.config import Settings, get_settings
from src.core.shared_types import Color, GameStatus


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ["CHESS_TOKEN_BYTES", "CHESS_DATABASE_URL", "CHESS_DEBUG_INSPECT", "CHESS_LOG_LEVEL"]:
        monkeypatch.delenv(name, raising=False)
    settings = Settings()
    assert settings.token_bytes == 32
    assert settings.database_url is None
    assert settings.debug_inspect is False
    assert settings.pgn_event == "Chess Game"


def test_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHESS_TOKEN_BYTES", "48")
    monkeypatch.setenv("CHESS_DEBUG_INSPECT", "true")
    monkeypatch.setenv("CHESS_LOG_LEVEL", "debug")
    settings = Settings()
    assert settings.token_bytes == 48
    assert settings.debug_inspect is True
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("overrides", [{"token_bytes": 8}, {"log_level": "chatty"}, {"list_limit_max": 0}])
def test_invalid_settings(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        Settings(**overrides)


def test_settings_are_cached() -> None:
    assert get_settings() is get_settings()


# -- shared types --
def test_opponent() -> None:
    assert Color.WHITE.opponent == Color.BLACK
    assert Color.BLACK.opponent == Color.WHITE


def test_only_ongoing_is_not_terminal() -> None:
    assert not GameStatus.ongoing().is_terminal
    assert GameStatus.draw("agreement").is_terminal
    assert GameStatus.draw("agreement").reason == "agreement"
