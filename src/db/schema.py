"""Database tables / schema"""

from typing import Optional

from sqlalchemy import JSON, BigInteger, Integer, LargeBinary
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    # AUTOINCREMENT: SQLite never hands out an ID twice, even after the highest row is gone.
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    current_fen: Mapped[str]
    moves_san: Mapped[list[str]] = mapped_column(JSON)
    white_player: Mapped[Optional[str]]
    white_token_hash: Mapped[Optional[bytes]] = mapped_column(LargeBinary(32))
    black_player: Mapped[Optional[str]]
    black_token_hash: Mapped[Optional[bytes]] = mapped_column(LargeBinary(32))
    status: Mapped[str]
    winner: Mapped[Optional[str]]
    draw_reason: Mapped[Optional[str]]
    # nanosecond timestamps from the service clock
    created_at: Mapped[int] = mapped_column(BigInteger)
    updated_at: Mapped[int] = mapped_column(BigInteger)
