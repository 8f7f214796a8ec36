"""Generate database sessions"""

from sqlalchemy import Engine, StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings
from src.db.schema import Base


def build_engine(settings: Settings) -> Engine:
    """Engine for settings.database_url, with all tables created."""
    if settings.database_url is None:
        raise ValueError("No database_url configured.")

    kwargs: dict = {"echo": settings.database_echo}
    if settings.database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # an in-memory SQLite database only exists within one connection
        if ":memory:" in settings.database_url:
            kwargs["poolclass"] = StaticPool

    engine = create_engine(settings.database_url, **kwargs)

    # Ensure all tables are created
    Base.metadata.create_all(bind=engine)
    return engine


def build_session_factory(settings: Settings) -> sessionmaker[Session]:
    return sessionmaker(bind=build_engine(settings))
