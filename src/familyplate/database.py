"""Database configuration and session management."""

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from familyplate.config import get_settings

_settings = get_settings()
_SQL_ECHO = _settings.is_development and _settings.log_level.upper() == "DEBUG"


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


engine = create_engine(_settings.database_url, echo=_SQL_ECHO)
SessionLocal = sessionmaker(engine, expire_on_commit=False)


def init_db() -> None:
    """Create tables that do not exist yet."""
    from familyplate import models  # noqa: F401

    Base.metadata.create_all(engine)
