"""SQLAlchemy base and engine configuration."""

from __future__ import annotations

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase

from shopquery.config import get_settings


def get_database_url() -> str:
    """Return the database URL from settings (``DATABASE_URL`` env var)."""

    return get_settings().database_url


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


def get_engine(url: str | None = None) -> Engine:
    """Create a SQLAlchemy engine for ``url`` or the configured database."""

    return create_engine(url or get_database_url(), echo=get_settings().database_echo)
