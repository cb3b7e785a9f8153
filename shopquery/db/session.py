"""Session management for database access."""

from __future__ import annotations

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from shopquery.db.base import get_engine


def make_session_factory(engine: Engine | None = None) -> sessionmaker[Session]:
    """Build a session factory bound to ``engine`` or the configured database."""

    return sessionmaker(autocommit=False, autoflush=False, bind=engine or get_engine())
