"""Fixtures backed by an in-memory SQLite database."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from shopquery.db import models  # noqa: F401  (registers the tables on Base)
from shopquery.db.base import Base
from shopquery.db.session import make_session_factory


@pytest.fixture
def engine():
    """Fresh in-memory database shared by every connection of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)
