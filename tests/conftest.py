"""
Shared fixtures: a player registry, side factories and an in-memory roster database.
"""
from typing import Optional

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from crease.database import Base
from crease.engine import PlayerDb, Side
import crease.models  # noqa: F401 - registers the tables


@pytest.fixture
def registry():
    return PlayerDb()


@pytest.fixture
def make_side(registry):
    """Build a side of registered players named '<side> 1', '<side> 2', ..."""
    def _make(name: str, size: int = 11, bowlers: Optional[int] = None) -> Side:
        ids = tuple(registry.add(f"{name} {i}").id for i in range(1, size + 1))
        bowling = ids[-bowlers:] if bowlers else None
        return Side(name=name, players=ids, bowling=bowling)
    return _make


@pytest.fixture
def side_a(make_side):
    return make_side("Reds")


@pytest.fixture
def side_b(make_side):
    return make_side("Blues")


@pytest.fixture
def db_engine():
    """In-memory SQLite shared across threads (the API runs handlers in a threadpool)."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def test_db(db_engine):
    """Create an in-memory test database."""
    session = Session(db_engine)
    yield session
    session.close()
