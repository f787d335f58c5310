"""Shared fixtures for crud unit tests"""

import pytest
from sqlalchemy import create_engine
from sqlmodel import SQLModel, Session

from noteblocks.crud.models import NormalizedNote  # noqa: F401  registers the table


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test; changes are not committed."""
    with Session(engine) as s:
        yield s
