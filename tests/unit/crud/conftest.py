"""Shared fixtures for crud unit tests"""

import pytest
from sqlalchemy import create_engine
from sqlmodel import SQLModel, Session

from webx.core.builders import block, create_blueprint
from webx.crud.models import StoredBlueprint  # noqa: F401


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


@pytest.fixture(name="blueprint")
def blueprint_fixture():
    """A minimal valid Blueprint."""
    return create_blueprint(
        "Garden Notes", [block.heading("Spring planting"), block.paragraph("Tomatoes go in late.")],
        author="Ada", category="hobby", created=1700000000000,
    )
