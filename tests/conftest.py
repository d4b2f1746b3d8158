"""Pytest configuration and fixtures for taskboard tests."""

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from taskboard.config import DatabaseSettings, TaskboardSettings
from taskboard.services import TaskService
from tests.utils.factories import create_user, requester_for


@pytest.fixture
def settings():
    """Settings pointing at an in-memory database."""
    return TaskboardSettings(database=DatabaseSettings(url="sqlite://"))


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across connections."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    """Database session for a single test."""
    with Session(engine) as session:
        yield session


@pytest.fixture
def alice(session):
    return create_user(session, name="Alice")


@pytest.fixture
def bob(session):
    return create_user(session, name="Bob")


@pytest.fixture
def alice_requester(alice):
    return requester_for(alice)


@pytest.fixture
def bob_requester(bob):
    return requester_for(bob)


@pytest.fixture
def service(session, settings):
    """TaskService bound to the test session."""
    return TaskService(session=session, settings=settings)
