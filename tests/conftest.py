"""
Pytest configuration and fixtures for EventGo tests.

Provides:
- An in-memory SQLite engine (aiosqlite, foreign keys on) per test
- A session for service-level tests
- An httpx client bound to the app with ``get_db`` overridden
- Small factories for tags, participants and events
"""

import os

# Set before importing app modules so the module-level engine never touches disk
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

import datetime

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from eventgo.core.database import enable_sqlite_foreign_keys, get_db, init_db
from eventgo.main import app
from eventgo.models import Event, Participant, Tag


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def test_db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_db_engine):
    return async_sessionmaker(bind=test_db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    """HTTP client against the app, each request getting its own test session."""

    async def _get_test_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ============================================================================
# Sample Data Factories
# ============================================================================

@pytest_asyncio.fixture
async def make_tag(db_session):
    async def _create(name="Music", color="#FF5733"):
        tag = Tag(name=name, color=color)
        db_session.add(tag)
        await db_session.commit()
        return tag.id
    return _create


@pytest_asyncio.fixture
async def make_participant(db_session):
    async def _create(name="Johnny Doe", age=30):
        participant = Participant(name=name, age=age)
        db_session.add(participant)
        await db_session.commit()
        return participant.id
    return _create


@pytest_asyncio.fixture
async def make_event(db_session):
    async def _create(name="Conf", date=datetime.date(2025, 10, 20)):
        event = Event(name=name, date=date, duration="2 hours", description="d", place="p")
        db_session.add(event)
        await db_session.commit()
        return event.id
    return _create

