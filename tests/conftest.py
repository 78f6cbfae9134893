"""Shared fixtures for CastGraph tests."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from castgraph.canon.crud import RelationshipStore
from castgraph.models import Base, Character, Scene


@pytest_asyncio.fixture
async def session_factory():
    """In-memory SQLite database with the relationship tables created."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def store(session_factory):
    return RelationshipStore(session_factory)


@pytest.fixture
def roster():
    return [Character(name="Ana"), Character(name="Ben")]


@pytest.fixture
def duel_scenes():
    """Two scenes where Ana and Ben start as comrades and end as foes."""
    return [
        Scene(
            sequence_number=1,
            raw_idea='Ana: "I trust you, Ben." They fought side by side against the soldiers.',
        ),
        Scene(
            sequence_number=2,
            raw_idea="Ben attacked Ana in a fit of rage, screaming threats.",
        ),
    ]
