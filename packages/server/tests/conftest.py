"""
Shared fixtures: in-memory SQLite database, sessions and an API client.
"""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from app.core.database import get_session
from app.main import app
from app.models.label import Label
from app.models.project import Project

TEST_DATABASE_URL = "sqlite+aiosqlite://"

VALID_DESCRIPTION = "A friendly library that welcomes first-time contributors."


def make_attrs(**overrides) -> dict:
    attrs = {
        "name": "Rails",
        "description": VALID_DESCRIPTION,
        "github_url": "https://github.com/rails/rails",
        "main_language": "Ruby",
    }
    attrs.update(overrides)
    return attrs


@pytest.fixture
def project_attrs():
    """Factory for a valid attribute set, with overrides."""
    return make_attrs


@pytest.fixture
async def engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def add_project(session):
    """Insert a project directly, bypassing validation."""

    async def _add(labels: list[Label] | None = None, **overrides) -> Project:
        project = Project(**make_attrs(**overrides))
        if labels:
            project.labels = labels
        session.add(project)
        await session.flush()
        return project

    return _add


@pytest.fixture
def add_label(session):
    async def _add(name: str) -> Label:
        label = Label(name=name)
        session.add(label)
        await session.flush()
        return label

    return _add


@pytest.fixture
async def client(session_factory):
    async def _get_test_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = _get_test_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
