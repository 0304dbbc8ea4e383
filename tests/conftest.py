"""Shared test fixtures and factory functions."""

from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

import pytest
from faker import Faker
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from blog_api.apps.blog.models.post import Post
from blog_api.apps.blog.repositories.post_repository import PostRepository
from blog_api.apps.blog.seed import seed_posts
from blog_api.core.config import Settings
from blog_api.core.database import Database
from blog_api.main import create_app

SEED_COUNT = 10
POST_KEYS = {"id", "title", "content", "author", "created"}


# -- Factories --


def make_settings(tmp_path: Path, **overrides: Any) -> Settings:
    """Create a Settings instance pointing at a throwaway SQLite file."""
    defaults: dict[str, Any] = {
        "DATABASE_URL": f"sqlite+aiosqlite:///{tmp_path / 'blog-test.db'}",
        "LOG_LEVEL": "WARNING",
    }
    return Settings(**(defaults | overrides))


def make_post_body(fake: Faker, **overrides: Any) -> dict[str, Any]:
    """Create a POST /posts body. Override any field."""
    body: dict[str, Any] = {
        "title": fake.sentence(),
        "author": {"firstName": fake.first_name(), "lastName": fake.last_name()},
        "content": fake.paragraph(),
    }
    return body | overrides


# -- Fixtures --


@pytest.fixture
def fake() -> Faker:
    Faker.seed(1234)
    return Faker()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture
async def database(settings: Settings) -> AsyncIterator[Database]:
    """Connected database, dropped after the test."""
    db = Database(settings.DATABASE_URL, time_zone=settings.TIME_ZONE)
    await db.connect()
    yield db
    await db.drop_database()
    await db.disconnect()


@pytest.fixture
def repository(database: Database) -> PostRepository:
    return PostRepository(database.get_session, get_now=database.now)  # type: ignore[arg-type]


@pytest.fixture
async def seeded(repository: PostRepository, fake: Faker) -> list[Post]:
    return await seed_posts(repository, count=SEED_COUNT, fake=fake)


@pytest.fixture
def app(settings: Settings, database: Database) -> FastAPI:
    """App with the test database injected in place of the lifespan's."""
    application = create_app(settings)
    application.state.database = database
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """AsyncClient wired to the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
