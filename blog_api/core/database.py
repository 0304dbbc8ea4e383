import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Optional
from zoneinfo import ZoneInfo

from fastapi import Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.types import TypeDecorator
from sqlmodel import Column, DateTime, Field, SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

logger = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator):
    """Stores datetimes as naive UTC and loads them back UTC-aware."""

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        # Naive values are taken to be UTC already
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class Database:
    """Handle on the document store, opened at startup and closed at shutdown."""

    def __init__(self, db_url: str, echo: bool = False, time_zone: str = "UTC"):
        self.url = db_url
        self.tz = ZoneInfo(time_zone)
        self.engine = create_async_engine(db_url, echo=echo, future=True)

    def now(self) -> datetime:
        """Get the current time in the configured time zone."""
        return datetime.now(self.tz)

    async def connect(self):
        # Create tables and make sure the store answers
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        async with self.get_session() as session:
            await session.exec(select(1))
        logger.info("Connected to database %s", self.engine.url.render_as_string())

    async def disconnect(self):
        await self.engine.dispose()
        logger.info("Database connection closed")

    async def drop_database(self):
        """Drop every table. Used by test teardown and the drop-db command."""
        logger.warning("Dropping database %s", self.engine.url.render_as_string())
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, Any]:
        async with AsyncSession(self.engine, expire_on_commit=False) as session:
            yield session


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the store handle opened by the lifespan."""
    return request.app.state.database


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(SQLModel):
    """Base model with common fields."""

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(UTCDateTime(), nullable=False),
    )
