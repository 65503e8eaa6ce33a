"""Database connection and session management."""
import asyncio
from typing import AsyncGenerator, Awaitable, Optional, TypeVar

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from locallibrary.config import settings
from locallibrary.core.exceptions import StoreTimeoutError

T = TypeVar("T")


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class Database:
    """Store handle owning the engine and session factory.

    Created once per process by the application factory, opened by the
    lifespan handler and disposed on shutdown.
    """

    def __init__(
        self,
        url: str,
        echo: bool = False,
        timeout: Optional[float] = None,
    ):
        self.url = url
        self.timeout = timeout
        engine_options = {"echo": echo, "pool_pre_ping": True}
        if not url.startswith("sqlite"):
            engine_options.update(pool_size=5, max_overflow=10)
        self.engine: AsyncEngine = create_async_engine(url, **engine_options)
        self.sessionmaker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls) -> "Database":
        return cls(
            settings.async_database_url,
            echo=settings.debug,
            timeout=settings.store_timeout_seconds,
        )

    async def create_all(self) -> None:
        """Initialize database tables."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def close(self) -> None:
        """Close database connections."""
        await self.engine.dispose()


async def with_timeout(call: Awaitable[T], timeout: Optional[float]) -> T:
    """Await a store call, failing with StoreTimeoutError after ``timeout``."""
    if timeout is None:
        return await call
    try:
        return await asyncio.wait_for(call, timeout=timeout)
    except asyncio.TimeoutError as exc:
        raise StoreTimeoutError(timeout) from exc


def get_database(request: Request) -> Database:
    """Dependency that provides the application's store handle."""
    return request.app.state.database


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides a database session.

    Service writes commit on their own; the commit here only closes the
    read transaction and runs after the response on newer FastAPI releases.
    """
    database = get_database(request)
    async with database.sessionmaker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
