"""Shared fixtures: a throwaway SQLite store, the app and an HTTP client."""
import pytest
from httpx import ASGITransport, AsyncClient

from locallibrary.database import Database
from locallibrary.main import create_app


@pytest.fixture
async def database(tmp_path):
    """Set up test database."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", timeout=5.0)
    await db.create_all()
    yield db
    await db.drop_all()
    await db.close()


@pytest.fixture
def run(database):
    """Run one service call in its own session, like a single request."""

    async def _run(service_cls, method, *args):
        async with database.sessionmaker() as session:
            service = service_cls(session, database.timeout)
            result = await getattr(service, method)(*args)
            await session.commit()
            return result

    return _run


@pytest.fixture
async def client(database):
    """Create test client."""
    app = create_app(database)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
