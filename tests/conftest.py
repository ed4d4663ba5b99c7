# tests/conftest.py
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import os

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("ASYNC_DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

from inventory_ledger.main import app
from inventory_ledger.db.session import Base, engine
from inventory_ledger.db.session_async import AsyncSessionLocal


# ---------- Fixtures ----------
@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create the tables once per test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_tables():
    yield
    with engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())


@pytest_asyncio.fixture(scope="function")
async def client():
    """AsyncClient bound to the app, no extra overrides."""
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def async_db_session() -> AsyncSession:
    """AsyncSession for calling services directly."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest_asyncio.fixture(scope="function")
async def widget(client: httpx.AsyncClient) -> str:
    """Creates the reference catalog item and returns its id."""
    resp = await client.post(
        "/models",
        json={"name": "Widget", "availableQuantity": 10, "price": 5},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["insertedId"]
