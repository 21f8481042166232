import asyncio

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker

from db import WarehouseStore, dispose_db
from db.engine import create_engine, create_tables


@pytest.fixture
def db_url(tmp_path):
    """File-backed SQLite database, fresh for every test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'wareflow-test.sqlite'}"


@pytest_asyncio.fixture
async def session_factory(db_url):
    engine = create_engine(db_url)
    await create_tables(engine)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def store(session_factory):
    """An isolated WarehouseStore over its own session."""
    async with session_factory() as session:
        yield WarehouseStore(session)


@pytest.fixture
def app(db_url):
    from main import create_app

    app = create_app(db_url)
    app.config["TESTING"] = True
    yield app
    asyncio.run(dispose_db())


@pytest.fixture
def client(app):
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture
def csv_bytes():
    """Build CSV file content from a header line and data lines."""
    def _make(*lines: str) -> bytes:
        return ("\n".join(lines) + "\n").encode("utf-8")
    return _make
