import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from db.database import create_db_and_tables, get_async_session
from main import app


@pytest.fixture()
def session_maker(tmp_path):
    """A throwaway SQLite database per test.

    NullPool keeps no connection around, so the engine can be used from the
    fixture's event loop and from the TestClient's loop alike.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'inventory.db'}", poolclass=NullPool)
    asyncio.run(create_db_and_tables(engine))

    yield async_sessionmaker(engine, expire_on_commit=False)

    asyncio.run(engine.dispose())


@pytest.fixture()
def client(session_maker):
    async def _test_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = _test_session
    # Not used as a context manager: the lifespan would create the default database
    yield TestClient(app)
    app.dependency_overrides.clear()
