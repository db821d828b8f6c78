"""Pytest configuration and fixtures for the user directory.

Every test that touches persistence gets its own SQLite file under
``tmp_path``; HTTP tests run against ``user_directory.app.main:app``
over ASGI.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from user_directory.app.core.config import settings
from user_directory.app.core.db import init_db
from user_directory.app.main import app
from user_directory.app.repositories.user_store import InMemoryUserStore, SQLiteUserStore


@pytest.fixture
def database(tmp_path, monkeypatch) -> str:
    """Point settings at a fresh, migrated SQLite file and return its path."""
    path = str(tmp_path / "users.db")
    monkeypatch.setattr(settings, "database_url", path)
    init_db()
    return path


@pytest.fixture
def sqlite_store(database) -> SQLiteUserStore:
    return SQLiteUserStore()


@pytest.fixture
def memory_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
async def client(database) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
