"""
FlowRouter Backend - Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── make_request: builds bare Starlette requests for helper tests
    ├── db_engine: in-memory SQLite engine with the schema created
    ├── session_factory: async sessions bound to db_engine
    ├── book_repository: BookRepository over session_factory
    └── test_client: HTTPX AsyncClient talking to a fresh app
"""

import os
import tempfile
from typing import Callable, Dict, Optional

# Settings are read at import time: configure the environment BEFORE any
# flowrouter import so tests never touch a real database
_test_dir = tempfile.mkdtemp(prefix="flowrouter_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_dir}/flowrouter_test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DB_CREATE_SCHEMA"] = "false"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from starlette.requests import Request

from flowrouter.database import Base
from flowrouter.models.book import Book  # noqa: F401
from flowrouter.repositories.book import BookRepository


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """
    Builds a Starlette Request straight from an ASGI scope.

    Usage:
        request = make_request("PUT", "/api/v10/book", body=b'{"title": "x"}')
    """

    def _make(
        method: str = "GET",
        path: str = "/",
        query: str = "",
        headers: Optional[Dict[str, str]] = None,
        body: bytes = b"",
        raw_path: Optional[bytes] = None,
    ) -> Request:
        scope = {
            "type": "http",
            "http_version": "1.1",
            "method": method,
            "scheme": "http",
            "server": ("testserver", 80),
            "root_path": "",
            "path": path,
            "raw_path": path.encode() if raw_path is None else raw_path,
            "query_string": query.encode(),
            "headers": [
                (key.lower().encode("latin-1"), value.encode("latin-1"))
                for key, value in (headers or {}).items()
            ],
        }

        async def receive():
            return {"type": "http.request", "body": body, "more_body": False}

        return Request(scope, receive)

    return _make


@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite database with all tables created.

    StaticPool keeps the single connection alive, otherwise every new
    connection would see a brand new empty database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def book_repository(session_factory) -> BookRepository:
    return BookRepository(session_factory)


@pytest_asyncio.fixture
async def test_client(book_repository):
    """
    HTTPX AsyncClient routed directly into a fresh FastAPI app.

    The app's ApplicationRouter is bound to the in-memory book repository.

    Usage:
        async def test_hello(test_client):
            response = await test_client.get("/api/v10/hello/Ada")
            assert response.status_code == 200
    """
    from flowrouter.main import create_app
    from flowrouter.routes.application import ApplicationRouter

    app = create_app(ApplicationRouter(book_repository))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
