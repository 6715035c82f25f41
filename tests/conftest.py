"""
PostBoard Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each test gets a fresh SQLite file (aiosqlite) with all tables
       created. The app's session dependency is overridden to use it, and
       an HTTPX AsyncClient talks to the app through ASGITransport.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── db_engine / session_factory: real per-test SQLite database
    ├── test_client: HTTPX AsyncClient bound to the app + test database
    ├── send_observed: raw ASGI call with a hook at response-send time
    ├── registered_user: a user created through POST /register
    └── auth_headers: Authorization header for registered_user
"""

import os
import tempfile

# Settings are read at import time, so the environment is set up first
_TEST_DIR = tempfile.mkdtemp(prefix="postboard_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/default.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "10000"
os.environ["CORS_ORIGINS"] = "http://test"

import asyncio
import json
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from postboard.database import build_engine, create_tables, get_db_session


# ══════════════════════════════════════════════════════════════════════════
# Unit-test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    A MagicMock that simulates AsyncSession behavior.

    Usage:
        async def test_get_post(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = post
            await post_service.get_post(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """Fresh SQLite database with every table created."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path}/test.db", poolclass=NullPool)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """A session for tests that call services directly."""
    async with session_factory() as session:
        yield session


# ══════════════════════════════════════════════════════════════════════════
# API Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient wired to the FastAPI app and the test database.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from postboard.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def send_observed(test_client):
    """
    Drive the app over raw ASGI and run `on_body_sent()` at the moment the
    final response body message is handed to the server.

    Returns (status, value returned by on_body_sent).

    Usage:
        status, seen = await send_observed("POST", "/register", payload, on_body_sent=count_users)
    """
    from postboard.main import app

    async def request(method, path, json_body=None, headers=None, on_body_sent=None):
        body = json.dumps(json_body).encode() if json_body is not None else b""
        raw_headers = [(b"host", b"test"), (b"content-length", str(len(body)).encode())]
        if json_body is not None:
            raw_headers.append((b"content-type", b"application/json"))
        for name, value in (headers or {}).items():
            raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

        scope = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method,
            "scheme": "http",
            "path": path,
            "raw_path": path.encode(),
            "root_path": "",
            "query_string": b"",
            "headers": raw_headers,
            "client": ("127.0.0.1", 50000),
            "server": ("test", 80),
        }
        pending = [{"type": "http.request", "body": body, "more_body": False}]
        response_done = asyncio.Event()
        observed = {}

        async def receive():
            if pending:
                return pending.pop(0)
            await response_done.wait()
            return {"type": "http.disconnect"}

        async def send(message):
            if message["type"] == "http.response.start":
                observed["status"] = message["status"]
            elif message["type"] == "http.response.body" and not message.get("more_body", False):
                if on_body_sent is not None:
                    observed["seen"] = await on_body_sent()
                response_done.set()

        await app(scope, receive, send)
        return observed["status"], observed.get("seen")

    return request


@pytest.fixture
def registration_data():
    return {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "password": "analytical-engine",
        "password_confirmation": "analytical-engine",
    }


@pytest_asyncio.fixture
async def registered_user(test_client, registration_data):
    """Registers through the API; returns {"user": {...}, "token": "..."}."""
    response = await test_client.post("/register", json=registration_data)
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
def auth_headers(registered_user):
    return {"Authorization": f"Bearer {registered_user['token']}"}
