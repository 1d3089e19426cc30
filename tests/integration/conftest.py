"""Integration-test fixtures (require running PostgreSQL + Redis).

All integration tests share a single event-loop so that the module-level
SQLAlchemy async engine pool and Redis pool (both created at import time)
remain valid across the entire test session.

The schema is brought up by the migration runner itself: the ledger table is
provisioned from db/init/, then migrations/ is applied. Tests are skipped when
PostgreSQL is unreachable.
"""

import uuid
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from config.settings import settings
from src.main import app
from src.pf_common.database import engine
from src.pf_migrations.application.runner import run_migrations

ROOT = Path(__file__).resolve().parents[2]
LEDGER_INIT_SQL = ROOT / "db" / "init" / "000_migrations_ledger.sql"
MIGRATIONS_DIR = ROOT / "migrations"


def make_token(user_id: int) -> str:
    """Access token as the external identity provider would issue it."""
    now = datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "type": "access",
        "iat": now,
        "exp": now + timedelta(minutes=30),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def migrated_db() -> None:
    """Provision the ledger table and apply migrations/ once per session."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (OSError, SQLAlchemyError) as exc:
        pytest.skip(f"PostgreSQL not reachable: {exc}")

    async with engine.connect() as conn:
        async with conn.begin():
            raw = await conn.get_raw_connection()
            ledger_sql = LEDGER_INIT_SQL.read_text(encoding="utf-8")
            await raw.driver_connection.execute(ledger_sql)  # type: ignore[union-attr]
    await run_migrations(engine, MIGRATIONS_DIR, "migrations")


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client(migrated_db: None) -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client — keeps the engine pool alive."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def register_user(client: AsyncClient) -> tuple[int, dict[str, str]]:
    """Create a fresh user; return (user_id, auth headers)."""
    uid = uuid.uuid4().hex[:8]
    resp = await client.post(
        "/api/v1/users",
        json={
            "name": f"it_{uid}",
            "email": f"it_{uid}@example.com",
            "password": "TestPass123",
        },
    )
    assert resp.status_code == 200, resp.text
    user_id = int(resp.json()["data"]["id"])
    return user_id, {"Authorization": f"Bearer {make_token(user_id)}"}


@pytest_asyncio.fixture(loop_scope="session")
async def new_user(client: AsyncClient) -> tuple[int, dict[str, str]]:
    return await register_user(client)


@pytest_asyncio.fixture(loop_scope="session")
async def other_user(client: AsyncClient) -> tuple[int, dict[str, str]]:
    return await register_user(client)
