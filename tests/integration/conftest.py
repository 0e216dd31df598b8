# tests/integration/conftest.py
import os

import pytest
import pytest_asyncio
from psycopg_pool import AsyncConnectionPool
from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError

REDIS_URL = os.environ.get("REDIS_URL", "redis://redis:6379/0")
DATABASE_URL = os.environ.get("DATABASE_URL", "postgresql://app:app@db:5432/app")

VERIFICATION_DDL = """
CREATE TABLE IF NOT EXISTS verification (
  id          uuid PRIMARY KEY DEFAULT gen_random_uuid(),
  identifier  text        NOT NULL,
  value       text        NOT NULL,
  expires_at  timestamptz NOT NULL,
  created_at  timestamptz NOT NULL DEFAULT now(),
  updated_at  timestamptz NOT NULL DEFAULT now()
);
"""


@pytest_asyncio.fixture
async def redis_client():
    r = Redis.from_url(
        REDIS_URL, encoding="utf-8", decode_responses=True, socket_connect_timeout=2
    )
    try:
        await r.ping()
    except (RedisConnectionError, OSError) as e:
        await r.aclose()
        pytest.skip(f"redis not reachable: {e}")
    try:
        yield r
    finally:
        await r.aclose()


@pytest_asyncio.fixture
async def pg_pool():
    pool = AsyncConnectionPool(
        f"{DATABASE_URL}?connect_timeout=2", min_size=1, max_size=4, open=False
    )
    try:
        await pool.open(wait=True, timeout=3)
    except Exception as e:  # noqa: BLE001
        await pool.close()
        pytest.skip(f"postgres not reachable: {e}")
    async with pool.connection() as conn:
        await conn.execute(VERIFICATION_DDL)
        await conn.execute("TRUNCATE verification;")
    try:
        yield pool
    finally:
        await pool.close()
