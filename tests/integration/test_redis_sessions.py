import asyncio
from uuid import uuid4

import pytest

from app.domain.entities import User
from app.infrastructure.redis_cache.sessions import RedisSessions


@pytest.mark.asyncio
async def test_create_and_find_session(redis_client):
    prefix = f"sess:test:{uuid4().hex}:"
    sessions = RedisSessions(redis_client, key_prefix=prefix, ttl_seconds=30)
    user = User(id="user-123", email="u@example.com", name="U")

    session = await sessions.create(user)
    assert session.user_id == "user-123"
    assert session.token and isinstance(session.token, str)

    found = await sessions.find(session.token)
    assert found is not None
    assert found.user == user
    assert found.session == session


@pytest.mark.asyncio
async def test_unknown_token_returns_none(redis_client):
    sessions = RedisSessions(redis_client, key_prefix=f"sess:test:{uuid4().hex}:")
    assert await sessions.find("nope") is None


@pytest.mark.asyncio
async def test_session_expires_by_ttl(redis_client):
    prefix = f"sess:test:{uuid4().hex}:"
    sessions = RedisSessions(redis_client, key_prefix=prefix, ttl_seconds=1)

    session = await sessions.create(User(id="user-xyz"))
    await asyncio.sleep(1.5)

    assert await sessions.find(session.token) is None


@pytest.mark.asyncio
async def test_tokens_are_random_and_unique(redis_client):
    prefix = f"sess:test:{uuid4().hex}:"
    sessions = RedisSessions(redis_client, key_prefix=prefix, ttl_seconds=10)

    created = [await sessions.create(User(id="user-1")) for _ in range(8)]
    assert len({s.token for s in created}) == 8
    assert len({s.id for s in created}) == 8
