from __future__ import annotations

import json
import secrets
import uuid
from dataclasses import asdict
from datetime import datetime, timedelta, timezone
from typing import Optional

from redis.asyncio import Redis

from app.domain.entities import AuthenticatedSession, Session, User
from app.domain.ports.session_store import SessionStorePort


class RedisSessions(SessionStorePort):
    """
    Sessions keyed by their durable token. Each hash carries a snapshot of
    the user so a token resolves to the (user, session) pair in one read.
    """

    def __init__(
        self, redis: Redis, *, key_prefix: str = "sess:", ttl_seconds: int = 86400
    ) -> None:
        self._redis = redis
        self._prefix = key_prefix
        self._ttl = ttl_seconds

    def _key(self, token: str) -> str:
        return f"{self._prefix}{token}"

    async def create(self, user: User) -> Session:
        now = datetime.now(timezone.utc)
        session = Session(
            id=uuid.uuid4().hex,
            token=secrets.token_urlsafe(32),
            user_id=user.id,
            created_at=now,
            expires_at=now + timedelta(seconds=self._ttl),
        )
        key = self._key(session.token)
        pipe = self._redis.pipeline(transaction=True)
        pipe.hset(
            key,
            mapping={
                "id": session.id,
                "user_id": session.user_id,
                "created_at": session.created_at.isoformat(),
                "expires_at": session.expires_at.isoformat(),
                "user": json.dumps(asdict(user)),
            },
        )
        pipe.expire(key, self._ttl)
        await pipe.execute()
        return session

    async def find(self, token: str) -> Optional[AuthenticatedSession]:
        stored = await self._redis.hgetall(self._key(token))
        if not stored or "id" not in stored or "user" not in stored:
            return None
        session = Session(
            id=stored["id"],
            token=token,
            user_id=stored["user_id"],
            created_at=datetime.fromisoformat(stored["created_at"]),
            expires_at=datetime.fromisoformat(stored["expires_at"]),
        )
        user = User(**json.loads(stored["user"]))
        return AuthenticatedSession(user=user, session=session)
