from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from redis.asyncio import Redis

from app.domain.entities import VerificationRecord
from app.domain.ports.verification_store import VerificationStorePort


class RedisVerificationStore(VerificationStorePort):
    """
    One hash per identifier. The key itself is the record id, so deleting
    by id is a single DEL whose reply tells competing redeemers apart.
    """

    def __init__(
        self,
        redis: Redis,
        *,
        key_prefix: str = "verification:",
        retention_seconds: int = 3600,
    ) -> None:
        self._redis = redis
        self._prefix = key_prefix
        self._retention = timedelta(seconds=retention_seconds)

    def _key(self, identifier: str) -> str:
        return f"{self._prefix}{identifier}"

    async def create(
        self, *, identifier: str, value: str, expires_at: datetime
    ) -> VerificationRecord:
        key = self._key(identifier)
        pipe = self._redis.pipeline(transaction=True)
        pipe.delete(key)
        pipe.hset(
            key,
            mapping={
                "identifier": identifier,
                "value": value,
                "expires_at": expires_at.isoformat(),
            },
        )
        # keep it past expiry so a late attempt still reads as "expired"
        pipe.pexpireat(key, expires_at + self._retention)
        await pipe.execute()
        return VerificationRecord(
            id=key, identifier=identifier, value=value, expires_at=expires_at
        )

    async def find(self, identifier: str) -> Optional[VerificationRecord]:
        key = self._key(identifier)
        stored = await self._redis.hgetall(key)
        if not stored or "value" not in stored or "expires_at" not in stored:
            return None
        return VerificationRecord(
            id=key,
            identifier=stored.get("identifier", identifier),
            value=stored["value"],
            expires_at=datetime.fromisoformat(stored["expires_at"]),
        )

    async def delete(self, record_id: str) -> bool:
        return int(await self._redis.delete(record_id)) == 1
