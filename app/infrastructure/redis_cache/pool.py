from __future__ import annotations

from typing import Optional

from redis.asyncio import Redis

from app.settings import get_settings

_client: Optional[Redis] = None


def get_redis() -> Redis:
    """
    Lazy singleton Redis client built from settings.redis_url.
    decode_responses=True -> hashes come back as str, not bytes.
    """
    global _client
    if _client is None:
        _client = Redis.from_url(
            get_settings().redis_url, encoding="utf-8", decode_responses=True
        )
    return _client


async def redis_ready() -> bool:
    try:
        return bool(await get_redis().ping())
    except Exception:  # noqa: BLE001
        return False


async def close_redis() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
