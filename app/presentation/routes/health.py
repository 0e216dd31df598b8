from fastapi import APIRouter, HTTPException, status

from app.infrastructure.redis_cache.pool import redis_ready

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz() -> dict:
    if not await redis_ready():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="redis unavailable"
        )
    return {"status": "ready"}
