from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.infrastructure.db.pool import close_pool, get_pool
from app.infrastructure.redis_cache.pool import close_redis, get_redis
from app.logging import setup_logging
from app.presentation.api import api
from app.settings import get_settings

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    get_redis()
    if settings.verification_backend == "postgres":
        pool = get_pool()
        if getattr(pool, "closed", True):
            await pool.open()

    try:
        yield
    finally:
        # shutdown
        await close_redis()
        await close_pool()


def create_app() -> FastAPI:
    setup_logging(settings.log_level)
    app = FastAPI(
        title="One-Time Token Session API", version="0.1.0", lifespan=lifespan
    )
    app.state.settings = settings
    app.include_router(api)
    return app


app = create_app()
