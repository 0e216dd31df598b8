from datetime import datetime
from typing import Callable, Optional

from fastapi import Depends, HTTPException, Request, Response, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application.options import OneTimeTokenOptions
from app.domain.entities import AuthenticatedSession
from app.domain.ports.session_store import SessionStorePort
from app.domain.ports.session_transport import SessionTransportPort
from app.domain.ports.verification_store import VerificationStorePort
from app.domain.services import utcnow
from app.infrastructure.db.pool import get_pool
from app.infrastructure.db.verification_repo import PgVerificationStore
from app.infrastructure.redis_cache.pool import get_redis
from app.infrastructure.redis_cache.sessions import RedisSessions
from app.infrastructure.redis_cache.verification_store import RedisVerificationStore
from app.presentation.session_transport import CookieSessionTransport
from app.settings import get_settings

bearer_scheme = HTTPBearer(auto_error=False)


def get_verification_store() -> VerificationStorePort:
    settings = get_settings()
    if settings.verification_backend == "postgres":
        return PgVerificationStore(get_pool())
    return RedisVerificationStore(
        get_redis(), retention_seconds=settings.verification_retention_seconds
    )


def get_sessions() -> SessionStorePort:
    return RedisSessions(get_redis(), ttl_seconds=get_settings().session_ttl_seconds)


def get_one_time_token_options() -> OneTimeTokenOptions:
    return OneTimeTokenOptions.from_settings(get_settings())


def get_clock() -> Callable[[], datetime]:
    return utcnow


def get_session_transport(response: Response) -> SessionTransportPort:
    settings = get_settings()
    return CookieSessionTransport(
        response,
        cookie_name=settings.session_cookie_name,
        max_age=settings.session_ttl_seconds,
        secure=settings.session_cookie_secure,
    )


async def get_current_session(
    request: Request,
    auth: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    sessions: SessionStorePort = Depends(get_sessions),
) -> AuthenticatedSession:
    if auth:
        token = auth.credentials
    else:
        token = request.cookies.get(get_settings().session_cookie_name)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="not authenticated"
        )

    current = await sessions.find(token)
    if current is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="invalid or expired session",
        )
    return current
