"""
Redeem a one-time token.

The attempt runs once through Locate -> Invalidate -> Resolve -> Issue.
The record is deleted before the bound session is resolved, so a token whose
session has vanished is burned all the same: no token is ever redeemable twice.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

import app.domain.services as domain_services
from app.application.options import OneTimeTokenOptions
from app.domain.entities import (
    AuthenticatedSession,
    VerificationRecord,
    VerifyResult,
)
from app.domain.errors import (
    InvalidInput,
    InvalidToken,
    RedemptionPhase,
    SessionNotFound,
    TokenExpired,
)
from app.domain.ports.session_store import SessionStorePort
from app.domain.ports.session_transport import SessionTransportPort
from app.domain.ports.verification_store import VerificationStorePort

logger = logging.getLogger(__name__)


async def _locate(
    token: str,
    verification_store: VerificationStorePort,
    options: OneTimeTokenOptions,
    now: datetime,
) -> VerificationRecord:
    stored_token = await options.storage.transform(token)
    record = await verification_store.find(
        domain_services.verification_identifier(stored_token)
    )
    if record is None:
        raise InvalidToken(RedemptionPhase.LOCATE)

    if record.is_expired(now):
        await verification_store.delete(record.id)
        raise TokenExpired(RedemptionPhase.LOCATE)
    return record


async def _invalidate(
    record: VerificationRecord, verification_store: VerificationStorePort
) -> None:
    # another redeemer deleted it between our find and delete
    if not await verification_store.delete(record.id):
        raise InvalidToken(RedemptionPhase.INVALIDATE)


async def _resolve(
    record: VerificationRecord, sessions: SessionStorePort
) -> AuthenticatedSession:
    resolved = await sessions.find(record.value)
    if resolved is None:
        raise SessionNotFound(RedemptionPhase.RESOLVE)
    return resolved


async def _issue(
    resolved: AuthenticatedSession,
    sessions: SessionStorePort,
    options: OneTimeTokenOptions,
    session_transport: Optional[SessionTransportPort],
) -> VerifyResult:
    if not options.create_session:
        return VerifyResult(session=resolved.session, user=resolved.user, token=None)

    new_session = await sessions.create(resolved.user)
    if session_transport is not None:
        session_transport.set_session(new_session, resolved.user)
    return VerifyResult(
        session=new_session, user=resolved.user, token=new_session.token
    )


async def verify_one_time_token(
    token: str,
    verification_store: VerificationStorePort,
    sessions: SessionStorePort,
    options: OneTimeTokenOptions,
    *,
    session_transport: Optional[SessionTransportPort] = None,
    now: Callable[[], datetime] = domain_services.utcnow,
) -> VerifyResult:
    if not token or not token.strip():
        raise InvalidInput()

    try:
        record = await _locate(token, verification_store, options, now())
        await _invalidate(record, verification_store)
        resolved = await _resolve(record, sessions)
    except (InvalidToken, TokenExpired, SessionNotFound) as e:
        logger.warning(
            "one-time token rejected",
            extra={"reason": type(e).__name__, "phase": e.phase.value},
        )
        raise

    result = await _issue(resolved, sessions, options, session_transport)
    logger.info(
        "one-time token redeemed",
        extra={
            "record_id": record.id,
            "user_id": resolved.user.id,
            "session_id": result.session.id,
            "new_session": result.token is not None,
        },
    )
    return result
