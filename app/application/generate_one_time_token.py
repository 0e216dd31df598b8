import logging
from datetime import datetime, timedelta
from typing import Callable

import app.domain.services as domain_services
from app.application.options import GenerationContext, OneTimeTokenOptions
from app.domain.entities import AuthenticatedSession
from app.domain.errors import Forbidden
from app.domain.ports.verification_store import VerificationStorePort

logger = logging.getLogger(__name__)


async def generate_one_time_token(
    session: AuthenticatedSession,
    verification_store: VerificationStorePort,
    options: OneTimeTokenOptions,
    *,
    client_request: bool = False,
    now: Callable[[], datetime] = domain_services.utcnow,
) -> str:
    if options.disable_client_request and client_request:
        logger.warning(
            "one-time token refused: client requests disabled",
            extra={"user_id": session.user.id},
        )
        raise Forbidden()

    issued_at = now()
    if options.generate_token:
        token = await options.generate_token(
            session,
            GenerationContext(client_request=client_request, issued_at=issued_at),
        )
    else:
        token = domain_services.generate_random_string(32)

    expires_at = issued_at + timedelta(minutes=options.expires_in)
    stored_token = await options.storage.transform(token)

    record = await verification_store.create(
        identifier=domain_services.verification_identifier(stored_token),
        value=session.session.token,
        expires_at=expires_at,
    )
    logger.info(
        "one-time token issued",
        extra={
            "record_id": record.id,
            "user_id": session.user.id,
            "session_id": session.session.id,
            "expires_at": expires_at.isoformat(),
        },
    )
    return token
