from datetime import datetime
from typing import Annotated, Callable

from fastapi import APIRouter, Depends, HTTPException, status

from app.application.generate_one_time_token import generate_one_time_token
from app.application.options import OneTimeTokenOptions
from app.application.verify_one_time_token import verify_one_time_token
from app.domain.entities import AuthenticatedSession
from app.domain.errors import (
    Forbidden,
    InvalidInput,
    InvalidToken,
    SessionNotFound,
    TokenExpired,
)
from app.domain.ports.session_store import SessionStorePort
from app.domain.ports.session_transport import SessionTransportPort
from app.domain.ports.verification_store import VerificationStorePort
from app.presentation.dependencies import (
    get_clock,
    get_current_session,
    get_one_time_token_options,
    get_session_transport,
    get_sessions,
    get_verification_store,
)
from app.schemas.requests import VerifyTokenIn
from app.schemas.responses import GenerateTokenOut, VerifyTokenOut

router = APIRouter(prefix="/one-time-token", tags=["One-time token"])

_REDEMPTION_ERRORS = {
    InvalidInput: "token is required",
    InvalidToken: "invalid token",
    TokenExpired: "token expired",
    SessionNotFound: "session not found",
}


@router.get("/generate", response_model=GenerateTokenOut)
async def get_generate_token(
    current: Annotated[AuthenticatedSession, Depends(get_current_session)],
    verification_store: Annotated[
        VerificationStorePort, Depends(get_verification_store)
    ],
    options: Annotated[OneTimeTokenOptions, Depends(get_one_time_token_options)],
    now: Annotated[Callable[[], datetime], Depends(get_clock)],
):
    try:
        token = await generate_one_time_token(
            current,
            verification_store,
            options,
            client_request=True,
            now=now,
        )
    except Forbidden:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="client requests are disabled",
        )
    return GenerateTokenOut(token=token)


@router.post("/verify", response_model=VerifyTokenOut)
async def post_verify_token(
    body: VerifyTokenIn,
    verification_store: Annotated[
        VerificationStorePort, Depends(get_verification_store)
    ],
    sessions: Annotated[SessionStorePort, Depends(get_sessions)],
    options: Annotated[OneTimeTokenOptions, Depends(get_one_time_token_options)],
    session_transport: Annotated[
        SessionTransportPort, Depends(get_session_transport)
    ],
    now: Annotated[Callable[[], datetime], Depends(get_clock)],
):
    try:
        result = await verify_one_time_token(
            body.token,
            verification_store,
            sessions,
            options,
            session_transport=session_transport,
            now=now,
        )
    except (InvalidInput, InvalidToken, TokenExpired, SessionNotFound) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_REDEMPTION_ERRORS[type(e)],
        )
    return VerifyTokenOut.from_result(result)
