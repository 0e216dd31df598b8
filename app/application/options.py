from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Awaitable, Callable, Optional

from app.domain.entities import AuthenticatedSession
from app.domain.token_storage import (
    StoreTokenOption,
    TokenStorage,
    make_token_storage,
)
from app.settings import Settings


@dataclass(frozen=True)
class GenerationContext:
    """What a custom token generator gets to know about the call."""

    client_request: bool
    issued_at: datetime


GenerateToken = Callable[[AuthenticatedSession, GenerationContext], Awaitable[str]]


@dataclass
class OneTimeTokenOptions:
    expires_in: float = 3  # minutes
    disable_client_request: bool = False
    generate_token: Optional[GenerateToken] = None
    store_token: StoreTokenOption = "plain"
    create_session: bool = True
    storage: TokenStorage = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.expires_in < 0:
            raise ValueError("expires_in must be >= 0 minutes")
        # the strategy is picked once; both issue and redeem use it
        self.storage = make_token_storage(self.store_token)

    @classmethod
    def from_settings(cls, settings: Settings) -> "OneTimeTokenOptions":
        return cls(
            expires_in=settings.ott_expires_in_minutes,
            disable_client_request=settings.ott_disable_client_request,
            store_token=settings.ott_store_token,
            create_session=settings.ott_create_session,
        )
