from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class VerificationRecord:
    id: str
    identifier: str
    value: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


@dataclass
class User:
    id: str
    email: str | None = None
    name: str | None = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("user id is required")


@dataclass
class Session:
    id: str
    token: str
    user_id: str
    created_at: datetime
    expires_at: datetime


@dataclass
class AuthenticatedSession:
    """The (user, session) pair resolved by the authentication layer."""

    user: User
    session: Session


@dataclass
class VerifyResult:
    session: Session
    user: User
    token: str | None
