from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.domain.entities import Session, User, VerifyResult


class GenerateTokenOut(BaseModel):
    token: str = Field(..., description="The one-time token to hand off")


class SessionOut(BaseModel):
    id: str
    token: str
    user_id: str
    created_at: datetime
    expires_at: datetime

    @classmethod
    def from_entity(cls, session: Session) -> "SessionOut":
        return cls(
            id=session.id,
            token=session.token,
            user_id=session.user_id,
            created_at=session.created_at,
            expires_at=session.expires_at,
        )


class UserOut(BaseModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserOut":
        return cls(id=user.id, email=user.email, name=user.name)


class VerifyTokenOut(BaseModel):
    session: SessionOut
    user: UserOut
    token: Optional[str] = Field(
        None, description="Token of the newly minted session, null if none was made"
    )

    @classmethod
    def from_result(cls, result: VerifyResult) -> "VerifyTokenOut":
        return cls(
            session=SessionOut.from_entity(result.session),
            user=UserOut.from_entity(result.user),
            token=result.token,
        )
