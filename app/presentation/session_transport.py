from fastapi import Response

from app.domain.entities import Session, User
from app.domain.ports.session_transport import SessionTransportPort


class CookieSessionTransport(SessionTransportPort):
    """Hands a freshly minted session to the caller as an httponly cookie."""

    def __init__(
        self,
        response: Response,
        *,
        cookie_name: str,
        max_age: int,
        secure: bool = True,
    ) -> None:
        self._response = response
        self._cookie_name = cookie_name
        self._max_age = max_age
        self._secure = secure

    def set_session(self, session: Session, user: User) -> None:
        self._response.set_cookie(
            key=self._cookie_name,
            value=session.token,
            max_age=self._max_age,
            httponly=True,
            secure=self._secure,
            samesite="lax",
            path="/",
        )
