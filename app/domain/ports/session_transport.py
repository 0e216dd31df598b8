from typing import Protocol

from app.domain.entities import Session, User


class SessionTransportPort(Protocol):
    def set_session(self, session: Session, user: User) -> None:
        """Establish `session` as the caller's active session (cookie, header...)."""
