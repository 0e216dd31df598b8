from __future__ import annotations

from typing import Optional, Protocol

from app.domain.entities import AuthenticatedSession, Session, User


class SessionStorePort(Protocol):
    async def create(self, user: User) -> Session:
        """Create a brand-new session bound to user.id."""

    async def find(self, token: str) -> Optional[AuthenticatedSession]:
        """Resolve a durable session token to its (user, session) pair."""
