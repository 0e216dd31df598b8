from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from app.domain.entities import VerificationRecord


class VerificationStorePort(Protocol):
    async def create(
        self, *, identifier: str, value: str, expires_at: datetime
    ) -> VerificationRecord:
        """Persist a new verification record and return it with its store id."""

    async def find(self, identifier: str) -> Optional[VerificationRecord]:
        """Return the record stored under `identifier`, or None."""

    async def delete(self, record_id: str) -> bool:
        """
        Delete the record by id.
        True only for the caller that actually removed it; concurrent deletes
        of the same record must not both report True.
        """
