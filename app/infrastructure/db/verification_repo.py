from __future__ import annotations

from datetime import datetime
from typing import Optional

from psycopg_pool import AsyncConnectionPool

from app.domain.entities import VerificationRecord
from app.domain.ports.verification_store import VerificationStorePort


class PgVerificationStore(VerificationStorePort):
    """
    Postgres implementation over the generic `verification` table.

    NOTE:
    - Each call borrows its own connection and commits on exit, so the
      delete is visible to concurrent redeemers as soon as it returns.
    - DELETE ... RETURNING gives at most one caller a row back.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def create(
        self, *, identifier: str, value: str, expires_at: datetime
    ) -> VerificationRecord:
        sql = """
        INSERT INTO verification (identifier, value, expires_at)
        VALUES (%s, %s, %s)
        RETURNING id
        """
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(sql, (identifier, value, expires_at))
                row = await cur.fetchone()

        if not row:
            raise RuntimeError("verification insert returned no row")
        return VerificationRecord(
            id=str(row[0]), identifier=identifier, value=value, expires_at=expires_at
        )

    async def find(self, identifier: str) -> Optional[VerificationRecord]:
        sql = """
        SELECT id, identifier, value, expires_at
        FROM verification
        WHERE identifier = %s
        ORDER BY created_at DESC
        LIMIT 1
        """
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(sql, (identifier,))
                row = await cur.fetchone()

        if not row:
            return None
        id_, db_identifier, db_value, db_expires_at = row
        return VerificationRecord(
            id=str(id_),
            identifier=str(db_identifier),
            value=str(db_value),
            expires_at=db_expires_at,
        )

    async def delete(self, record_id: str) -> bool:
        sql = "DELETE FROM verification WHERE id = %s RETURNING id"
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(sql, (record_id,))
                row = await cur.fetchone()
        return row is not None
