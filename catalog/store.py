"""
Read-only access to the course_qualifications table.

Wraps a psycopg 3 async connection pool. Connections are lent out through
lease(), an async context manager that hands the connection back to the pool
on every exit path, errors included. Connections run in autocommit mode so a
lookup never leaves a transaction open.

Consumed schema (owned elsewhere):
    course_qualifications(course_code TEXT,
                          degree_name TEXT NULL,
                          certificate_name TEXT NULL)

Public API:
    QualificationStore.create(conninfo, ...) → QualificationStore
    QualificationStore.open() / close()
    QualificationStore.lease() → async context manager yielding a connection
    QualificationStore.check_connection() → bool
    QualificationStore.find_qualifications(course_code) → list[dict]
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

log = logging.getLogger(__name__)

Row = dict[str, Any]

# course_code is always a bound parameter, never formatted into the text.
QUALIFICATIONS_SQL = """
    SELECT degree_name, certificate_name
      FROM course_qualifications
     WHERE course_code = %s
     ORDER BY degree_name ASC NULLS LAST, certificate_name ASC NULLS LAST
"""


class StoreError(Exception):
    """The database could not answer: connection loss, pool timeout, bad SQL."""


class QualificationStore:
    def __init__(self, pool: AsyncConnectionPool):
        self.pool = pool

    @classmethod
    def create(
        cls,
        conninfo: str,
        min_size: int = 1,
        max_size: int = 10,
        timeout: float = 30.0,
    ) -> "QualificationStore":
        """Build a store around a new, not yet opened, pool."""
        pool = AsyncConnectionPool(
            conninfo,
            min_size=min_size,
            max_size=max_size,
            timeout=timeout,
            kwargs={"autocommit": True},
            open=False,
        )
        return cls(pool)

    # ------------------------------------------------------------------
    # Lifetime
    # ------------------------------------------------------------------

    async def open(self) -> None:
        # wait=False: a database that is down at startup must not stop the server.
        await self.pool.open(wait=False)

    async def close(self) -> None:
        await self.pool.close()

    # ------------------------------------------------------------------
    # Leases
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def lease(self) -> AsyncIterator[psycopg.AsyncConnection]:
        """Borrow one connection; it goes back to the pool when the block exits."""
        async with self.pool.connection() as conn:
            yield conn

    async def check_connection(self) -> bool:
        """Probe the database once and log the outcome. Never raises."""
        try:
            async with self.lease() as conn:
                await conn.execute("SELECT 1")
        except psycopg.Error as exc:
            log.error("Database connection failed: %s", exc)
            return False
        log.info("Connected to the database successfully.")
        return True

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    async def find_qualifications(self, course_code: str) -> list[Row]:
        """
        Return every (degree_name, certificate_name) row for course_code.

        course_code must already be normalised (trimmed, uppercase).
        Rows are ordered by degree name, then certificate name, nulls last.
        Raises StoreError on any database failure.
        """
        try:
            async with self.lease() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(QUALIFICATIONS_SQL, (course_code,))
                    return await cur.fetchall()
        except psycopg.Error as exc:
            raise StoreError(str(exc)) from exc
