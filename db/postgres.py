"""
Database connection pool and query helpers for the API service.

This module provides a psycopg v3 AsyncConnectionPool configured for production use,
along with async helpers for executing parameterized statements. Every helper
translates driver exceptions into a StoreError tagged with a StoreErrorKind, so
the repositories and the HTTP layer never inspect vendor error codes.
"""

import logging
import os
from contextlib import contextmanager
from typing import Iterator, Sequence

import psycopg
from dotenv import load_dotenv
from psycopg import errors as pg_errors
from psycopg_pool import AsyncConnectionPool, PoolTimeout

from implementation.classes.enums import StoreErrorKind
from implementation.classes.errors import StoreError

load_dotenv()

logger = logging.getLogger(__name__)


def _build_conninfo() -> str:
    """
    Build a libpq connection string from environment variables.

    Returns:
        A connection string in the format expected by psycopg.
    """
    return (
        f"host={os.getenv('POSTGRES_HOST', 'localhost')} "
        f"port={os.getenv('POSTGRES_PORT', '5432')} "
        f"dbname={os.getenv('POSTGRES_DB')} "
        f"user={os.getenv('POSTGRES_USER')} "
        f"password={os.getenv('POSTGRES_PASSWORD')}"
    )


# The pool is created inert (open=False) and will be explicitly opened
# during FastAPI startup via the lifespan handler.
pool = AsyncConnectionPool(
    conninfo=_build_conninfo(),
    min_size=2,           # Keep 2 warm connections for steady-state traffic
    max_size=10,          # Allow up to 10 connections for burst capacity
    max_lifetime=1800,    # Recycle connections after 30 minutes
    max_idle=300,         # Close idle connections above min_size after 5 minutes
    timeout=5.0,          # Wait up to 5s for a connection before raising PoolTimeout
    open=False,
)


# ===============================
#        ERROR TRANSLATION
# ===============================

def classify_error(exc: BaseException) -> StoreErrorKind:
    """
    Map a psycopg / pool exception onto a StoreErrorKind.

    Unique violations (SQLSTATE 23505) are duplicate keys, foreign key
    violations (23503) are referential violations, and everything else that
    reaches the store boundary is treated as a transport failure.
    """
    if isinstance(exc, pg_errors.UniqueViolation):
        return StoreErrorKind.DUPLICATE_KEY
    if isinstance(exc, pg_errors.ForeignKeyViolation):
        return StoreErrorKind.REFERENTIAL_VIOLATION
    return StoreErrorKind.TRANSPORT


@contextmanager
def _translate_errors() -> Iterator[None]:
    """Re-raise driver and pool exceptions as StoreError."""
    try:
        yield
    except (psycopg.Error, PoolTimeout) as exc:
        kind = classify_error(exc)
        if kind is StoreErrorKind.TRANSPORT:
            logger.error("Postgres transport failure: %s", exc)
        else:
            logger.debug("Postgres constraint failure (%s): %s", kind.value, exc)
        raise StoreError(kind, str(exc)) from exc


# ===============================
#         QUERY HELPERS
# ===============================

async def execute_read(query: str, params: Sequence[object] | None = None) -> list[tuple]:
    """
    Execute a read query and return all rows.

    Args:
        query: SQL query string with parameter placeholders (%s).
        params: Optional sequence of parameters to bind to the query.

    Returns:
        List of tuples, where each tuple represents a row.

    Raises:
        StoreError: If the statement fails or no connection is available.
    """
    with _translate_errors():
        async with pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(query, params)
                return await cur.fetchall()


async def execute_read_one(query: str, params: Sequence[object] | None = None) -> tuple | None:
    """
    Execute a read query and return a single row, or None if no rows match.

    Args:
        query: SQL query string with parameter placeholders (%s).
        params: Optional sequence of parameters to bind to the query.

    Returns:
        A tuple representing the first row, or None if no rows were returned.

    Raises:
        StoreError: If the statement fails or no connection is available.
    """
    with _translate_errors():
        async with pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(query, params)
                return await cur.fetchone()


async def execute_write(
    query: str,
    params: Sequence[object] | None = None,
    fetch_one: bool = False,
):
    """
    Execute a write query (INSERT, UPDATE, DELETE) with an explicit commit.

    The connection is used within a transaction. On clean exit, the transaction
    is explicitly committed. If an exception occurs, the transaction is rolled
    back automatically by the connection context manager.

    Args:
        query: SQL query string with parameter placeholders (%s).
        params: Optional sequence of parameters to bind to the query.
        fetch_one: If True, fetch and return the first row (e.g., for RETURNING clauses).

    Returns:
        If fetch_one is True, the first row as a tuple (or None), otherwise
        the number of rows affected by the statement.

    Raises:
        StoreError: Tagged DUPLICATE_KEY, REFERENTIAL_VIOLATION or TRANSPORT.
    """
    with _translate_errors():
        async with pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(query, params)
                result = await cur.fetchone() if fetch_one else cur.rowcount
            await conn.commit()
            return result


# ===============================
#        PUBLIC METHODS
# ===============================

async def check_postgres() -> str:
    """
    Ping Postgres via the pool to verify connectivity.

    This validates that the pool can successfully obtain a connection
    and execute a simple query. Used by the /health endpoint.

    Returns:
        'ok' if the check succeeds, otherwise an error message string.
    """
    try:
        async with pool.connection() as conn:
            await conn.execute("SELECT 1")
        return "ok"
    except Exception as e:
        return str(e)
