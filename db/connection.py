"""
db/connection.py
----------------
Opens short-lived PostgreSQL connection pools and runs statements on them.
Uses psycopg2's SimpleConnectionPool; every operation acquires its own pool
and closes it before returning.
"""

from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional, Sequence

import psycopg2
from psycopg2 import pool, extras

from config import DATABASE_URL, DB_CONNECT_TIMEOUT, POOL_MAX_CONN, POOL_MIN_CONN
from models.query_result import QueryResult
from utils.logger import get_logger

logger = get_logger(__name__)


def open_pool(
    min_conn: int = POOL_MIN_CONN, max_conn: int = POOL_MAX_CONN
) -> pool.SimpleConnectionPool:
    """
    Open a new database connection pool.

    Args:
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.

    Returns:
        A ready SimpleConnectionPool.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    try:
        db_pool = pool.SimpleConnectionPool(
            min_conn, max_conn, DATABASE_URL, connect_timeout=DB_CONNECT_TIMEOUT
        )
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to open database pool: {e}")
        raise
    logger.debug("Database connection pool opened.")
    return db_pool


def close_pool(db_pool: pool.SimpleConnectionPool) -> None:
    """Close all connections in the pool."""
    db_pool.closeall()
    logger.debug("Database connection pool closed.")


@contextmanager
def pooled() -> Iterator[pool.SimpleConnectionPool]:
    """
    Open a pool for the duration of one operation and always close it.

    A close failure after the body has already raised is logged and dropped
    so the original error reaches the caller. A close failure on the
    success path propagates.
    """
    db_pool = open_pool()
    try:
        yield db_pool
    except BaseException:
        try:
            close_pool(db_pool)
        except psycopg2.Error as close_err:
            logger.warning(f"Failed to close database pool after error: {close_err}")
        raise
    close_pool(db_pool)


def _fetch_rows(cur) -> list[dict[str, Any]]:
    # description is None for statements that return no rows
    if cur.description is None:
        return []
    return [dict(row) for row in cur.fetchall()]


def execute(
    db_pool: pool.SimpleConnectionPool,
    sql: str,
    params: Optional[Mapping[str, Any]] = None,
) -> QueryResult:
    """
    Run one statement on a pooled connection and commit it.

    Args:
        db_pool: Pool to borrow the connection from.
        sql: Statement text with ``%(name)s`` placeholders.
        params: Values bound to the named placeholders.

    Returns:
        A QueryResult with the rows (if any) and the affected-row count.
    """
    conn = db_pool.getconn()
    try:
        with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
            cur.execute(sql, params)
            result = QueryResult(recordset=_fetch_rows(cur), rowcount=cur.rowcount)
        conn.commit()
        return result
    except Exception as e:
        conn.rollback()
        logger.error(f"Statement failed: {e}")
        raise
    finally:
        db_pool.putconn(conn)


def execute_batch(
    db_pool: pool.SimpleConnectionPool, sql: str, rows: Sequence[tuple]
) -> int:
    """
    Insert many rows with a single multi-row VALUES statement.

    Args:
        db_pool: Pool to borrow the connection from.
        sql: Statement with a single ``VALUES %s`` placeholder.
        rows: Tuples of column values.

    Returns:
        The number of rows sent.
    """
    if not rows:
        return 0
    conn = db_pool.getconn()
    try:
        with conn.cursor() as cur:
            extras.execute_values(cur, sql, rows)
        conn.commit()
        return len(rows)
    except Exception as e:
        conn.rollback()
        logger.error(f"Batch insert failed: {e}")
        raise
    finally:
        db_pool.putconn(conn)


def call_procedure(
    db_pool: pool.SimpleConnectionPool, name: str, params: Mapping[str, Any]
) -> QueryResult:
    """
    Call a server-side function by name with named arguments.

    Returns:
        The rows the function produced.
    """
    conn = db_pool.getconn()
    try:
        with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
            cur.callproc(name, dict(params))
            result = QueryResult(recordset=_fetch_rows(cur), rowcount=cur.rowcount)
        conn.commit()
        return result
    except Exception as e:
        conn.rollback()
        logger.error(f"Call to {name} failed: {e}")
        raise
    finally:
        db_pool.putconn(conn)


@contextmanager
def transaction(db_pool: pool.SimpleConnectionPool):
    """
    Group several statements on one connection.

    Yields a cursor. Commits when the block exits normally, rolls back and
    re-raises when it raises.
    """
    conn = db_pool.getconn()
    try:
        with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
            yield cur
        conn.commit()
        logger.debug("Transaction committed.")
    except Exception as e:
        conn.rollback()
        logger.warning(f"Transaction rolled back: {e}")
        raise
    finally:
        db_pool.putconn(conn)
