"""
repositories/info_repo.py
-------------------------
Data access layer for the `info` table.
All SQL queries related to `info` live here, including the join against
`users` and the `get_info_by_name` search function.
"""

from typing import Any, Optional, Sequence

from psycopg2 import pool

from db.connection import call_procedure, execute, pooled, transaction
from utils.logger import get_logger

logger = get_logger(__name__)

SEARCH_FUNCTION = "get_info_by_name"

_DROP_SEARCH_FUNCTION_SQL = f"DROP FUNCTION IF EXISTS {SEARCH_FUNCTION}(VARCHAR);"

_CREATE_SEARCH_FUNCTION_SQL = f"""
    CREATE FUNCTION {SEARCH_FUNCTION}(p_name VARCHAR(50))
    RETURNS SETOF info
    LANGUAGE sql
    AS $$
        SELECT * FROM info WHERE name LIKE '%' || p_name || '%' ORDER BY id;
    $$;
"""


class InfoRepository:
    """Repository for CRUD operations on the info table."""

    # ── READ ──────────────────────────────────────────────

    def get_top(self, limit: int = 10) -> list[dict[str, Any]]:
        """Fetch the first `limit` rows ordered by id."""
        sql = "SELECT * FROM info ORDER BY id LIMIT %(limit)s::integer;"
        with pooled() as db_pool:
            return execute(db_pool, sql, {"limit": limit}).recordset

    def get_all(self) -> list[dict[str, Any]]:
        """Fetch every row ordered by id."""
        with pooled() as db_pool:
            return execute(db_pool, "SELECT * FROM info ORDER BY id;").recordset

    def get_by_id(self, record_id: int) -> Optional[dict[str, Any]]:
        """
        Fetch a single row by primary key.

        Returns:
            The row, or None if no row has that id.
        """
        sql = "SELECT * FROM info WHERE id = %(id)s::integer;"
        with pooled() as db_pool:
            return execute(db_pool, sql, {"id": record_id}).first()

    def search_by_name(self, term: str) -> list[dict[str, Any]]:
        """
        Fetch rows whose name contains `term`.

        Case sensitivity follows the column collation.
        """
        sql = "SELECT * FROM info WHERE name LIKE %(term)s::text ORDER BY id;"
        with pooled() as db_pool:
            return execute(db_pool, sql, {"term": f"%{term}%"}).recordset

    def count(self) -> int:
        """Count all rows."""
        with pooled() as db_pool:
            row = execute(db_pool, "SELECT COUNT(*) AS total FROM info;").first()
            return int(row["total"])

    def join_with_users(self, limit: int = 5) -> list[dict[str, Any]]:
        """
        Pair info rows with users rows sharing the same id.

        Rows present on only one side still appear, with NULLs for the other.
        """
        sql = """
            SELECT
                i.id,
                i.name AS info_name,
                u.name AS user_name,
                u.email
            FROM info i
            FULL OUTER JOIN users u ON i.id = u.id
            ORDER BY COALESCE(i.id, u.id)
            LIMIT %(limit)s::integer;
        """
        with pooled() as db_pool:
            return execute(db_pool, sql, {"limit": limit}).recordset

    # ── CREATE ────────────────────────────────────────────

    def insert(self, name: str) -> int:
        """
        Insert a new row.

        Over-length names are rejected by the info.name column
        (StringDataRightTruncation), never cut short.

        Returns:
            The generated id.
        """
        sql = "INSERT INTO info (name) VALUES (%(name)s::varchar) RETURNING id;"
        with pooled() as db_pool:
            new_id = execute(db_pool, sql, {"name": name}).first()["id"]
        logger.info(f"Inserted info #{new_id}")
        return new_id

    def insert_many_atomic(
        self, names: Sequence[str], db_pool: pool.SimpleConnectionPool
    ) -> list[int]:
        """
        Insert several rows inside one transaction.

        Runs on the caller's pool so the caller can tell a connection
        failure apart from a rollback. Either every row is inserted or none.

        Returns:
            The generated ids, in the order of `names`.
        """
        sql = "INSERT INTO info (name) VALUES (%(name)s::varchar) RETURNING id;"
        new_ids = []
        with transaction(db_pool) as cur:
            for name in names:
                cur.execute(sql, {"name": name})
                new_ids.append(cur.fetchone()["id"])
        logger.info(f"Inserted info {new_ids} in one transaction")
        return new_ids

    # ── UPDATE ────────────────────────────────────────────

    def update(self, record_id: int, name: str) -> int:
        """
        Rename a row.

        Returns:
            The number of rows updated (0 when the id does not exist).
        """
        sql = "UPDATE info SET name = %(name)s::varchar WHERE id = %(id)s::integer;"
        with pooled() as db_pool:
            return execute(db_pool, sql, {"id": record_id, "name": name}).rowcount

    # ── DELETE ────────────────────────────────────────────

    def delete(self, record_id: int) -> int:
        """
        Delete a row by id.

        Returns:
            The number of rows deleted (0 when the id does not exist).
        """
        sql = "DELETE FROM info WHERE id = %(id)s::integer;"
        with pooled() as db_pool:
            affected = execute(db_pool, sql, {"id": record_id}).rowcount
        if affected:
            logger.info(f"Deleted info #{record_id}")
        return affected

    # ── SEARCH FUNCTION ───────────────────────────────────

    def create_search_procedure(self) -> None:
        """Drop and recreate the server-side name search function."""
        with pooled() as db_pool:
            execute(db_pool, _DROP_SEARCH_FUNCTION_SQL)
            execute(db_pool, _CREATE_SEARCH_FUNCTION_SQL)
        logger.info(f"Created function {SEARCH_FUNCTION}")

    def call_search_procedure(self, name: str) -> list[dict[str, Any]]:
        """Run the name search function and return its rows."""
        with pooled() as db_pool:
            return call_procedure(db_pool, SEARCH_FUNCTION, {"p_name": name}).recordset
