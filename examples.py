"""
examples.py
-----------
Console walkthrough of common queries against the sample tables.

Each example opens its own pool, runs one operation, prints the result, and
reports a database failure without stopping the examples that follow.
Run after `python -m db.init_db`:
    python examples.py
"""

from typing import Any, Optional, Sequence

import psycopg2

from config import RUN_ADVANCED_EXAMPLES, RUN_MUTATION_EXAMPLES
from db.connection import pooled
from repositories.info_repo import InfoRepository
from utils.formatting import format_record, format_recordset
from utils.logger import get_logger

logger = get_logger(__name__)
info_repo = InfoRepository()

_RULE = "=" * 40


def _banner(number: int, title: str) -> None:
    print(f"\n=== Example {number}: {title} ===")


# ── Example 1: Basic SELECT ───────────────────────────────

def get_all_records() -> Optional[list[dict[str, Any]]]:
    """Print every info row. Returns the rows, or None on failure."""
    try:
        _banner(1, "Get All Records")
        rows = info_repo.get_all()
        print(f"Total records: {len(rows)}")
        print(format_recordset(rows))
        return rows
    except psycopg2.Error as e:
        logger.error(f"Query failed: {e}")
        return None


# ── Example 2: SELECT with WHERE ──────────────────────────

def get_record_by_id(record_id: int) -> Optional[dict[str, Any]]:
    """Print one info row by id. Returns it, or None if missing or on failure."""
    try:
        _banner(2, "Get Record By ID")
        row = info_repo.get_by_id(record_id)
        if row:
            print(f"Found record: {format_record(row)}")
        else:
            print(f"No record found with id: {record_id}")
        return row
    except psycopg2.Error as e:
        logger.error(f"Query failed: {e}")
        return None


# ── Example 3: INSERT ─────────────────────────────────────

def insert_record(name: str) -> Optional[int]:
    """Insert a row and print its id. Returns the id, or None on failure."""
    try:
        _banner(3, "Insert New Record")
        new_id = info_repo.insert(name)
        print(f"Successfully inserted! New record ID: {new_id}")
        return new_id
    except psycopg2.Error as e:
        logger.error(f"Insert failed: {e}")
        return None


# ── Example 4: UPDATE ─────────────────────────────────────

def update_record(record_id: int, name: str) -> bool:
    """Rename a row. Returns True when a row was updated."""
    try:
        _banner(4, "Update Record")
        affected = info_repo.update(record_id, name)
        if affected > 0:
            print(f'Successfully updated record ID {record_id} to "{name}"')
        else:
            print(f"No record found with id: {record_id}")
        return affected > 0
    except psycopg2.Error as e:
        logger.error(f"Update failed: {e}")
        return False


# ── Example 5: DELETE ─────────────────────────────────────

def delete_record(record_id: int) -> bool:
    """Delete a row. Returns True when a row was deleted."""
    try:
        _banner(5, "Delete Record")
        affected = info_repo.delete(record_id)
        if affected > 0:
            print(f"Successfully deleted record ID: {record_id}")
        else:
            print(f"No record found with id: {record_id}")
        return affected > 0
    except psycopg2.Error as e:
        logger.error(f"Delete failed: {e}")
        return False


# ── Example 6: Search with LIKE ───────────────────────────

def search_by_name(term: str) -> list[dict[str, Any]]:
    """Print rows whose name contains `term`."""
    try:
        _banner(6, "Search Records")
        rows = info_repo.search_by_name(term)
        print(f'Found {len(rows)} record(s) matching "{term}":')
        print(format_recordset(rows))
        return rows
    except psycopg2.Error as e:
        logger.error(f"Search failed: {e}")
        return []


# ── Example 7: COUNT ──────────────────────────────────────

def count_records() -> Optional[int]:
    try:
        _banner(7, "Count Records")
        total = info_repo.count()
        print(f"Total records in info table: {total}")
        return total
    except psycopg2.Error as e:
        logger.error(f"Count failed: {e}")
        return None


# ── Example 8: Transaction ────────────────────────────────

def transaction_example(
    names: Sequence[str] = ("Transaction User 1", "Transaction User 2"),
) -> bool:
    """
    Insert `names` atomically.

    If any insert fails, the whole transaction is rolled back and none of
    the rows remain.

    Returns:
        True if the transaction committed.
    """
    try:
        _banner(8, "Transaction Example")
        with pooled() as db_pool:
            try:
                new_ids = info_repo.insert_many_atomic(names, db_pool)
            except psycopg2.Error as e:
                logger.error(f"Transaction rolled back due to error: {e}")
                return False
        print(f"Transaction completed successfully! New record IDs: {new_ids}")
        return True
    except psycopg2.Error as e:
        logger.error(f"Transaction failed: {e}")
        return False


# ── Example 9: JOIN ───────────────────────────────────────

def join_example() -> list[dict[str, Any]]:
    """Print the first rows of info FULL OUTER JOIN users."""
    try:
        _banner(9, "Join Query Example")
        rows = info_repo.join_with_users(limit=5)
        print("Join result:")
        print(format_recordset(rows))
        return rows
    except psycopg2.Error as e:
        logger.error(f"Join query failed: {e}")
        return []


# ── Example 10: Stored procedure ──────────────────────────

def stored_procedure_example(name: str = "John") -> list[dict[str, Any]]:
    """(Re)create the name search function, then call it with `name`."""
    try:
        _banner(10, "Stored Procedure Example")
        info_repo.create_search_procedure()
        rows = info_repo.call_search_procedure(name)
        print("Stored procedure result:")
        print(format_recordset(rows))
        return rows
    except psycopg2.Error as e:
        logger.error(f"Stored procedure failed: {e}")
        return []


# ── Driver ────────────────────────────────────────────────

def run_all_examples(
    mutations: bool = RUN_MUTATION_EXAMPLES, advanced: bool = RUN_ADVANCED_EXAMPLES
) -> None:
    """
    Run the examples one after another.

    Args:
        mutations: Also run the insert -> update -> delete chain.
        advanced: Also run the transaction, join and stored procedure examples.
    """
    print(_RULE)
    print("PostgreSQL Connection Examples")
    print(_RULE)

    get_all_records()
    get_record_by_id(1)
    count_records()
    search_by_name("John")

    if mutations:
        new_id = insert_record("Test User")
        if new_id is not None:
            update_record(new_id, "Updated Test User")
            delete_record(new_id)
        else:
            logger.warning("Skipping update and delete examples: insert returned no id")

    if advanced:
        transaction_example()
        join_example()
        stored_procedure_example()

    print(f"\n{_RULE}")
    print("All examples completed!")
    print(f"{_RULE}\n")


def main() -> None:
    run_all_examples()


if __name__ == "__main__":
    main()
