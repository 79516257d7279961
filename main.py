"""
main.py
-------
Basic connection check: connects to the database and prints the first
ten rows of the `info` table.

    python main.py
"""

from typing import Any, Optional

import psycopg2

from repositories.info_repo import InfoRepository
from utils.formatting import format_recordset
from utils.logger import get_logger

logger = get_logger(__name__)


def connect_and_query(limit: int = 10) -> Optional[list[dict[str, Any]]]:
    """Print the first `limit` info rows. Returns them, or None on failure."""
    try:
        rows = InfoRepository().get_top(limit)
    except psycopg2.Error as e:
        logger.error(f"Database connection failed: {e}")
        return None
    print(format_recordset(rows))
    return rows


def main() -> None:
    connect_and_query()


if __name__ == "__main__":
    main()
