"""Shared test fixtures for the database layer."""

import pytest
from unittest.mock import MagicMock, patch


@pytest.fixture
def mock_cursor():
    """Create a mock database cursor returning no rows."""
    cursor = MagicMock()
    cursor.fetchone.return_value = None
    cursor.fetchall.return_value = []
    cursor.rowcount = 0
    cursor.description = None
    return cursor


@pytest.fixture
def mock_conn(mock_cursor):
    """Create a mock connection whose cursor() context yields mock_cursor."""
    conn = MagicMock()
    conn.cursor.return_value.__enter__.return_value = mock_cursor
    conn.cursor.return_value.__exit__.return_value = False
    return conn


@pytest.fixture
def mock_pool(mock_conn):
    """Patch SimpleConnectionPool so every pooled() call gets this mock pool."""
    db_pool = MagicMock()
    db_pool.getconn.return_value = mock_conn
    with patch("db.connection.pool.SimpleConnectionPool", return_value=db_pool) as factory:
        db_pool.factory = factory
        yield db_pool


def returns_rows(cursor, rows):
    """Make `cursor` behave like it just ran a SELECT returning `rows`."""
    cursor.description = [(name,) for name in (rows[0] if rows else {"id": None})]
    cursor.fetchall.return_value = rows
    cursor.rowcount = len(rows)


def make_info_row(**kwargs):
    defaults = {"id": 1, "name": "John Doe"}
    defaults.update(kwargs)
    return defaults


def make_user_row(**kwargs):
    defaults = {"id": 1, "name": "Alice Johnson", "email": "alice.j@example.com"}
    defaults.update(kwargs)
    return defaults
