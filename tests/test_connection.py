"""Tests for the pool lifecycle and statement helpers in db.connection."""

import logging

import pytest
import psycopg2
from unittest.mock import MagicMock, patch

from tests.conftest import returns_rows, make_info_row


class TestOpenPool:
    def test_uses_database_url_and_timeout(self, mock_pool):
        from db.connection import open_pool
        with patch("db.connection.DATABASE_URL", "postgresql://test"), \
             patch("db.connection.DB_CONNECT_TIMEOUT", 3):
            result = open_pool(1, 2)
        assert result is mock_pool
        mock_pool.factory.assert_called_once_with(1, 2, "postgresql://test", connect_timeout=3)

    def test_reraises_operational_error(self):
        from db.connection import open_pool
        with patch("db.connection.pool.SimpleConnectionPool",
                   side_effect=psycopg2.OperationalError("server down")):
            with pytest.raises(psycopg2.OperationalError, match="server down"):
                open_pool()


class TestPooled:
    def test_closes_pool_on_success(self, mock_pool):
        from db.connection import pooled
        with pooled() as db_pool:
            assert db_pool is mock_pool
        mock_pool.closeall.assert_called_once()

    def test_closes_pool_when_body_raises(self, mock_pool):
        from db.connection import pooled
        with pytest.raises(psycopg2.DataError):
            with pooled():
                raise psycopg2.DataError("bad value")
        mock_pool.closeall.assert_called_once()

    def test_close_failure_after_error_keeps_original_error(self, mock_pool, caplog):
        caplog.set_level(logging.WARNING)
        mock_pool.closeall.side_effect = psycopg2.InterfaceError("already closed")
        from db.connection import pooled
        with pytest.raises(psycopg2.DataError, match="bad value"):
            with pooled():
                raise psycopg2.DataError("bad value")
        assert "already closed" in caplog.text

    def test_close_failure_on_success_propagates(self, mock_pool):
        mock_pool.closeall.side_effect = psycopg2.InterfaceError("already closed")
        from db.connection import pooled
        with pytest.raises(psycopg2.InterfaceError):
            with pooled():
                pass

    def test_connect_failure_never_yields(self):
        from db.connection import pooled
        body = MagicMock()
        with patch("db.connection.pool.SimpleConnectionPool",
                   side_effect=psycopg2.OperationalError("no route")):
            with pytest.raises(psycopg2.OperationalError):
                with pooled():
                    body()
        body.assert_not_called()


class TestExecute:
    def test_returns_rows_and_commits(self, mock_pool, mock_conn, mock_cursor):
        returns_rows(mock_cursor, [make_info_row(), make_info_row(id=2, name="Jane Smith")])
        from db.connection import execute
        result = execute(mock_pool, "SELECT * FROM info;")
        assert [r["name"] for r in result.recordset] == ["John Doe", "Jane Smith"]
        assert result.rowcount == 2
        mock_conn.commit.assert_called_once()
        mock_pool.putconn.assert_called_once_with(mock_conn)

    def test_passes_named_params(self, mock_pool, mock_cursor):
        from db.connection import execute
        execute(mock_pool, "SELECT * FROM info WHERE id = %(id)s::integer;", {"id": 3})
        mock_cursor.execute.assert_called_once_with(
            "SELECT * FROM info WHERE id = %(id)s::integer;", {"id": 3}
        )

    def test_mutation_has_no_rows_but_rowcount(self, mock_pool, mock_cursor):
        mock_cursor.rowcount = 1
        from db.connection import execute
        result = execute(mock_pool, "DELETE FROM info WHERE id = %(id)s::integer;", {"id": 1})
        assert result.recordset == []
        assert result.rowcount == 1
        mock_cursor.fetchall.assert_not_called()

    def test_rollback_and_release_on_error(self, mock_pool, mock_conn, mock_cursor):
        mock_cursor.execute.side_effect = psycopg2.ProgrammingError("syntax error")
        from db.connection import execute
        with pytest.raises(psycopg2.ProgrammingError):
            execute(mock_pool, "SELEC 1;")
        mock_conn.rollback.assert_called_once()
        mock_conn.commit.assert_not_called()
        mock_pool.putconn.assert_called_once_with(mock_conn)


class TestExecuteBatch:
    def test_empty_rows_skip_connection(self, mock_pool):
        from db.connection import execute_batch
        assert execute_batch(mock_pool, "INSERT INTO info (name) VALUES %s", []) == 0
        mock_pool.getconn.assert_not_called()

    @patch("db.connection.extras.execute_values")
    def test_inserts_all_rows(self, mock_exec_values, mock_pool, mock_conn, mock_cursor):
        from db.connection import execute_batch
        rows = [("a",), ("b",), ("c",)]
        assert execute_batch(mock_pool, "INSERT INTO info (name) VALUES %s", rows) == 3
        mock_exec_values.assert_called_once_with(
            mock_cursor, "INSERT INTO info (name) VALUES %s", rows
        )
        mock_conn.commit.assert_called_once()

    @patch("db.connection.extras.execute_values",
           side_effect=psycopg2.IntegrityError("null value"))
    def test_rollback_on_error(self, mock_exec_values, mock_pool, mock_conn):
        from db.connection import execute_batch
        with pytest.raises(psycopg2.IntegrityError):
            execute_batch(mock_pool, "INSERT INTO info (name) VALUES %s", [(None,)])
        mock_conn.rollback.assert_called_once()
        mock_pool.putconn.assert_called_once_with(mock_conn)


class TestCallProcedure:
    def test_calls_with_named_args(self, mock_pool, mock_cursor):
        returns_rows(mock_cursor, [make_info_row()])
        from db.connection import call_procedure
        result = call_procedure(mock_pool, "get_info_by_name", {"p_name": "John"})
        mock_cursor.callproc.assert_called_once_with("get_info_by_name", {"p_name": "John"})
        assert result.first() == {"id": 1, "name": "John Doe"}

    def test_rollback_on_error(self, mock_pool, mock_conn, mock_cursor):
        mock_cursor.callproc.side_effect = psycopg2.ProgrammingError("function does not exist")
        from db.connection import call_procedure
        with pytest.raises(psycopg2.ProgrammingError):
            call_procedure(mock_pool, "missing", {})
        mock_conn.rollback.assert_called_once()


class TestTransaction:
    def test_commits_on_success(self, mock_pool, mock_conn, mock_cursor):
        from db.connection import transaction
        with transaction(mock_pool) as cur:
            cur.execute("INSERT INTO info (name) VALUES ('a');")
            cur.execute("INSERT INTO info (name) VALUES ('b');")
        assert mock_cursor.execute.call_count == 2
        mock_conn.commit.assert_called_once()
        mock_conn.rollback.assert_not_called()
        mock_pool.putconn.assert_called_once_with(mock_conn)

    def test_rolls_back_on_error(self, mock_pool, mock_conn, mock_cursor):
        from db.connection import transaction
        with pytest.raises(psycopg2.IntegrityError):
            with transaction(mock_pool) as cur:
                cur.execute("INSERT INTO info (name) VALUES ('a');")
                raise psycopg2.IntegrityError("null value in column name")
        mock_conn.rollback.assert_called_once()
        mock_conn.commit.assert_not_called()
        mock_pool.putconn.assert_called_once_with(mock_conn)
