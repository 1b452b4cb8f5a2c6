"""
Tests for the explicit connection pool (db/connection.py).
The psycopg2 pool class is replaced so no server is needed.
"""

from unittest.mock import MagicMock, patch

import psycopg2
import pytest
from psycopg2 import pool as pg_pool

from db.connection import ConnectionPool
from db.errors import TransportError

DSN = "postgresql://reconnect@localhost/reconnect_test"


@pytest.fixture
def threaded_pool():
    with patch("db.connection.pool.ThreadedConnectionPool") as mock_cls:
        yield mock_cls


class TestLifecycle:
    def test_getconn_before_open_raises(self, threaded_pool):
        with pytest.raises(TransportError, match="not initialized"):
            ConnectionPool(DSN).getconn()

    def test_open_is_idempotent(self, threaded_pool):
        pool = ConnectionPool(DSN, 2, 5)
        pool.open()
        pool.open()

        threaded_pool.assert_called_once_with(2, 5, DSN)
        assert not pool.closed

    def test_open_failure_is_transport_error(self, threaded_pool):
        threaded_pool.side_effect = psycopg2.OperationalError("could not connect to server")

        pool = ConnectionPool(DSN)
        with pytest.raises(TransportError):
            pool.open()
        assert pool.closed

    def test_close_is_idempotent(self, threaded_pool):
        pool = ConnectionPool(DSN)
        pool.open()
        pool.close()
        pool.close()

        threaded_pool.return_value.closeall.assert_called_once()
        assert pool.closed

    def test_getconn_after_close_raises(self, threaded_pool):
        pool = ConnectionPool(DSN)
        pool.open()
        pool.close()

        with pytest.raises(TransportError):
            pool.getconn()

    def test_context_manager(self, threaded_pool):
        with ConnectionPool(DSN) as pool:
            assert not pool.closed
        assert pool.closed


class TestBorrowing:
    def test_exhausted_pool_is_transport_error(self, threaded_pool):
        threaded_pool.return_value.getconn.side_effect = pg_pool.PoolError("connection pool exhausted")
        pool = ConnectionPool(DSN)
        pool.open()

        with pytest.raises(TransportError, match="exhausted"):
            pool.getconn()

    def test_putconn_returns_healthy_connection(self, threaded_pool):
        pool = ConnectionPool(DSN)
        pool.open()
        conn = MagicMock(closed=0)

        pool.putconn(conn)

        threaded_pool.return_value.putconn.assert_called_once_with(conn, close=False)

    def test_putconn_discards_closed_connection(self, threaded_pool):
        pool = ConnectionPool(DSN)
        pool.open()
        conn = MagicMock(closed=1)

        pool.putconn(conn)

        threaded_pool.return_value.putconn.assert_called_once_with(conn, close=True)

    def test_putconn_after_close_closes_connection(self, threaded_pool):
        pool = ConnectionPool(DSN)
        pool.open()
        pool.close()
        conn = MagicMock(closed=0)

        pool.putconn(conn)

        conn.close.assert_called_once()
