"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool so request threads can share it.

The pool is an explicit object: build it once at startup, ``open()`` it,
hand it to ``db.access.Database`` and ``close()`` it on shutdown.
"""

from typing import Optional

import psycopg2
from psycopg2 import pool

from db.errors import TransportError, translate_errors
from utils.logger import get_logger

logger = get_logger(__name__)


class ConnectionPool:
    """
    Owns a set of PostgreSQL connections.

    Args:
        dsn: libpq connection string or URL.
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.
    """

    def __init__(self, dsn: str, min_conn: int = 1, max_conn: int = 10):
        self.dsn = dsn
        self.min_conn = min_conn
        self.max_conn = max_conn
        self._pool: Optional[pool.ThreadedConnectionPool] = None

    @property
    def closed(self) -> bool:
        return self._pool is None

    def open(self) -> None:
        """
        Create the underlying pool. Safe to call more than once.

        Raises:
            TransportError: If the database is unreachable.
        """
        if self._pool is not None:
            return
        try:
            self._pool = pool.ThreadedConnectionPool(self.min_conn, self.max_conn, self.dsn)
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise TransportError(str(e).strip() or "Database unreachable") from e
        logger.info(
            f"Database connection pool initialized ({self.min_conn}-{self.max_conn} connections)."
        )

    def getconn(self):
        """
        Borrow a connection.

        Raises:
            TransportError: If the pool is not open or is exhausted.
        """
        if self._pool is None:
            raise TransportError("Database pool not initialized. Call open() first.")
        with translate_errors("connect"):
            return self._pool.getconn()

    def putconn(self, conn, close: bool = False) -> None:
        """
        Return a connection to the pool.

        Args:
            conn: The connection obtained from ``getconn``.
            close: Discard the connection instead of keeping it for reuse.
        """
        if self._pool is None:
            conn.close()
            return
        self._pool.putconn(conn, close=close or bool(conn.closed))

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")

    def __enter__(self) -> "ConnectionPool":
        self.open()
        return self

    def __exit__(self, *exc) -> None:
        self.close()
