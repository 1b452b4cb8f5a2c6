"""
db/access.py
------------
The relational access layer. Every SQL statement in the application runs
through ``Database`` (one connection per call) or through the
``Transaction`` handle passed to ``Database.transaction`` (one connection
for the whole body).

Parameters are bound positionally with psycopg2 ``%s`` placeholders.
Rows come back as field-keyed dicts, or as dataclass records when the
caller passes ``record=``.
"""

from typing import Any, Callable, Optional, Sequence, Type, TypeVar, Union

from psycopg2.extras import RealDictCursor

from db.connection import ConnectionPool
from db.errors import InsertError, NotFound, TransportError, translate_errors
from db.records import decode_row, decode_rows
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
Params = Sequence[Any]


def _fetch_all(conn, sql: str, params: Params, record: Optional[Type]) -> list:
    with translate_errors("query"):
        with conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(sql, params)
            rows = cur.fetchall()
    if record is None:
        return [dict(r) for r in rows]
    return decode_rows(rows, record)


def _fetch_one(conn, sql: str, params: Params, record: Optional[Type]):
    with translate_errors("query_one"):
        with conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(sql, params)
            row = cur.fetchone()
    if row is None:
        return None
    return dict(row) if record is None else decode_row(row, record)


def _execute_insert(conn, sql: str, params: Params) -> int:
    with translate_errors("insert"):
        with conn.cursor() as cur:
            cur.execute(sql, params)
            row = cur.fetchone() if cur.description is not None else None
    # psycopg2 only reports a generated key through RETURNING
    if row is None or row[0] is None:
        logger.error("Database insert failed [insert]: no identifier returned")
        raise InsertError("Insert did not return an identifier (missing RETURNING clause?)")
    return row[0]


def _execute_update(conn, sql: str, params: Params) -> int:
    with translate_errors("update"):
        with conn.cursor() as cur:
            cur.execute(sql, params)
            return cur.rowcount


def _check_match(count: int, require_match: bool) -> int:
    if require_match and count == 0:
        raise NotFound("No matching row was affected")
    return count


class Transaction:
    """
    Statement runner bound to the single connection of a transaction.
    Handed to the body passed to ``Database.transaction``; nothing is
    committed until the body returns. The handle is unusable once
    ``transaction()`` has returned the connection to the pool.
    """

    def __init__(self, conn):
        self.connection = conn

    def _active(self):
        if self.connection is None:
            raise TransportError("Transaction is no longer active")
        return self.connection

    def query(self, sql: str, params: Params = (), record: Optional[Type[T]] = None) -> list:
        return _fetch_all(self._active(), sql, params, record)

    def query_one(self, sql: str, params: Params = (), record: Optional[Type[T]] = None):
        return _fetch_one(self._active(), sql, params, record)

    def insert(self, sql: str, params: Params = ()) -> int:
        return _execute_insert(self._active(), sql, params)

    def update(self, sql: str, params: Params = (), require_match: bool = False) -> int:
        return _check_match(_execute_update(self._active(), sql, params), require_match)


class Database:
    """
    Thin access layer over a ``ConnectionPool``.

    Simple operations each borrow their own connection and return it before
    they return; writes are committed on success and rolled back on failure.
    """

    def __init__(self, pool: ConnectionPool):
        self.pool = pool

    # ── READ ──────────────────────────────────────────────

    def query(self, sql: str, params: Params = (), record: Optional[Type[T]] = None) -> list:
        """
        Run a read statement and return every row.

        Args:
            sql: Statement with ``%s`` placeholders.
            params: Positional parameters.
            record: Optional dataclass to decode each row into.

        Returns:
            List of dict rows (or records). Empty when nothing matched.
        """
        conn = self.pool.getconn()
        try:
            return _fetch_all(conn, sql, params, record)
        finally:
            self.pool.putconn(conn)

    def query_one(self, sql: str, params: Params = (), record: Optional[Type[T]] = None):
        """
        Run a read statement and return the first row.

        Returns:
            A dict row (or record), or None if nothing matched.
        """
        conn = self.pool.getconn()
        try:
            return _fetch_one(conn, sql, params, record)
        finally:
            self.pool.putconn(conn)

    # ── WRITE ─────────────────────────────────────────────

    def insert(self, sql: str, params: Params = ()) -> int:
        """
        Run an ``INSERT ... RETURNING <key>`` statement and commit it.

        Returns:
            The identifier assigned by the store.

        Raises:
            InsertError: If the statement produced no identifier.
        """
        return self._write(_execute_insert, sql, params, "insert")

    def update(self, sql: str, params: Params = (), require_match: bool = False) -> int:
        """
        Run an UPDATE or DELETE statement and commit it.

        Args:
            require_match: Raise NotFound instead of returning 0.

        Returns:
            Number of affected rows. Zero is a normal outcome.
        """
        count = self._write(_execute_update, sql, params, "update")
        return _check_match(count, require_match)

    def _write(self, execute: Callable[..., int], sql: str, params: Params, operation: str) -> int:
        conn = self.pool.getconn()
        broken = False
        try:
            result = execute(conn, sql, params)
            with translate_errors("commit"):
                conn.commit()
            return result
        except Exception:
            if not conn.closed:
                try:
                    with translate_errors("rollback"):
                        conn.rollback()
                except Exception:
                    broken = True
                    raise
            logger.warning(f"Rolled back failed {operation}.")
            raise
        finally:
            self.pool.putconn(conn, close=broken)

    # ── TRANSACTION ───────────────────────────────────────

    def transaction(self, body: Callable[[Transaction], T]) -> T:
        """
        Run ``body`` inside one database transaction.

        The body receives a ``Transaction`` bound to a single borrowed
        connection. A normal return commits; any exception rolls back and
        is re-raised. The connection is released on every path.

        Raises:
            TransportError: If the rollback itself fails. The original
                error is kept as the exception context.
        """
        conn = self.pool.getconn()
        tx = Transaction(conn)
        broken = False
        try:
            result = body(tx)
            with translate_errors("commit"):
                conn.commit()
            return result
        except Exception as e:
            try:
                conn.rollback()
            except Exception as rollback_error:
                broken = True
                logger.error(f"Rollback failed after {e.__class__.__name__}: {rollback_error}")
                error = TransportError(f"Transaction rollback failed: {rollback_error}")
                error.original = e
                raise error from rollback_error
            logger.warning(f"Transaction rolled back: {e}")
            raise
        finally:
            tx.connection = None
            self.pool.putconn(conn, close=broken)


# Anything repositories can run statements on: the pool-backed layer or an open transaction
Executor = Union[Database, Transaction]
