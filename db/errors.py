"""
db/errors.py
------------
Typed failures raised by the data-access layer.

Every error carries an ``ErrorKind`` so callers branch on type rather than
on substrings of the driver message. Driver exceptions are translated by
``translate_errors``; nothing is retried here.
"""

from contextlib import contextmanager
from enum import Enum
from typing import Iterator, Optional

import psycopg2
from psycopg2 import errors as pg_errors
from psycopg2 import pool as pg_pool

from utils.logger import get_logger

logger = get_logger(__name__)


class ErrorKind(str, Enum):
    """Broad category of a data-access failure."""
    CONSTRAINT_VIOLATION = "constraint_violation"
    NOT_FOUND = "not_found"
    INSERT_FAILED = "insert_failed"
    TRANSPORT = "transport"
    QUERY = "query"
    DECODE = "decode"


class ConstraintKind(str, Enum):
    """Which relational constraint rejected the statement."""
    FOREIGN_KEY = "foreign_key"
    UNIQUE = "unique"
    NOT_NULL = "not_null"
    CHECK = "check"
    OTHER = "other"


class DataAccessError(Exception):
    """Base class for everything the access layer raises."""

    kind: ErrorKind = ErrorKind.QUERY

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail or message


class ConstraintViolation(DataAccessError):
    """A foreign-key, uniqueness, not-null or check constraint failed."""

    kind = ErrorKind.CONSTRAINT_VIOLATION

    def __init__(
        self,
        message: str,
        constraint_kind: ConstraintKind = ConstraintKind.OTHER,
        constraint_name: Optional[str] = None,
        table_name: Optional[str] = None,
        detail: Optional[str] = None,
    ):
        super().__init__(message, detail)
        self.constraint_kind = constraint_kind
        self.constraint_name = constraint_name
        self.table_name = table_name


class NotFound(DataAccessError):
    """A write that had to match a row matched none."""

    kind = ErrorKind.NOT_FOUND


class InsertError(DataAccessError):
    """An insert completed without the store reporting an identifier."""

    kind = ErrorKind.INSERT_FAILED


class TransportError(DataAccessError):
    """The connection or the pool failed. Fatal to the current request."""

    kind = ErrorKind.TRANSPORT


class QueryError(DataAccessError):
    """Any other driver failure (bad SQL, bad data)."""

    kind = ErrorKind.QUERY


class RecordDecodeError(DataAccessError):
    """A row could not be decoded into the requested record shape."""

    kind = ErrorKind.DECODE


_CONSTRAINT_KINDS = (
    (pg_errors.ForeignKeyViolation, ConstraintKind.FOREIGN_KEY),
    (pg_errors.UniqueViolation, ConstraintKind.UNIQUE),
    (pg_errors.NotNullViolation, ConstraintKind.NOT_NULL),
    (pg_errors.CheckViolation, ConstraintKind.CHECK),
)


def _diag(exc: psycopg2.Error, field: str) -> Optional[str]:
    diag = getattr(exc, "diag", None)
    return getattr(diag, field, None) if diag is not None else None


def _message(exc: BaseException) -> str:
    return (getattr(exc, "pgerror", None) or str(exc)).strip()


def classify(exc: psycopg2.Error) -> DataAccessError:
    """Map a psycopg2 exception onto the typed taxonomy."""
    message = _message(exc)

    if isinstance(exc, psycopg2.IntegrityError):
        constraint_kind = ConstraintKind.OTHER
        for exc_type, kind in _CONSTRAINT_KINDS:
            if isinstance(exc, exc_type):
                constraint_kind = kind
                break
        return ConstraintViolation(
            _diag(exc, "message_primary") or message,
            constraint_kind=constraint_kind,
            constraint_name=_diag(exc, "constraint_name"),
            table_name=_diag(exc, "table_name"),
            detail=_diag(exc, "message_detail") or message,
        )

    if isinstance(exc, (psycopg2.OperationalError, psycopg2.InterfaceError, pg_pool.PoolError)):
        return TransportError(message or "Database connection failed")

    return QueryError(message or exc.__class__.__name__)


@contextmanager
def translate_errors(operation: str) -> Iterator[None]:
    """
    Re-raise driver exceptions raised inside the block as typed errors.

    Args:
        operation: Short label used in the log line (e.g. 'insert').
    """
    try:
        yield
    except psycopg2.Error as e:
        error = classify(e)
        if isinstance(error, ConstraintViolation):
            logger.warning(
                f"Database {operation} rejected: {error.constraint_kind.value} violation "
                f"({error.constraint_name})"
            )
        else:
            logger.error(f"Database {operation} failed [{error.kind.value}]: {error.message}")
        raise error from e
