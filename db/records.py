"""
db/records.py
-------------
Decodes field-keyed rows into dataclass record shapes.
"""

from dataclasses import MISSING, fields, is_dataclass
from typing import Any, Iterable, Mapping, Type, TypeVar

from db.errors import RecordDecodeError
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def decode_row(row: Mapping[str, Any], record_type: Type[T]) -> T:
    """
    Build a ``record_type`` instance from a database row.

    Columns the record does not declare are ignored. A declared field that is
    absent from the row falls back to its default; SQL NULL arrives as None.

    Raises:
        RecordDecodeError: If a field without a default is missing from the row.
    """
    if not is_dataclass(record_type):
        raise TypeError(f"{record_type!r} is not a dataclass")

    values = {}
    missing = []
    for f in fields(record_type):
        if not f.init:
            continue
        if f.name in row:
            values[f.name] = row[f.name]
        elif f.default is MISSING and f.default_factory is MISSING:
            missing.append(f.name)

    if missing:
        message = (
            f"Row cannot be decoded as {record_type.__name__}: "
            f"missing field(s) {', '.join(missing)}"
        )
        logger.error(message)
        raise RecordDecodeError(message)
    return record_type(**values)


def decode_rows(rows: Iterable[Mapping[str, Any]], record_type: Type[T]) -> list[T]:
    """Decode every row of a result set."""
    return [decode_row(r, record_type) for r in rows]
