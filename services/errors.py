"""
services/errors.py
------------------
Business-rule failures raised by the service layer.
Data-access failures (NotFound, ConstraintViolation, ...) come from
``db.errors`` and pass through services unchanged unless a service
gives them a more specific meaning.
"""


class ServiceError(Exception):
    """Base class for business-rule failures."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.message = message
        self.detail = detail or message


class ValidationError(ServiceError):
    """The request is well-formed but breaks a business rule."""


class Conflict(ServiceError):
    """The request clashes with existing data (e.g. an email already in use)."""


class EntityInUse(ServiceError):
    """A delete was refused because other records still reference the row."""
