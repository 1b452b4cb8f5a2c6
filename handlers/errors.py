"""
handlers/errors.py
-------------------
Maps typed errors to HTTP responses. Every error body has the shape
``{"error": <message>, "details": <text>}``.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from db.errors import ConstraintKind, ConstraintViolation, DataAccessError, NotFound
from services.errors import Conflict, EntityInUse, ServiceError, ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)

_CONSTRAINT_MESSAGES = {
    ConstraintKind.FOREIGN_KEY: "Invalid reference: a related record does not exist or is still in use.",
    ConstraintKind.UNIQUE: "A record with these values already exists.",
    ConstraintKind.NOT_NULL: "A required field is missing.",
    ConstraintKind.CHECK: "The record violates a data rule.",
    ConstraintKind.OTHER: "The record violates a data constraint.",
}

_SERVICE_STATUS = {
    ValidationError: 400,
    Conflict: 409,
    EntityInUse: 409,
}


def error_response(status_code: int, message: str, details: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "details": details or message},
    )


def constraint_status(error: ConstraintViolation) -> int:
    """UNIQUE clashes are conflicts; every other violation is a bad request."""
    return 409 if error.constraint_kind is ConstraintKind.UNIQUE else 400


async def _handle_http(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def _handle_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
    )
    return error_response(400, "Invalid request body", details)


async def _handle_service(request: Request, exc: ServiceError) -> JSONResponse:
    status = next((code for cls, code in _SERVICE_STATUS.items() if isinstance(exc, cls)), 400)
    return error_response(status, exc.message, exc.detail)


async def _handle_not_found(request: Request, exc: NotFound) -> JSONResponse:
    return error_response(404, exc.message, exc.detail)


async def _handle_constraint(request: Request, exc: ConstraintViolation) -> JSONResponse:
    # Already logged by the access layer
    status = constraint_status(exc)
    return error_response(status, _CONSTRAINT_MESSAGES[exc.constraint_kind], exc.detail)


async def _handle_data_access(request: Request, exc: DataAccessError) -> JSONResponse:
    # InsertError, TransportError, QueryError, RecordDecodeError; logged where raised
    logger.debug(f"{request.method} {request.url.path} -> 500 [{exc.kind.value}]")
    return error_response(500, "Database error", exc.message)


def register_error_handlers(app: FastAPI) -> None:
    """Install the exception handlers on an application."""
    app.add_exception_handler(StarletteHTTPException, _handle_http)
    app.add_exception_handler(RequestValidationError, _handle_validation)
    app.add_exception_handler(ServiceError, _handle_service)
    app.add_exception_handler(NotFound, _handle_not_found)
    app.add_exception_handler(ConstraintViolation, _handle_constraint)
    app.add_exception_handler(DataAccessError, _handle_data_access)
