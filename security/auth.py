"""
security/auth.py
-----------------
Authentication and authorization dependencies for the HTTP API.

Identity is established upstream; each request carries the numeric user id
in the ``AUTH_USER_HEADER`` header. Routes declare the level they need with
``require_permission``.
"""

from typing import Callable

from fastapi import Depends, HTTPException, Request

from config import AUTH_USER_HEADER
from db.access import Database
from security.permissions import PermissionContext, get_user_permissions
from utils.logger import get_logger

logger = get_logger(__name__)


def get_db(request: Request) -> Database:
    """The access layer attached to the running application."""
    return request.app.state.db


def get_current_user_id(request: Request) -> int:
    """
    Read the caller's user id from the auth header.

    Raises:
        HTTPException(401): Header missing or not a positive integer.
    """
    raw = request.headers.get(AUTH_USER_HEADER)
    if not raw:
        raise HTTPException(status_code=401, detail="Unauthorized: No active session")
    try:
        user_id = int(raw)
    except ValueError:
        user_id = 0
    if user_id <= 0:
        logger.warning(f"Rejected malformed {AUTH_USER_HEADER} header: {raw!r}")
        raise HTTPException(status_code=401, detail="Unauthorized: Invalid session")
    return user_id


def get_permission_context(
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> PermissionContext:
    return get_user_permissions(db, user_id)


def require_permission(level: str) -> Callable[..., PermissionContext]:
    """
    Dependency factory restricting a route to users at or above ``level``.

    Usage:
        @router.get("", dependencies=[Depends(require_permission("Read"))])
        def list_items(): ...

    Behavior:
        - No identity: 401.
        - Lower level than required: 403, attempt logged.
    """
    def dependency(context: PermissionContext = Depends(get_permission_context)) -> PermissionContext:
        if not context.allows(level):
            logger.warning(
                f"🚫 Forbidden: user_id={context.user_id} has '{context.permission_name}', "
                f"route requires '{level}'"
            )
            raise HTTPException(status_code=403, detail=f"Forbidden: Requires {level} privileges")
        return context

    return dependency
