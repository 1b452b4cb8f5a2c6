"""
security/permissions.py
------------------------
Resolves what a user may do: the permission level of their group and the
platforms the group can access. Levels are ordered Default < Read < Edit < Admin.
"""

from dataclasses import dataclass, field

from db.access import Executor
from db.init_db import PERMISSION_LEVELS
from repositories.group_repo import PermissionRepository, PlatformRepository
from repositories.user_repo import UserRepository
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_LEVEL = PERMISSION_LEVELS[0]


def level_rank(level: str) -> int:
    """Position of a level in the hierarchy. Unknown names rank as 'Default'."""
    try:
        return PERMISSION_LEVELS.index(level)
    except ValueError:
        return 0


@dataclass
class PermissionContext:
    """What the current user is allowed to do."""
    user_id: int
    permission_name: str = DEFAULT_LEVEL
    accessible_platform_ids: list[int] = field(default_factory=list)

    def allows(self, required: str) -> bool:
        return level_rank(self.permission_name) >= level_rank(required)


def get_user_permissions(db: Executor, user_id: int) -> PermissionContext:
    """
    Look up the permission level and platform access of a user.

    Users without a group (or unknown user ids) get the 'Default' level
    with no platforms.
    """
    membership = UserRepository(db).get_group_id(user_id)
    if membership is None:
        logger.warning(f"Permission lookup for unknown user_id={user_id}")
        return PermissionContext(user_id=user_id)

    group_id = membership["user_group_id"]
    if group_id is None:
        return PermissionContext(user_id=user_id)

    permission = PermissionRepository(db).get_for_group(group_id)
    platform_ids = PlatformRepository(db).get_ids_for_group(group_id)
    return PermissionContext(
        user_id=user_id,
        permission_name=permission.permission_name if permission else DEFAULT_LEVEL,
        accessible_platform_ids=platform_ids,
    )
