"""
services/group_service.py
--------------------------
User groups: one permission level each, plus the set of platforms the
group may see. Platform access is replaced as a whole inside a transaction.
"""

from typing import Iterable

from db.access import Database, Transaction
from db.errors import NotFound
from models.user import Permission, Platform, UserGroup
from repositories.group_repo import GroupRepository, PermissionRepository, PlatformRepository
from services.errors import ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)


class GroupService:
    """Business logic for /api/admin/groups, permissions and platforms."""

    def __init__(self, db: Database):
        self.db = db
        self.groups = GroupRepository(db)
        self.permissions = PermissionRepository(db)
        self.platforms = PlatformRepository(db)

    def list_groups(self) -> list[UserGroup]:
        return self.groups.get_all()

    def get_group(self, group_id: int) -> UserGroup:
        group = self.groups.get_by_id(group_id)
        if group is None:
            raise NotFound("Group not found.")
        return group

    def list_permissions(self) -> list[Permission]:
        return self.permissions.get_all()

    def list_platforms(self) -> list[Platform]:
        return self.platforms.get_all()

    def create_group(self, name: str, permission_id: int) -> UserGroup:
        """
        Raises:
            ValidationError: Empty name or unknown permission level.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Group name is required.")
        self._require_permission(permission_id)
        return self.groups.add(name, permission_id)

    def update_permission(self, group_id: int, permission_id: int) -> UserGroup:
        self._require_permission(permission_id)
        if not self.groups.update_permission(group_id, permission_id):
            raise NotFound("Group not found.")
        logger.info(f"Group #{group_id} now has permission #{permission_id}")
        return self.get_group(group_id)

    def replace_platforms(self, group_id: int, platform_ids: Iterable[int]) -> UserGroup:
        """
        Replace the platform access list of a group atomically.

        Duplicate ids are ignored. An unknown platform id aborts the whole
        change with a foreign-key ConstraintViolation.

        Raises:
            NotFound: If the group does not exist.
        """
        ids = list(dict.fromkeys(platform_ids))

        def replace(tx: Transaction) -> None:
            repo = GroupRepository(tx)
            if not repo.exists(group_id):
                raise NotFound("Group not found.")
            repo.clear_platforms(group_id)
            for platform_id in ids:
                repo.add_platform(group_id, platform_id)

        self.db.transaction(replace)
        logger.info(f"Group #{group_id} platform access set to {ids}")
        return self.get_group(group_id)

    def _require_permission(self, permission_id: int) -> Permission:
        permission = self.permissions.get_by_id(permission_id)
        if permission is None:
            raise ValidationError("Invalid permission level.")
        return permission
