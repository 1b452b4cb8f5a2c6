"""
repositories/group_repo.py
---------------------------
Data access layer for access control: `user_groups`, `permissions`,
`platforms` and `group_platform_access`.
"""

from typing import Optional

from db.access import Executor
from models.user import Permission, Platform, UserGroup
from utils.logger import get_logger

logger = get_logger(__name__)

_SELECT_GROUP = """
    SELECT ug.user_group_id, ug.user_group_name, ug.permission_id, p.permission_name,
           COALESCE(
               ARRAY_AGG(gpa.platform_id ORDER BY gpa.platform_id)
                   FILTER (WHERE gpa.platform_id IS NOT NULL),
               '{}'
           ) AS accessible_platform_ids
    FROM user_groups ug
    LEFT JOIN permissions p ON ug.permission_id = p.permission_id
    LEFT JOIN group_platform_access gpa ON ug.user_group_id = gpa.user_group_id
"""
_GROUP_BY = " GROUP BY ug.user_group_id, ug.user_group_name, ug.permission_id, p.permission_name"


class GroupRepository:
    """
    Repository for user groups and their platform access.
    Usable with a ``Transaction`` so platform replacement runs atomically.
    """

    def __init__(self, db: Executor):
        self.db = db

    def add(self, name: str, permission_id: int) -> UserGroup:
        group_id = self.db.insert(
            "INSERT INTO user_groups (user_group_name, permission_id) "
            "VALUES (%s, %s) RETURNING user_group_id;",
            (name, permission_id),
        )
        logger.info(f"Added user group '{name}' #{group_id}")
        return self.get_by_id(group_id)

    def get_all(self) -> list[UserGroup]:
        return self.db.query(
            _SELECT_GROUP + _GROUP_BY + " ORDER BY ug.user_group_name ASC;", record=UserGroup
        )

    def get_by_id(self, group_id: int) -> Optional[UserGroup]:
        return self.db.query_one(
            _SELECT_GROUP + " WHERE ug.user_group_id = %s" + _GROUP_BY + ";",
            (group_id,),
            record=UserGroup,
        )

    def exists(self, group_id: int) -> bool:
        return self.db.query_one(
            "SELECT user_group_id FROM user_groups WHERE user_group_id = %s;", (group_id,)
        ) is not None

    def update_permission(self, group_id: int, permission_id: int) -> bool:
        return self.db.update(
            "UPDATE user_groups SET permission_id = %s WHERE user_group_id = %s;",
            (permission_id, group_id),
        ) > 0

    def clear_platforms(self, group_id: int) -> int:
        return self.db.update(
            "DELETE FROM group_platform_access WHERE user_group_id = %s;", (group_id,)
        )

    def add_platform(self, group_id: int, platform_id: int) -> None:
        self.db.update(
            "INSERT INTO group_platform_access (user_group_id, platform_id) VALUES (%s, %s);",
            (group_id, platform_id),
        )


class PermissionRepository:
    """Read access to the fixed permission levels."""

    def __init__(self, db: Executor):
        self.db = db

    def get_all(self) -> list[Permission]:
        return self.db.query(
            "SELECT permission_id, permission_name FROM permissions ORDER BY permission_id;",
            record=Permission,
        )

    def get_by_id(self, permission_id: int) -> Optional[Permission]:
        return self.db.query_one(
            "SELECT permission_id, permission_name FROM permissions WHERE permission_id = %s;",
            (permission_id,),
            record=Permission,
        )

    def get_for_group(self, group_id: int) -> Optional[Permission]:
        """The permission level attached to a group, or None."""
        sql = """
            SELECT p.permission_id, p.permission_name
            FROM user_groups ug
            JOIN permissions p ON ug.permission_id = p.permission_id
            WHERE ug.user_group_id = %s;
        """
        return self.db.query_one(sql, (group_id,), record=Permission)


class PlatformRepository:
    """Read access to platforms."""

    def __init__(self, db: Executor):
        self.db = db

    def get_all(self) -> list[Platform]:
        return self.db.query(
            "SELECT platform_id, platform_name FROM platforms ORDER BY platform_name ASC;",
            record=Platform,
        )

    def get_ids_for_group(self, group_id: int) -> list[int]:
        rows = self.db.query(
            "SELECT platform_id FROM group_platform_access WHERE user_group_id = %s "
            "ORDER BY platform_id;",
            (group_id,),
        )
        return [r["platform_id"] for r in rows]
