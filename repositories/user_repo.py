"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
Password hashes are written here but never read back into a User.
"""

from typing import Optional

from db.access import Database
from models.user import User
from utils.logger import get_logger

logger = get_logger(__name__)

_SELECT_USER = """
    SELECT u.user_id, u.user_name, u.company_username, u.email,
           u.user_group_id, ug.user_group_name
    FROM users u
    LEFT JOIN user_groups ug ON u.user_group_id = ug.user_group_id
"""


class UserRepository:
    """Repository for CRUD operations on the users table."""

    def __init__(self, db: Database):
        self.db = db

    def add(self, user: User, password_hash: str, salt: str) -> User:
        """
        Insert a new user with an already hashed password.

        Returns:
            The stored user joined with its group name.
        """
        sql = """
            INSERT INTO users (user_name, company_username, email, password_hash, salt, user_group_id)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING user_id;
        """
        user_id = self.db.insert(sql, (
            user.user_name, user.company_username, user.email,
            password_hash, salt, user.user_group_id,
        ))
        logger.info(f"Added user #{user_id} ({user.email})")
        return self.get_by_id(user_id)

    def get_all(self) -> list[User]:
        return self.db.query(_SELECT_USER + " ORDER BY u.user_name ASC;", record=User)

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query_one(_SELECT_USER + " WHERE u.user_id = %s;", (user_id,), record=User)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query_one(_SELECT_USER + " WHERE u.email = %s;", (email,), record=User)

    def get_group_id(self, user_id: int) -> Optional[dict]:
        """
        Fetch just the group membership of a user.

        Returns:
            ``{'user_group_id': int | None}`` or None if the user does not exist.
        """
        return self.db.query_one(
            "SELECT user_group_id FROM users WHERE user_id = %s;", (user_id,)
        )

    def update_group(self, user_id: int, user_group_id: Optional[int]) -> bool:
        """Move a user to another group (or out of any group with None)."""
        return self.db.update(
            "UPDATE users SET user_group_id = %s WHERE user_id = %s;", (user_group_id, user_id)
        ) > 0

    def delete(self, user_id: int) -> bool:
        deleted = self.db.update("DELETE FROM users WHERE user_id = %s;", (user_id,)) > 0
        if deleted:
            logger.info(f"Deleted user #{user_id}")
        return deleted
