"""
services/user_service.py
-------------------------
User administration: validated creation with bcrypt-hashed passwords,
group membership changes and deletion.
"""

import re
from typing import Optional

import bcrypt

from config import PASSWORD_HASH_ROUNDS, PASSWORD_MIN_LENGTH
from db.access import Database
from db.errors import ConstraintKind, ConstraintViolation, NotFound
from models.user import User
from repositories.group_repo import GroupRepository
from repositories.user_repo import UserRepository
from services.errors import Conflict, EntityInUse, ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def hash_password(password: str) -> tuple[str, str]:
    """
    Hash a password with a fresh bcrypt salt.

    Returns:
        ``(password_hash, salt)`` as text. The salt is also embedded in the hash.
    """
    salt = bcrypt.gensalt(rounds=PASSWORD_HASH_ROUNDS)
    password_hash = bcrypt.hashpw(password.encode("utf-8"), salt)
    return password_hash.decode("utf-8"), salt.decode("utf-8")


class UserService:
    """Business logic for the users administered under /api/admin/users."""

    def __init__(self, db: Database):
        self.users = UserRepository(db)
        self.groups = GroupRepository(db)

    def list_users(self) -> list[User]:
        return self.users.get_all()

    def create_user(
        self,
        user_name: str,
        email: str,
        password: str,
        company_username: Optional[str] = None,
        user_group_id: Optional[int] = None,
    ) -> User:
        """
        Validate and store a new user.

        Raises:
            ValidationError: Missing name, malformed email or short password.
            Conflict: If the email is already registered.
            NotFound: If the requested group does not exist.
        """
        user_name = (user_name or "").strip()
        email = (email or "").strip()
        if not user_name:
            raise ValidationError("User name is required.")
        if not _EMAIL_RE.match(email):
            raise ValidationError("Invalid email format.")
        if len(password or "") < PASSWORD_MIN_LENGTH:
            raise ValidationError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters long."
            )
        if self.users.get_by_email(email) is not None:
            raise Conflict("A user with this email already exists.")
        if user_group_id is not None and not self.groups.exists(user_group_id):
            raise NotFound("Selected group not found.")

        password_hash, salt = hash_password(password)
        user = User(
            user_name=user_name,
            email=email,
            company_username=company_username or None,
            user_group_id=user_group_id,
        )
        try:
            stored = self.users.add(user, password_hash, salt)
        except ConstraintViolation as e:
            # Lost a race against a concurrent signup with the same email
            if e.constraint_kind is ConstraintKind.UNIQUE:
                raise Conflict("A user with this email already exists.", detail=e.detail) from e
            raise
        return stored

    def change_group(self, user_id: int, user_group_id: Optional[int]) -> User:
        """
        Move a user into a group, or out of every group with None.

        Raises:
            NotFound: If the user or the group does not exist.
        """
        if user_group_id is not None and not self.groups.exists(user_group_id):
            raise NotFound("Selected group not found.")
        if not self.users.update_group(user_id, user_group_id):
            raise NotFound("User not found.")
        logger.info(f"User #{user_id} moved to group {user_group_id}")
        return self.users.get_by_id(user_id)

    def delete_user(self, user_id: int) -> None:
        try:
            deleted = self.users.delete(user_id)
        except ConstraintViolation as e:
            if e.constraint_kind is not ConstraintKind.FOREIGN_KEY:
                raise
            raise EntityInUse(
                "Failed to delete user: it is still referenced by other records.",
                detail=e.detail,
            ) from e
        if not deleted:
            raise NotFound("User not found.")
