"""
models/user.py
--------------
Domain models for users, user groups, permission levels and platforms.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class User:
    """
    An application user. Never serialized with its password hash.

    Attributes:
        user_id: Database primary key (None for new records).
        user_name: Full name.
        company_username: Company account name, if any.
        email: Unique login email.
        user_group_id: Group membership (at most one group).
        user_group_name: Joined group name (read-only).
    """
    user_name: str
    email: str
    company_username: Optional[str] = None
    user_group_id: Optional[int] = None
    user_group_name: Optional[str] = None
    user_id: Optional[int] = None


@dataclass
class Permission:
    """A permission level ('Default', 'Read', 'Edit', 'Admin')."""
    permission_id: int
    permission_name: str


@dataclass
class Platform:
    """A vehicle platform a group may be granted access to."""
    platform_id: int
    platform_name: str


@dataclass
class UserGroup:
    """A user group with exactly one permission level and a set of platforms."""
    user_group_name: str
    permission_id: Optional[int] = None
    permission_name: Optional[str] = None
    accessible_platform_ids: list[int] = field(default_factory=list)
    user_group_id: Optional[int] = None
