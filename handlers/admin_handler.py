"""
handlers/admin_handler.py
--------------------------
User, group and permission administration. Every route requires Admin.
"""

from fastapi import APIRouter, Depends

from db.access import Database
from handlers.schemas import (
    CreateGroupBody,
    CreateUserBody,
    GroupPermissionBody,
    GroupPlatformsBody,
    UserGroupBody,
)
from security.auth import get_db, require_permission
from services.group_service import GroupService
from services.user_service import UserService

router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
    dependencies=[Depends(require_permission("Admin"))],
)


def _users(db: Database = Depends(get_db)) -> UserService:
    return UserService(db)


def _groups(db: Database = Depends(get_db)) -> GroupService:
    return GroupService(db)


# ── Users ─────────────────────────────────────────────────

@router.get("/users")
def list_users(service: UserService = Depends(_users)):
    return {"users": service.list_users()}


@router.post("/users", status_code=201)
def create_user(body: CreateUserBody, service: UserService = Depends(_users)):
    user = service.create_user(
        body.user_name, body.email, body.password, body.company_username, body.user_group_id
    )
    return {"success": True, "message": "User created successfully", "user": user}


@router.put("/users/{user_id}/group")
def change_user_group(user_id: int, body: UserGroupBody, service: UserService = Depends(_users)):
    user = service.change_group(user_id, body.user_group_id)
    return {"success": True, "message": "User group updated successfully", "user": user}


@router.delete("/users/{user_id}")
def delete_user(user_id: int, service: UserService = Depends(_users)):
    service.delete_user(user_id)
    return {"success": True, "message": "User deleted successfully"}


# ── Groups ────────────────────────────────────────────────

@router.get("/groups")
def list_groups(service: GroupService = Depends(_groups)):
    return {"groups": service.list_groups()}


@router.post("/groups", status_code=201)
def create_group(body: CreateGroupBody, service: GroupService = Depends(_groups)):
    group = service.create_group(body.user_group_name, body.permission_id)
    return {"success": True, "message": "Group created successfully", "group": group}


@router.put("/groups/{group_id}")
def update_group_permission(
    group_id: int, body: GroupPermissionBody, service: GroupService = Depends(_groups)
):
    group = service.update_permission(group_id, body.permission_id)
    return {"success": True, "message": "Group permission updated successfully", "group": group}


@router.put("/groups/{group_id}/platforms")
def replace_group_platforms(
    group_id: int, body: GroupPlatformsBody, service: GroupService = Depends(_groups)
):
    group = service.replace_platforms(group_id, body.platform_ids)
    return {"success": True, "message": "Group platform access updated successfully", "group": group}


@router.get("/permissions")
def list_permissions(service: GroupService = Depends(_groups)):
    return {"permissions": service.list_permissions()}
