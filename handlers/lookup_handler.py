"""
handlers/lookup_handler.py
---------------------------
Read-only lookups used to fill filters and selectors: bench types,
system types, platforms and the caller's own permission level.
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from db.access import Database
from repositories.group_repo import PlatformRepository
from repositories.testbench_repo import TestBenchRepository
from security.auth import get_db, get_permission_context, require_permission
from security.permissions import PermissionContext

router = APIRouter(prefix="/api", tags=["lookups"])

_can_read = [Depends(require_permission("Read"))]


@router.get("/bench-types", dependencies=_can_read)
def list_bench_types(db: Database = Depends(get_db)):
    return {"bench_types": TestBenchRepository(db).get_bench_types()}


@router.get("/system-types", dependencies=_can_read)
def list_system_types(db: Database = Depends(get_db)):
    return {"system_types": TestBenchRepository(db).get_system_types()}


@router.get("/platforms", dependencies=_can_read)
def list_platforms(db: Database = Depends(get_db)):
    return {"platforms": PlatformRepository(db).get_all()}


@router.get("/auth/permission")
def my_permission(context: PermissionContext = Depends(get_permission_context)):
    """The caller's level and platforms. Needs an identity, not a level."""
    return asdict(context)
