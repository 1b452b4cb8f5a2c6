"""
handlers/license_handler.py
----------------------------
Current assignment of a license to a PC or a VM.
"""

from fastapi import APIRouter, Depends

from db.access import Database
from handlers.schemas import LicenseAssignmentBody
from security.auth import get_db, require_permission
from services.license_service import LicenseService

router = APIRouter(prefix="/api/licenses", tags=["license assignments"])


def _service(db: Database = Depends(get_db)) -> LicenseService:
    return LicenseService(db)


@router.get("/{license_id}/assignment", dependencies=[Depends(require_permission("Read"))])
def get_assignment(license_id: int, service: LicenseService = Depends(_service)):
    """The assignment, or ``{"assignment": null}`` when the license is free."""
    return {"assignment": service.current_assignment(license_id)}


@router.post("/{license_id}/assignment", status_code=201,
             dependencies=[Depends(require_permission("Edit"))])
def assign_license(
    license_id: int, body: LicenseAssignmentBody, service: LicenseService = Depends(_service)
):
    assignment = service.assign(license_id, body.pc_id, body.vm_id, body.assigned_on)
    return {"success": True, "message": "License assigned successfully", "assignment": assignment}


@router.delete("/{license_id}/assignment", dependencies=[Depends(require_permission("Edit"))])
def unassign_license(license_id: int, service: LicenseService = Depends(_service)):
    service.unassign(license_id)
    return {"success": True, "message": "License unassigned successfully"}
