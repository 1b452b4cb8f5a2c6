"""
handlers/software_handler.py
-----------------------------
Software installed on PCs and VMs, and the licenses assigned to a PC.
Delegates all logic to SoftwareAssignmentService and LicenseService.
"""

from fastapi import APIRouter, Depends

from db.access import Database
from handlers.schemas import SoftwareInstallBody
from security.auth import get_db, require_permission
from services.license_service import LicenseService
from services.software_service import SoftwareAssignmentService

router = APIRouter(prefix="/api", tags=["software installations"])

_can_read = [Depends(require_permission("Read"))]
_can_edit = [Depends(require_permission("Edit"))]


def _pc_software(db: Database = Depends(get_db)) -> SoftwareAssignmentService:
    return SoftwareAssignmentService(db, "pc")


def _vm_software(db: Database = Depends(get_db)) -> SoftwareAssignmentService:
    return SoftwareAssignmentService(db, "vm")


# ── PCs ───────────────────────────────────────────────────

@router.get("/pcs/{pc_id}/software", dependencies=_can_read)
def list_pc_software(pc_id: int, service: SoftwareAssignmentService = Depends(_pc_software)):
    return {"software": service.installed_on(pc_id)}


@router.post("/pcs/{pc_id}/software", status_code=201, dependencies=_can_edit)
def install_pc_software(
    pc_id: int,
    body: SoftwareInstallBody,
    service: SoftwareAssignmentService = Depends(_pc_software),
):
    installed = service.assign(pc_id, body.software_id, body.install_date)
    return {"success": True, "message": "Software assigned to PC", "software": installed}


@router.delete("/pcs/{pc_id}/software/{software_id}", dependencies=_can_edit)
def uninstall_pc_software(
    pc_id: int, software_id: int, service: SoftwareAssignmentService = Depends(_pc_software)
):
    service.unassign(pc_id, software_id)
    return {"success": True, "message": "Software removed from PC"}


@router.get("/pcs/{pc_id}/licenses", dependencies=_can_read)
def list_pc_licenses(pc_id: int, db: Database = Depends(get_db)):
    return {"licenses": LicenseService(db).licenses_for_pc(pc_id)}


# ── VMs ───────────────────────────────────────────────────

@router.get("/vms/{vm_id}/software", dependencies=_can_read)
def list_vm_software(vm_id: int, service: SoftwareAssignmentService = Depends(_vm_software)):
    return {"software": service.installed_on(vm_id)}


@router.post("/vms/{vm_id}/software", status_code=201, dependencies=_can_edit)
def install_vm_software(
    vm_id: int,
    body: SoftwareInstallBody,
    service: SoftwareAssignmentService = Depends(_vm_software),
):
    installed = service.assign(vm_id, body.software_id, body.install_date)
    return {"success": True, "message": "Software assigned to VM", "software": installed}


@router.delete("/vms/{vm_id}/software/{software_id}", dependencies=_can_edit)
def uninstall_vm_software(
    vm_id: int, software_id: int, service: SoftwareAssignmentService = Depends(_vm_software)
):
    service.unassign(vm_id, software_id)
    return {"success": True, "message": "Software removed from VM"}
