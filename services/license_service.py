"""
services/license_service.py
----------------------------
Business logic for assigning licenses to PCs and VMs.

A license is assigned to exactly one PC or exactly one VM, never both and
never neither. The rule is checked here, before any SQL runs.
"""

from datetime import date
from typing import Optional

from db.access import Database, Transaction
from models.software import AssignedLicense, LicenseAssignment
from repositories.license_repo import LicenseAssignmentRepository, LicenseRepository
from services.errors import ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)


class LicenseService:
    """Manages the current assignment of each license."""

    def __init__(self, db: Database):
        self.db = db
        self.licenses = LicenseRepository(db)
        self.assignments = LicenseAssignmentRepository(db)

    def current_assignment(self, license_id: int) -> Optional[LicenseAssignment]:
        """The assignment of a license, or None if it is unassigned."""
        return self.assignments.get_for_license(license_id)

    def assign(
        self,
        license_id: int,
        pc_id: Optional[int] = None,
        vm_id: Optional[int] = None,
        assigned_on: Optional[date] = None,
    ) -> LicenseAssignment:
        """
        Create or replace the assignment of a license.

        The previous assignment is deleted and the new one inserted in a
        single transaction, so a failed insert leaves the old one in place.

        Args:
            license_id: License to assign.
            pc_id: Target PC (exclusive with vm_id).
            vm_id: Target VM (exclusive with pc_id).
            assigned_on: Assignment date (default: today).

        Returns:
            The stored assignment.

        Raises:
            ValidationError: If not exactly one of pc_id / vm_id is given.
        """
        candidate = LicenseAssignment(license_id=license_id, pc_id=pc_id, vm_id=vm_id)
        if not candidate.has_single_target():
            raise ValidationError("Assignment must have either a pc_id OR a vm_id, but not both.")

        when = assigned_on or date.today()

        def replace(tx: Transaction) -> int:
            repo = LicenseAssignmentRepository(tx)
            repo.delete_for_license(license_id)
            return repo.add(license_id, pc_id, vm_id, when)

        assignment_id = self.db.transaction(replace)
        target = f"PC #{pc_id}" if pc_id is not None else f"VM #{vm_id}"
        logger.info(f"Assigned license #{license_id} to {target} (assignment #{assignment_id})")
        return self.assignments.get_for_license(license_id)

    def unassign(self, license_id: int) -> int:
        """
        Remove the assignment of a license. Having none is not an error.

        Returns:
            Number of assignments removed (0 or 1).
        """
        removed = self.assignments.delete_for_license(license_id)
        if removed:
            logger.info(f"Removed assignment of license #{license_id}")
        return removed

    def licenses_for_pc(self, pc_id: int) -> list[AssignedLicense]:
        return self.licenses.get_assigned_to_pc(pc_id)
