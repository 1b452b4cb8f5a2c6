"""
repositories/license_repo.py
-----------------------------
Data access layer for licenses and license assignments.
All SQL queries related to the `licenses` and `license_assignments`
tables live here.
"""

from datetime import date
from typing import Optional

from db.access import Executor
from models.software import AssignedLicense, License, LicenseAssignment
from utils.logger import get_logger

logger = get_logger(__name__)

_SELECT_LICENSE = """
    SELECT l.*, s.software_name, s.major_version,
           la.pc_id AS assigned_pc_id, la.vm_id AS assigned_vm_id, la.assigned_on
    FROM licenses l
    JOIN software s ON l.software_id = s.software_id
    LEFT JOIN license_assignments la ON l.license_id = la.license_id
"""


class LicenseRepository:
    """Repository for CRUD operations on the licenses table."""

    def __init__(self, db: Executor):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def add(self, lic: License) -> License:
        """
        Insert a new license.

        Returns:
            The stored row joined with its software, re-read by its new id.
        """
        sql = """
            INSERT INTO licenses
                (software_id, license_name, license_description, license_number,
                 dongle_number, activation_key, system_id, license_user,
                 maintenance_end, owner, license_type, remarks)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING license_id;
        """
        license_id = self.db.insert(sql, self._values(lic))
        logger.info(f"Added license '{lic.license_name}' #{license_id}")
        return self.get_by_id(license_id)

    # ── READ ──────────────────────────────────────────────

    def get_all(self) -> list[License]:
        return self.db.query(
            _SELECT_LICENSE + " ORDER BY s.software_name, l.license_name, l.license_id;",
            record=License,
        )

    def get_by_id(self, license_id: int) -> Optional[License]:
        return self.db.query_one(
            _SELECT_LICENSE + " WHERE l.license_id = %s;", (license_id,), record=License
        )

    def get_assigned_to_pc(self, pc_id: int) -> list[AssignedLicense]:
        """Licenses currently assigned to a PC, joined with their software."""
        sql = """
            SELECT l.license_id, l.license_name, l.license_type,
                   s.software_name, s.major_version, la.assigned_on
            FROM license_assignments la
            JOIN licenses l ON la.license_id = l.license_id
            JOIN software s ON l.software_id = s.software_id
            WHERE la.pc_id = %s
            ORDER BY s.software_name, l.license_name;
        """
        return self.db.query(sql, (pc_id,), record=AssignedLicense)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, lic: License) -> bool:
        sql = """
            UPDATE licenses
            SET software_id = %s, license_name = %s, license_description = %s,
                license_number = %s, dongle_number = %s, activation_key = %s,
                system_id = %s, license_user = %s, maintenance_end = %s,
                owner = %s, license_type = %s, remarks = %s
            WHERE license_id = %s;
        """
        return self.db.update(sql, self._values(lic) + (lic.license_id,)) > 0

    # ── DELETE ────────────────────────────────────────────

    def delete(self, license_id: int) -> bool:
        deleted = self.db.update("DELETE FROM licenses WHERE license_id = %s;", (license_id,)) > 0
        if deleted:
            logger.info(f"Deleted license #{license_id}")
        return deleted

    @staticmethod
    def _values(lic: License) -> tuple:
        return (
            lic.software_id, lic.license_name, lic.license_description, lic.license_number,
            lic.dongle_number, lic.activation_key, lic.system_id, lic.license_user,
            lic.maintenance_end, lic.owner, lic.license_type, lic.remarks,
        )


class LicenseAssignmentRepository:
    """
    Repository for the license_assignments table.
    Usable with a ``Transaction`` so replace-assignment runs atomically.
    """

    def __init__(self, db: Executor):
        self.db = db

    def get_for_license(self, license_id: int) -> Optional[LicenseAssignment]:
        return self.db.query_one(
            "SELECT * FROM license_assignments WHERE license_id = %s LIMIT 1;",
            (license_id,),
            record=LicenseAssignment,
        )

    def add(
        self, license_id: int, pc_id: Optional[int], vm_id: Optional[int], assigned_on: date
    ) -> int:
        """Insert an assignment and return its id."""
        sql = """
            INSERT INTO license_assignments (license_id, pc_id, vm_id, assigned_on)
            VALUES (%s, %s, %s, %s)
            RETURNING assignment_id;
        """
        return self.db.insert(sql, (license_id, pc_id, vm_id, assigned_on))

    def delete_for_license(self, license_id: int) -> int:
        """Remove any assignment of a license. Returns the number of rows removed."""
        return self.db.update(
            "DELETE FROM license_assignments WHERE license_id = %s;", (license_id,)
        )
