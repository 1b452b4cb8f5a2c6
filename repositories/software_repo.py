"""
repositories/software_repo.py
------------------------------
Data access layer for software products and their installations on
PCs (`pc_software`) and VMs (`vm_software`).
"""

from datetime import date
from typing import Optional

from db.access import Database
from models.software import Software, SoftwareInstallation
from utils.logger import get_logger

logger = get_logger(__name__)


class SoftwareRepository:
    """Repository for CRUD operations on the software table."""

    def __init__(self, db: Database):
        self.db = db

    def add(self, software: Software) -> Software:
        software_id = self.db.insert(
            "INSERT INTO software (software_name, major_version, vendor) "
            "VALUES (%s, %s, %s) RETURNING software_id;",
            (software.software_name, software.major_version, software.vendor),
        )
        logger.info(f"Added software '{software.software_name}' #{software_id}")
        return self.get_by_id(software_id)

    def get_all(self) -> list[Software]:
        return self.db.query(
            "SELECT * FROM software ORDER BY software_name, software_id;", record=Software
        )

    def get_by_id(self, software_id: int) -> Optional[Software]:
        return self.db.query_one(
            "SELECT * FROM software WHERE software_id = %s;", (software_id,), record=Software
        )

    def update(self, software: Software) -> bool:
        return self.db.update(
            "UPDATE software SET software_name = %s, major_version = %s, vendor = %s "
            "WHERE software_id = %s;",
            (software.software_name, software.major_version, software.vendor, software.software_id),
        ) > 0

    def delete(self, software_id: int) -> bool:
        deleted = self.db.update("DELETE FROM software WHERE software_id = %s;", (software_id,)) > 0
        if deleted:
            logger.info(f"Deleted software #{software_id}")
        return deleted


# Link table and key column per host kind. Internal constants, never user input.
_HOST_TABLES = {
    "pc": ("pc_software", "pc_id"),
    "vm": ("vm_software", "vm_id"),
}


class SoftwareInstallationRepository:
    """
    Repository for the software link tables of one host kind.

    Args:
        db: Access layer.
        host: 'pc' for pc_software or 'vm' for vm_software.
    """

    def __init__(self, db: Database, host: str):
        if host not in _HOST_TABLES:
            raise ValueError(f"Unknown host kind: {host!r}")
        self.db = db
        self.host = host
        self.table, self.key = _HOST_TABLES[host]

    def get_for_host(self, host_id: int) -> list[SoftwareInstallation]:
        """Software installed on one PC/VM, joined with the software details."""
        sql = f"""
            SELECT l.{self.key} AS host_id, l.software_id, l.install_date,
                   s.software_name, s.major_version, s.vendor
            FROM {self.table} l
            JOIN software s ON l.software_id = s.software_id
            WHERE l.{self.key} = %s
            ORDER BY s.software_name, l.software_id;
        """
        return self.db.query(sql, (host_id,), record=SoftwareInstallation)

    def add(self, host_id: int, software_id: int, install_date: Optional[date]) -> None:
        """Record an installation. A duplicate raises ConstraintViolation (UNIQUE)."""
        self.db.update(
            f"INSERT INTO {self.table} ({self.key}, software_id, install_date) VALUES (%s, %s, %s);",
            (host_id, software_id, install_date),
        )
        logger.info(f"Installed software #{software_id} on {self.host} #{host_id}")

    def delete(self, host_id: int, software_id: int) -> bool:
        deleted = self.db.update(
            f"DELETE FROM {self.table} WHERE {self.key} = %s AND software_id = %s;",
            (host_id, software_id),
        ) > 0
        if deleted:
            logger.info(f"Removed software #{software_id} from {self.host} #{host_id}")
        return deleted
