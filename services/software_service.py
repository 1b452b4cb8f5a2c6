"""
services/software_service.py
-----------------------------
Business logic for software installed on PCs and VMs.
"""

from datetime import date
from typing import Optional

from db.access import Database
from db.errors import NotFound
from models.software import SoftwareInstallation
from repositories.software_repo import SoftwareInstallationRepository


class SoftwareAssignmentService:
    """
    Installs and uninstalls software on one kind of host.

    Args:
        db: Access layer.
        host: 'pc' or 'vm'.
    """

    def __init__(self, db: Database, host: str):
        self.host = host
        self.installations = SoftwareInstallationRepository(db, host)

    def installed_on(self, host_id: int) -> list[SoftwareInstallation]:
        return self.installations.get_for_host(host_id)

    def assign(
        self, host_id: int, software_id: int, install_date: Optional[date] = None
    ) -> list[SoftwareInstallation]:
        """Record an installation and return the host's updated software list."""
        self.installations.add(host_id, software_id, install_date)
        return self.installations.get_for_host(host_id)

    def unassign(self, host_id: int, software_id: int) -> None:
        """
        Raises:
            NotFound: If the software is not installed on the host.
        """
        if not self.installations.delete(host_id, software_id):
            raise NotFound(f"Software is not installed on this {self.host.upper()}")
