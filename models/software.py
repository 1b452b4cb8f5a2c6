"""
models/software.py
------------------
Domain models for software packages, their installations and licenses.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class Software:
    """A software product (name, major version, vendor)."""
    software_name: str
    major_version: Optional[str] = None
    vendor: Optional[str] = None
    software_id: Optional[int] = None


@dataclass
class SoftwareInstallation:
    """
    Software installed on a PC or a VM.

    ``host_id`` is the pc_id or vm_id depending on which table the row came from.
    """
    host_id: int
    software_id: int
    install_date: Optional[date] = None
    software_name: Optional[str] = None
    major_version: Optional[str] = None
    vendor: Optional[str] = None


@dataclass
class License:
    """
    A software license.

    Attributes:
        license_id: Database primary key (None for new records).
        software_id: Licensed software (FK software).
        license_name: Display name.
        license_number: Vendor license number.
        dongle_number: Hardware dongle serial, if dongle based.
        activation_key: Activation key, if key based.
        maintenance_end: End of the maintenance contract.
        license_type: e.g. 'floating', 'node-locked'.
    """
    software_id: int
    license_name: Optional[str] = None
    license_description: Optional[str] = None
    license_number: Optional[str] = None
    dongle_number: Optional[str] = None
    activation_key: Optional[str] = None
    system_id: Optional[str] = None
    license_user: Optional[str] = None
    maintenance_end: Optional[date] = None
    owner: Optional[str] = None
    license_type: Optional[str] = None
    remarks: Optional[str] = None
    license_id: Optional[int] = None
    # Joined, read-only
    software_name: Optional[str] = None
    major_version: Optional[str] = None
    assigned_pc_id: Optional[int] = None
    assigned_vm_id: Optional[int] = None
    assigned_on: Optional[date] = None


@dataclass
class LicenseAssignment:
    """Assignment of a license to exactly one PC or exactly one VM."""
    license_id: int
    pc_id: Optional[int] = None
    vm_id: Optional[int] = None
    assigned_on: Optional[date] = None
    assignment_id: Optional[int] = None

    def has_single_target(self) -> bool:
        """True when exactly one of pc_id / vm_id is set."""
        return (self.pc_id is None) != (self.vm_id is None)


@dataclass
class AssignedLicense:
    """A license assigned to a PC, joined with its software."""
    license_id: int
    software_name: str
    license_name: Optional[str] = None
    license_type: Optional[str] = None
    major_version: Optional[str] = None
    assigned_on: Optional[date] = None
