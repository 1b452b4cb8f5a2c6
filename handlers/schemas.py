"""
handlers/schemas.py
--------------------
Pydantic request bodies. Field names match the dataclass records, so a
validated body converts with ``Record(**body.model_dump())``.
Every PUT is a full-row replace: omitted optional fields become NULL.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


# ── Inventory ─────────────────────────────────────────────

class ProjectBody(BaseModel):
    project_name: str = Field(min_length=1)
    project_number: Optional[str] = None


class TestBenchBody(BaseModel):
    hil_name: str = Field(min_length=1)
    pp_number: Optional[str] = None
    system_type: Optional[str] = None
    bench_type: Optional[str] = None
    acquisition_date: Optional[date] = None
    usage_period: Optional[str] = None
    user_id: Optional[int] = None
    project_id: Optional[int] = None
    location: Optional[str] = None
    inventory_number: Optional[str] = None
    eplan: Optional[str] = None


class ProjectOverviewBody(BaseModel):
    bench_id: int
    platform: Optional[str] = None
    system_supplier: Optional[str] = None
    wetbench_info: Optional[str] = None
    actuator_info: Optional[str] = None
    hardware: Optional[str] = None
    software: Optional[str] = None
    model_version: Optional[str] = None
    ticket_notes: Optional[str] = None


class HilTechnologyBody(BaseModel):
    bench_id: int
    fiu_info: Optional[str] = None
    io_info: Optional[str] = None
    can_interface: Optional[str] = None
    power_interface: Optional[str] = None
    possible_tests: Optional[str] = None
    leakage_module: Optional[str] = None


class HilOperationBody(BaseModel):
    bench_id: int
    possible_tests: Optional[str] = None
    vehicle_datasets: Optional[str] = None
    scenarios: Optional[str] = None
    controldesk_projects: Optional[str] = None


class HardwareBody(BaseModel):
    bench_id: int
    ecu_info: Optional[str] = None
    sensors: Optional[str] = None
    additional_periphery: Optional[str] = None


class PcBody(BaseModel):
    bench_id: Optional[int] = None
    pc_name: Optional[str] = None
    casual_name: Optional[str] = None
    purchase_year: Optional[int] = None
    inventory_number: Optional[str] = None
    pc_role: Optional[str] = None
    pc_model: Optional[str] = None
    special_equipment: Optional[str] = None
    mac_address: Optional[str] = None
    ip_address: Optional[str] = None
    pc_info_text: Optional[str] = None
    status: Optional[str] = None
    active_user: Optional[str] = None


class VmBody(BaseModel):
    vm_name: str = Field(min_length=1)
    vm_address: Optional[str] = None


class WetbenchBody(BaseModel):
    wetbench_name: str = Field(min_length=1)
    pp_number: Optional[str] = None
    owner: Optional[str] = None
    system_type: Optional[str] = None
    platform: Optional[str] = None
    system_supplier: Optional[str] = None
    linked_bench_id: Optional[int] = None
    actuator_info: Optional[str] = None
    hardware_components: Optional[str] = None
    inventory_number: Optional[str] = None


class ModelStandBody(BaseModel):
    model_name: str = Field(min_length=1)
    svn_link: Optional[str] = None
    features: Optional[str] = None


class SoftwareBody(BaseModel):
    software_name: str = Field(min_length=1)
    major_version: Optional[str] = None
    vendor: Optional[str] = None


class LicenseBody(BaseModel):
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


# ── Assignments ───────────────────────────────────────────

class SoftwareInstallBody(BaseModel):
    software_id: int
    install_date: Optional[date] = None


class LicenseAssignmentBody(BaseModel):
    pc_id: Optional[int] = None
    vm_id: Optional[int] = None
    assigned_on: Optional[date] = None


# ── Administration ────────────────────────────────────────

class CreateUserBody(BaseModel):
    user_name: str
    email: str
    password: str
    company_username: Optional[str] = None
    user_group_id: Optional[int] = None


class UserGroupBody(BaseModel):
    user_group_id: Optional[int] = None


class CreateGroupBody(BaseModel):
    user_group_name: str
    permission_id: int


class GroupPermissionBody(BaseModel):
    permission_id: int


class GroupPlatformsBody(BaseModel):
    platform_ids: list[int] = Field(default_factory=list)


# ── Servers ───────────────────────────────────────────────

class ServerBody(BaseModel):
    name: str
    platform: str
    description: str
    bench_type: Optional[str] = None
    status: Optional[str] = None
    user: Optional[str] = None


class ServerCardBody(BaseModel):
    casual_name: str
    platform: str
    pc_info_text: str
    bench_type: Optional[str] = None
    user_name: Optional[str] = None
