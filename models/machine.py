"""
models/machine.py
-----------------
Domain models for PCs, virtual machines, wetbenches and model stands.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Pc:
    """
    A physical PC, optionally attached to a test bench.

    Attributes:
        pc_id: Database primary key (None for new records).
        bench_id: Bench the PC drives (FK test_benches), if any.
        pc_name: Hostname.
        casual_name: Nickname used in the lab.
        purchase_year: Year of purchase.
        status: Free-form state (e.g., 'online', 'offline', 'in_use').
        active_user: Who is currently using the PC.
    """
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
    pc_id: Optional[int] = None


@dataclass
class VmInstance:
    """A virtual machine."""
    vm_name: str
    vm_address: Optional[str] = None
    vm_id: Optional[int] = None


@dataclass
class Wetbench:
    """A wetbench (hydraulic rig), optionally linked to a test bench."""
    wetbench_name: str
    pp_number: Optional[str] = None
    owner: Optional[str] = None
    system_type: Optional[str] = None
    platform: Optional[str] = None
    system_supplier: Optional[str] = None
    linked_bench_id: Optional[int] = None
    actuator_info: Optional[str] = None
    hardware_components: Optional[str] = None
    inventory_number: Optional[str] = None
    wetbench_id: Optional[int] = None


@dataclass
class ModelStand:
    """A simulation model stand with its SVN location."""
    model_name: str
    svn_link: Optional[str] = None
    features: Optional[str] = None
    model_id: Optional[int] = None
