"""
models/bench.py
---------------
Domain models for HIL test benches and the detail records attached to a bench.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class TestBench:
    """
    A hardware-in-the-loop test bench.

    Attributes:
        bench_id: Database primary key (None for new records).
        hil_name: Display name of the bench (e.g., 'HIL-BS-01').
        pp_number: Purchase/project-plan number.
        system_type: System family (e.g., 'SCLX', 'PHS').
        bench_type: Bench size/category (e.g., 'Fullsize').
        acquisition_date: When the bench was acquired.
        usage_period: Planned usage period as free text.
        user_id: Responsible user (FK users).
        project_id: Owning project (FK projects).
        location: Lab/room.
        inventory_number: Company inventory number.
        eplan: Electrical plan reference.
        user_name: Joined name of the responsible user (read-only).
        project_name: Joined project name (read-only).
    """
    __test__ = False  # not a pytest test class

    hil_name: str
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
    bench_id: Optional[int] = None
    user_name: Optional[str] = None
    project_name: Optional[str] = None


@dataclass
class ProjectOverview:
    """Project-side description of a bench (platform, supplier, versions, notes)."""
    bench_id: int
    platform: Optional[str] = None
    system_supplier: Optional[str] = None
    wetbench_info: Optional[str] = None
    actuator_info: Optional[str] = None
    hardware: Optional[str] = None
    software: Optional[str] = None
    model_version: Optional[str] = None
    ticket_notes: Optional[str] = None
    overview_id: Optional[int] = None
    hil_name: Optional[str] = None  # joined from test_benches


@dataclass
class HilTechnology:
    """I/O and interface technology installed on a bench."""
    bench_id: int
    fiu_info: Optional[str] = None
    io_info: Optional[str] = None
    can_interface: Optional[str] = None
    power_interface: Optional[str] = None
    possible_tests: Optional[str] = None
    leakage_module: Optional[str] = None
    tech_id: Optional[int] = None
    hil_name: Optional[str] = None  # joined from test_benches


@dataclass
class HilOperation:
    """Operational data of a bench: tests, datasets, scenarios, ControlDesk projects."""
    bench_id: int
    possible_tests: Optional[str] = None
    vehicle_datasets: Optional[str] = None
    scenarios: Optional[str] = None
    controldesk_projects: Optional[str] = None
    operation_id: Optional[int] = None
    hil_name: Optional[str] = None  # joined from test_benches


@dataclass
class HardwareInstallation:
    """ECUs, sensors and periphery mounted on a bench."""
    bench_id: int
    ecu_info: Optional[str] = None
    sensors: Optional[str] = None
    additional_periphery: Optional[str] = None
    install_id: Optional[int] = None
    hil_name: Optional[str] = None  # joined from test_benches


@dataclass
class BenchServer:
    """Read-only overview row: a bench joined with its PC and project overview."""
    bench_id: int
    hil_name: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    active_user: Optional[str] = None
    location: Optional[str] = None


@dataclass
class ServerCard:
    """
    Read-only server card: one PC joined with its bench and project overview.

    Attributes:
        pc_id: The PC behind the card; cards are addressed by it.
        casual_name: Display name of the PC.
        platform: Platform of the bench's project overview.
        bench_type: Type of the bench the PC belongs to.
        pc_info_text: Free-text description.
        status: 'online', 'offline' or 'in_use'.
        user_name: Who is currently using the PC.
    """
    pc_id: int
    casual_name: Optional[str] = None
    platform: Optional[str] = None
    bench_type: Optional[str] = None
    pc_info_text: Optional[str] = None
    status: Optional[str] = None
    user_name: Optional[str] = None
