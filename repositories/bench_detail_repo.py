"""
repositories/bench_detail_repo.py
----------------------------------
Data access layer for the per-bench detail tables:
`test_bench_project_overview`, `hil_technology`, `hil_operation`
and `hardware_installation`. Each row belongs to one test bench.
"""

from typing import Optional

from db.access import Database
from models.bench import HardwareInstallation, HilOperation, HilTechnology, ProjectOverview
from utils.logger import get_logger

logger = get_logger(__name__)


def _select_with_bench_name(table: str) -> str:
    """SELECT over a detail table, joined with the name of the bench it belongs to."""
    return f"SELECT d.*, t.hil_name FROM {table} d LEFT JOIN test_benches t ON d.bench_id = t.bench_id"


_SELECT_OVERVIEW = _select_with_bench_name("test_bench_project_overview")
_SELECT_TECHNOLOGY = _select_with_bench_name("hil_technology")
_SELECT_OPERATION = _select_with_bench_name("hil_operation")
_SELECT_HARDWARE = _select_with_bench_name("hardware_installation")


class ProjectOverviewRepository:
    """Repository for CRUD operations on test_bench_project_overview."""

    def __init__(self, db: Database):
        self.db = db

    def add(self, overview: ProjectOverview) -> ProjectOverview:
        sql = """
            INSERT INTO test_bench_project_overview
                (bench_id, platform, system_supplier, wetbench_info, actuator_info,
                 hardware, software, model_version, ticket_notes)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING overview_id;
        """
        overview_id = self.db.insert(sql, self._values(overview))
        logger.info(f"Added project overview #{overview_id} for bench #{overview.bench_id}")
        return self.get_by_id(overview_id)

    def get_all(self) -> list[ProjectOverview]:
        return self.db.query(
            _SELECT_OVERVIEW + " ORDER BY d.overview_id;",
            record=ProjectOverview,
        )

    def get_by_id(self, overview_id: int) -> Optional[ProjectOverview]:
        return self.db.query_one(
            _SELECT_OVERVIEW + " WHERE d.overview_id = %s;",
            (overview_id,),
            record=ProjectOverview,
        )

    def update(self, overview: ProjectOverview) -> bool:
        sql = """
            UPDATE test_bench_project_overview
            SET bench_id = %s, platform = %s, system_supplier = %s, wetbench_info = %s,
                actuator_info = %s, hardware = %s, software = %s, model_version = %s,
                ticket_notes = %s
            WHERE overview_id = %s;
        """
        return self.db.update(sql, self._values(overview) + (overview.overview_id,)) > 0

    def delete(self, overview_id: int) -> bool:
        return self.db.update(
            "DELETE FROM test_bench_project_overview WHERE overview_id = %s;", (overview_id,)
        ) > 0

    @staticmethod
    def _values(o: ProjectOverview) -> tuple:
        return (
            o.bench_id, o.platform, o.system_supplier, o.wetbench_info, o.actuator_info,
            o.hardware, o.software, o.model_version, o.ticket_notes,
        )


class HilTechnologyRepository:
    """Repository for CRUD operations on hil_technology."""

    def __init__(self, db: Database):
        self.db = db

    def add(self, tech: HilTechnology) -> HilTechnology:
        sql = """
            INSERT INTO hil_technology
                (bench_id, fiu_info, io_info, can_interface, power_interface,
                 possible_tests, leakage_module)
            VALUES (%s, %s, %s, %s, %s, %s, %s)
            RETURNING tech_id;
        """
        tech_id = self.db.insert(sql, self._values(tech))
        logger.info(f"Added HIL technology #{tech_id} for bench #{tech.bench_id}")
        return self.get_by_id(tech_id)

    def get_all(self) -> list[HilTechnology]:
        return self.db.query(_SELECT_TECHNOLOGY + " ORDER BY d.tech_id;", record=HilTechnology)

    def get_by_id(self, tech_id: int) -> Optional[HilTechnology]:
        return self.db.query_one(
            _SELECT_TECHNOLOGY + " WHERE d.tech_id = %s;", (tech_id,), record=HilTechnology
        )

    def update(self, tech: HilTechnology) -> bool:
        sql = """
            UPDATE hil_technology
            SET bench_id = %s, fiu_info = %s, io_info = %s, can_interface = %s,
                power_interface = %s, possible_tests = %s, leakage_module = %s
            WHERE tech_id = %s;
        """
        return self.db.update(sql, self._values(tech) + (tech.tech_id,)) > 0

    def delete(self, tech_id: int) -> bool:
        return self.db.update("DELETE FROM hil_technology WHERE tech_id = %s;", (tech_id,)) > 0

    @staticmethod
    def _values(t: HilTechnology) -> tuple:
        return (
            t.bench_id, t.fiu_info, t.io_info, t.can_interface,
            t.power_interface, t.possible_tests, t.leakage_module,
        )


class HilOperationRepository:
    """Repository for CRUD operations on hil_operation."""

    def __init__(self, db: Database):
        self.db = db

    def add(self, operation: HilOperation) -> HilOperation:
        sql = """
            INSERT INTO hil_operation
                (bench_id, possible_tests, vehicle_datasets, scenarios, controldesk_projects)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING operation_id;
        """
        operation_id = self.db.insert(sql, self._values(operation))
        logger.info(f"Added HIL operation #{operation_id} for bench #{operation.bench_id}")
        return self.get_by_id(operation_id)

    def get_all(self) -> list[HilOperation]:
        return self.db.query(_SELECT_OPERATION + " ORDER BY d.operation_id;", record=HilOperation)

    def get_by_id(self, operation_id: int) -> Optional[HilOperation]:
        return self.db.query_one(
            _SELECT_OPERATION + " WHERE d.operation_id = %s;",
            (operation_id,),
            record=HilOperation,
        )

    def update(self, operation: HilOperation) -> bool:
        sql = """
            UPDATE hil_operation
            SET bench_id = %s, possible_tests = %s, vehicle_datasets = %s,
                scenarios = %s, controldesk_projects = %s
            WHERE operation_id = %s;
        """
        return self.db.update(sql, self._values(operation) + (operation.operation_id,)) > 0

    def delete(self, operation_id: int) -> bool:
        return self.db.update(
            "DELETE FROM hil_operation WHERE operation_id = %s;", (operation_id,)
        ) > 0

    @staticmethod
    def _values(o: HilOperation) -> tuple:
        return (o.bench_id, o.possible_tests, o.vehicle_datasets, o.scenarios, o.controldesk_projects)


class HardwareRepository:
    """Repository for CRUD operations on hardware_installation."""

    def __init__(self, db: Database):
        self.db = db

    def add(self, install: HardwareInstallation) -> HardwareInstallation:
        sql = """
            INSERT INTO hardware_installation (bench_id, ecu_info, sensors, additional_periphery)
            VALUES (%s, %s, %s, %s)
            RETURNING install_id;
        """
        install_id = self.db.insert(sql, self._values(install))
        logger.info(f"Added hardware installation #{install_id} for bench #{install.bench_id}")
        return self.get_by_id(install_id)

    def get_all(self) -> list[HardwareInstallation]:
        return self.db.query(
            _SELECT_HARDWARE + " ORDER BY d.install_id;", record=HardwareInstallation
        )

    def get_by_id(self, install_id: int) -> Optional[HardwareInstallation]:
        return self.db.query_one(
            _SELECT_HARDWARE + " WHERE d.install_id = %s;",
            (install_id,),
            record=HardwareInstallation,
        )

    def update(self, install: HardwareInstallation) -> bool:
        sql = """
            UPDATE hardware_installation
            SET bench_id = %s, ecu_info = %s, sensors = %s, additional_periphery = %s
            WHERE install_id = %s;
        """
        return self.db.update(sql, self._values(install) + (install.install_id,)) > 0

    def delete(self, install_id: int) -> bool:
        return self.db.update(
            "DELETE FROM hardware_installation WHERE install_id = %s;", (install_id,)
        ) > 0

    @staticmethod
    def _values(h: HardwareInstallation) -> tuple:
        return (h.bench_id, h.ecu_info, h.sensors, h.additional_periphery)
