"""
repositories/machine_repo.py
-----------------------------
Data access layer for machines: `pc_overview`, `vm_instances`,
`wetbenches` and `model_stands`.
"""

from typing import Optional

from db.access import Database
from models.machine import ModelStand, Pc, VmInstance, Wetbench
from utils.logger import get_logger

logger = get_logger(__name__)


class PcRepository:
    """Repository for CRUD operations on the pc_overview table."""

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def add(self, pc: Pc) -> Pc:
        """
        Insert a new PC.

        Returns:
            The stored row, re-read by its new id.
        """
        sql = """
            INSERT INTO pc_overview
                (bench_id, pc_name, casual_name, purchase_year, inventory_number, pc_role,
                 pc_model, special_equipment, mac_address, ip_address, pc_info_text,
                 status, active_user)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING pc_id;
        """
        pc_id = self.db.insert(sql, self._values(pc))
        logger.info(f"Added PC '{pc.pc_name}' #{pc_id}")
        return self.get_by_id(pc_id)

    # ── READ ──────────────────────────────────────────────

    def get_all(self) -> list[Pc]:
        return self.db.query("SELECT * FROM pc_overview ORDER BY pc_id;", record=Pc)

    def get_by_id(self, pc_id: int) -> Optional[Pc]:
        return self.db.query_one("SELECT * FROM pc_overview WHERE pc_id = %s;", (pc_id,), record=Pc)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, pc: Pc) -> bool:
        sql = """
            UPDATE pc_overview
            SET bench_id = %s, pc_name = %s, casual_name = %s, purchase_year = %s,
                inventory_number = %s, pc_role = %s, pc_model = %s, special_equipment = %s,
                mac_address = %s, ip_address = %s, pc_info_text = %s, status = %s,
                active_user = %s
            WHERE pc_id = %s;
        """
        return self.db.update(sql, self._values(pc) + (pc.pc_id,)) > 0

    # ── DELETE ────────────────────────────────────────────

    def delete(self, pc_id: int) -> bool:
        deleted = self.db.update("DELETE FROM pc_overview WHERE pc_id = %s;", (pc_id,)) > 0
        if deleted:
            logger.info(f"Deleted PC #{pc_id}")
        return deleted

    @staticmethod
    def _values(pc: Pc) -> tuple:
        return (
            pc.bench_id, pc.pc_name, pc.casual_name, pc.purchase_year, pc.inventory_number,
            pc.pc_role, pc.pc_model, pc.special_equipment, pc.mac_address, pc.ip_address,
            pc.pc_info_text, pc.status, pc.active_user,
        )


class VmRepository:
    """Repository for CRUD operations on the vm_instances table."""

    def __init__(self, db: Database):
        self.db = db

    def add(self, vm: VmInstance) -> VmInstance:
        vm_id = self.db.insert(
            "INSERT INTO vm_instances (vm_name, vm_address) VALUES (%s, %s) RETURNING vm_id;",
            (vm.vm_name, vm.vm_address),
        )
        logger.info(f"Added VM '{vm.vm_name}' #{vm_id}")
        return self.get_by_id(vm_id)

    def get_all(self) -> list[VmInstance]:
        return self.db.query("SELECT * FROM vm_instances ORDER BY vm_id;", record=VmInstance)

    def get_by_id(self, vm_id: int) -> Optional[VmInstance]:
        return self.db.query_one(
            "SELECT * FROM vm_instances WHERE vm_id = %s;", (vm_id,), record=VmInstance
        )

    def update(self, vm: VmInstance) -> bool:
        return self.db.update(
            "UPDATE vm_instances SET vm_name = %s, vm_address = %s WHERE vm_id = %s;",
            (vm.vm_name, vm.vm_address, vm.vm_id),
        ) > 0

    def delete(self, vm_id: int) -> bool:
        deleted = self.db.update("DELETE FROM vm_instances WHERE vm_id = %s;", (vm_id,)) > 0
        if deleted:
            logger.info(f"Deleted VM #{vm_id}")
        return deleted


class WetbenchRepository:
    """Repository for CRUD operations on the wetbenches table."""

    def __init__(self, db: Database):
        self.db = db

    def add(self, wetbench: Wetbench) -> Wetbench:
        sql = """
            INSERT INTO wetbenches
                (wetbench_name, pp_number, owner, system_type, platform, system_supplier,
                 linked_bench_id, actuator_info, hardware_components, inventory_number)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING wetbench_id;
        """
        wetbench_id = self.db.insert(sql, self._values(wetbench))
        logger.info(f"Added wetbench '{wetbench.wetbench_name}' #{wetbench_id}")
        return self.get_by_id(wetbench_id)

    def get_all(self) -> list[Wetbench]:
        return self.db.query("SELECT * FROM wetbenches ORDER BY wetbench_id;", record=Wetbench)

    def get_by_id(self, wetbench_id: int) -> Optional[Wetbench]:
        return self.db.query_one(
            "SELECT * FROM wetbenches WHERE wetbench_id = %s;", (wetbench_id,), record=Wetbench
        )

    def update(self, wetbench: Wetbench) -> bool:
        sql = """
            UPDATE wetbenches
            SET wetbench_name = %s, pp_number = %s, owner = %s, system_type = %s,
                platform = %s, system_supplier = %s, linked_bench_id = %s,
                actuator_info = %s, hardware_components = %s, inventory_number = %s
            WHERE wetbench_id = %s;
        """
        return self.db.update(sql, self._values(wetbench) + (wetbench.wetbench_id,)) > 0

    def delete(self, wetbench_id: int) -> bool:
        return self.db.update(
            "DELETE FROM wetbenches WHERE wetbench_id = %s;", (wetbench_id,)
        ) > 0

    @staticmethod
    def _values(w: Wetbench) -> tuple:
        return (
            w.wetbench_name, w.pp_number, w.owner, w.system_type, w.platform,
            w.system_supplier, w.linked_bench_id, w.actuator_info, w.hardware_components,
            w.inventory_number,
        )


class ModelStandRepository:
    """Repository for CRUD operations on the model_stands table."""

    def __init__(self, db: Database):
        self.db = db

    def add(self, model: ModelStand) -> ModelStand:
        model_id = self.db.insert(
            "INSERT INTO model_stands (model_name, svn_link, features) "
            "VALUES (%s, %s, %s) RETURNING model_id;",
            (model.model_name, model.svn_link, model.features),
        )
        logger.info(f"Added model stand '{model.model_name}' #{model_id}")
        return self.get_by_id(model_id)

    def get_all(self) -> list[ModelStand]:
        return self.db.query("SELECT * FROM model_stands ORDER BY model_id;", record=ModelStand)

    def get_by_id(self, model_id: int) -> Optional[ModelStand]:
        return self.db.query_one(
            "SELECT * FROM model_stands WHERE model_id = %s;", (model_id,), record=ModelStand
        )

    def update(self, model: ModelStand) -> bool:
        return self.db.update(
            "UPDATE model_stands SET model_name = %s, svn_link = %s, features = %s "
            "WHERE model_id = %s;",
            (model.model_name, model.svn_link, model.features, model.model_id),
        ) > 0

    def delete(self, model_id: int) -> bool:
        return self.db.update("DELETE FROM model_stands WHERE model_id = %s;", (model_id,)) > 0
