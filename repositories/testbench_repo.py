"""
repositories/testbench_repo.py
-------------------------------
Data access layer for test benches.
All SQL queries related to the `test_benches` table live here, together
with the lookup queries built on it (bench types, system types).
"""

from typing import Optional

from db.access import Database
from models.bench import TestBench
from utils.logger import get_logger

logger = get_logger(__name__)

_SELECT_BENCH = """
    SELECT t.*, u.user_name, p.project_name
    FROM test_benches t
    LEFT JOIN users u ON t.user_id = u.user_id
    LEFT JOIN projects p ON t.project_id = p.project_id
"""


class TestBenchRepository:
    """Repository for CRUD operations on the test_benches table."""

    __test__ = False

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def add(self, bench: TestBench) -> TestBench:
        """
        Insert a new test bench.

        Returns:
            The stored row, re-read by its new id.
        """
        sql = """
            INSERT INTO test_benches
                (hil_name, pp_number, system_type, bench_type, acquisition_date,
                 usage_period, user_id, project_id, location, inventory_number, eplan)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING bench_id;
        """
        bench_id = self.db.insert(sql, self._values(bench))
        logger.info(f"Added test bench '{bench.hil_name}' #{bench_id}")
        return self.get_by_id(bench_id)

    # ── READ ──────────────────────────────────────────────

    def get_all(self) -> list[TestBench]:
        return self.db.query(_SELECT_BENCH + " ORDER BY t.bench_id;", record=TestBench)

    def get_by_id(self, bench_id: int) -> Optional[TestBench]:
        return self.db.query_one(
            _SELECT_BENCH + " WHERE t.bench_id = %s;", (bench_id,), record=TestBench
        )

    def get_bench_types(self) -> list[str]:
        """Distinct, non-null bench types in alphabetical order."""
        rows = self.db.query(
            "SELECT DISTINCT bench_type FROM test_benches "
            "WHERE bench_type IS NOT NULL ORDER BY bench_type ASC;"
        )
        return [r["bench_type"] for r in rows]

    def get_system_types(self) -> list[str]:
        """Distinct, non-null system types in alphabetical order."""
        rows = self.db.query(
            "SELECT DISTINCT system_type FROM test_benches "
            "WHERE system_type IS NOT NULL ORDER BY system_type ASC;"
        )
        return [r["system_type"] for r in rows]

    # ── UPDATE ────────────────────────────────────────────

    def update(self, bench: TestBench) -> bool:
        """Replace every column of an existing bench."""
        sql = """
            UPDATE test_benches
            SET hil_name = %s, pp_number = %s, system_type = %s, bench_type = %s,
                acquisition_date = %s, usage_period = %s, user_id = %s, project_id = %s,
                location = %s, inventory_number = %s, eplan = %s
            WHERE bench_id = %s;
        """
        return self.db.update(sql, self._values(bench) + (bench.bench_id,)) > 0

    # ── DELETE ────────────────────────────────────────────

    def delete(self, bench_id: int) -> bool:
        deleted = self.db.update("DELETE FROM test_benches WHERE bench_id = %s;", (bench_id,)) > 0
        if deleted:
            logger.info(f"Deleted test bench #{bench_id}")
        return deleted

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _values(bench: TestBench) -> tuple:
        return (
            bench.hil_name, bench.pp_number, bench.system_type, bench.bench_type,
            bench.acquisition_date, bench.usage_period, bench.user_id, bench.project_id,
            bench.location, bench.inventory_number, bench.eplan,
        )
