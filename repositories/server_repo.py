"""
repositories/server_repo.py
----------------------------
Data access for the server overview: a test bench seen together with its
PC (`pc_overview`) and its project overview (`test_bench_project_overview`).

Every method runs on an Executor, so the same repository serves plain
reads and the multi-table writes done inside a transaction.
"""

from typing import Optional

from db.access import Executor
from models.bench import BenchServer, ServerCard

_SELECT_SERVER = """
    SELECT
        t.bench_id,
        p.pc_name AS hil_name,
        o.platform AS category,
        t.bench_type AS subcategory,
        p.pc_info_text AS description,
        p.status,
        p.active_user,
        t.location
    FROM test_benches t
    LEFT JOIN pc_overview p ON t.bench_id = p.bench_id
    LEFT JOIN test_bench_project_overview o ON t.bench_id = o.bench_id
"""

_SELECT_CARD = """
    SELECT
        p.pc_id,
        p.casual_name,
        o.platform,
        t.bench_type,
        p.pc_info_text,
        p.status,
        p.active_user AS user_name
    FROM pc_overview p
    LEFT JOIN test_benches t ON p.bench_id = t.bench_id
    LEFT JOIN test_bench_project_overview o ON t.bench_id = o.bench_id
"""


class ServerRepository:
    """Reads and writes spanning test_benches, pc_overview and the project overview."""

    def __init__(self, db: Executor):
        self.db = db

    # ── READ ──────────────────────────────────────────────

    def get_all(self) -> list[BenchServer]:
        """
        Every bench joined with its PC and project overview.
        A bench with several PCs appears once per PC.
        """
        return self.db.query(_SELECT_SERVER + " ORDER BY t.bench_id;", record=BenchServer)

    def get_by_bench(self, bench_id: int) -> Optional[BenchServer]:
        return self.db.query_one(
            _SELECT_SERVER + " WHERE t.bench_id = %s;", (bench_id,), record=BenchServer
        )

    def get_card(self, pc_id: int) -> Optional[ServerCard]:
        return self.db.query_one(_SELECT_CARD + " WHERE p.pc_id = %s;", (pc_id,), record=ServerCard)

    def get_pc_state(self, pc_id: int) -> Optional[dict]:
        """The bench and status of one PC, or None if the PC does not exist."""
        return self.db.query_one(
            "SELECT bench_id, status FROM pc_overview WHERE pc_id = %s;", (pc_id,)
        )

    def bench_exists(self, bench_id: int) -> bool:
        row = self.db.query_one("SELECT bench_id FROM test_benches WHERE bench_id = %s;", (bench_id,))
        return row is not None

    def get_categories(self) -> list[str]:
        """Distinct, non-empty platforms of all project overviews."""
        rows = self.db.query(
            "SELECT DISTINCT platform FROM test_bench_project_overview "
            "WHERE platform IS NOT NULL AND platform <> '' ORDER BY platform;"
        )
        return [r["platform"] for r in rows]

    # ── WRITE ─────────────────────────────────────────────

    def add_bench(self, hil_name: str, bench_type: Optional[str]) -> int:
        """Insert a bench; the bench type doubles as its system type."""
        return self.db.insert(
            "INSERT INTO test_benches (hil_name, bench_type, system_type) "
            "VALUES (%s, %s, %s) RETURNING bench_id;",
            (hil_name, bench_type, bench_type),
        )

    def update_bench(self, bench_id: int, hil_name: str, bench_type: Optional[str]) -> int:
        return self.db.update(
            "UPDATE test_benches SET hil_name = %s, bench_type = %s, system_type = %s "
            "WHERE bench_id = %s;",
            (hil_name, bench_type, bench_type, bench_id),
        )

    def rename_bench(self, bench_id: int, hil_name: str, bench_type: Optional[str]) -> int:
        """Set name and bench type, leaving the system type alone."""
        return self.db.update(
            "UPDATE test_benches SET hil_name = %s, bench_type = %s WHERE bench_id = %s;",
            (hil_name, bench_type, bench_id),
        )

    def set_platform(self, bench_id: int, platform: str) -> None:
        """Update the bench's project overview platform, creating the overview if missing."""
        updated = self.db.update(
            "UPDATE test_bench_project_overview SET platform = %s WHERE bench_id = %s;",
            (platform, bench_id),
        )
        if updated == 0:
            self.db.insert(
                "INSERT INTO test_bench_project_overview (bench_id, platform) "
                "VALUES (%s, %s) RETURNING overview_id;",
                (bench_id, platform),
            )

    def add_pc(
        self,
        bench_id: int,
        pc_name: str,
        pc_info_text: Optional[str],
        status: str,
        active_user: Optional[str],
    ) -> int:
        return self.db.insert(
            "INSERT INTO pc_overview (bench_id, pc_name, pc_info_text, status, active_user) "
            "VALUES (%s, %s, %s, %s, %s) RETURNING pc_id;",
            (bench_id, pc_name, pc_info_text, status, active_user),
        )

    def set_bench_pc(
        self,
        bench_id: int,
        pc_name: str,
        pc_info_text: Optional[str],
        status: str,
        active_user: Optional[str],
    ) -> None:
        """Update the PCs of a bench, or give the bench a PC if it has none."""
        updated = self.db.update(
            "UPDATE pc_overview SET pc_name = %s, pc_info_text = %s, status = %s, active_user = %s "
            "WHERE bench_id = %s;",
            (pc_name, pc_info_text, status, active_user, bench_id),
        )
        if updated == 0:
            self.add_pc(bench_id, pc_name, pc_info_text, status, active_user)

    def update_card(
        self,
        pc_id: int,
        casual_name: str,
        pc_info_text: Optional[str],
        status: str,
        user_name: Optional[str],
    ) -> int:
        """Write a card back to its PC; the casual name also becomes the PC name."""
        return self.db.update(
            "UPDATE pc_overview SET pc_name = %s, casual_name = %s, pc_info_text = %s, "
            "status = %s, active_user = %s WHERE pc_id = %s;",
            (casual_name, casual_name, pc_info_text, status, user_name, pc_id),
        )

    # ── DELETE ────────────────────────────────────────────

    def delete_bench(self, bench_id: int) -> int:
        """Delete a bench with its PCs and project overviews."""
        self.db.update("DELETE FROM pc_overview WHERE bench_id = %s;", (bench_id,))
        self.db.update("DELETE FROM test_bench_project_overview WHERE bench_id = %s;", (bench_id,))
        return self.db.update("DELETE FROM test_benches WHERE bench_id = %s;", (bench_id,))

    def delete_card(self, pc_id: int) -> int:
        """Delete the PC behind a card. Its bench stays."""
        return self.db.update("DELETE FROM pc_overview WHERE pc_id = %s;", (pc_id,))
