"""
services/server_service.py
---------------------------
Business logic for the server overview and the server cards.

A server spans three tables: the bench, its PC and its project overview.
Every write touching more than one of them runs in a single transaction,
so a failure leaves none of them half-written.
"""

from typing import Optional

from db.access import Database, Transaction
from db.errors import ConstraintKind, ConstraintViolation, NotFound
from models.bench import BenchServer, ServerCard
from repositories.server_repo import ServerRepository
from services.errors import EntityInUse, ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)

SERVER_STATUSES = ("online", "offline", "in_use")


def _blank(value: Optional[str]) -> bool:
    return value is None or value.strip() == ""


def card_status(current: Optional[str], user_name: Optional[str]) -> str:
    """
    Status of a card after an edit.

    An offline PC stays offline; otherwise it is 'in_use' when somebody is
    named as its user and 'online' when nobody is.
    """
    if (current or "").lower() == "offline":
        return "offline"
    return "online" if _blank(user_name) else "in_use"


class ServerService:
    """Server overview (keyed by bench) and server cards (keyed by PC)."""

    def __init__(self, db: Database):
        self.db = db
        self.servers = ServerRepository(db)

    # ── Overview ──────────────────────────────────────────

    def list_servers(self) -> list[BenchServer]:
        return self.servers.get_all()

    def list_categories(self) -> list[str]:
        return self.servers.get_categories()

    def create_server(
        self,
        name: str,
        platform: str,
        description: str,
        bench_type: Optional[str] = None,
        status: Optional[str] = None,
        user: Optional[str] = None,
    ) -> BenchServer:
        """
        Create a bench, its project overview and its PC together.

        Returns:
            The new server row.

        Raises:
            ValidationError: Missing name/platform/description or unknown status.
        """
        status = self._check_entry(name, platform, description, status)

        def create(tx: Transaction) -> int:
            repo = ServerRepository(tx)
            bench_id = repo.add_bench(name, bench_type or None)
            repo.set_platform(bench_id, platform)
            repo.add_pc(bench_id, name, description, status, user or None)
            return bench_id

        bench_id = self.db.transaction(create)
        logger.info(f"Added server '{name}' on bench #{bench_id}")
        return self.servers.get_by_bench(bench_id)

    def update_server(
        self,
        bench_id: int,
        name: str,
        platform: str,
        description: str,
        bench_type: Optional[str] = None,
        status: Optional[str] = None,
        user: Optional[str] = None,
    ) -> BenchServer:
        """
        Rewrite a server's bench, platform and PC in one transaction.
        A missing project overview or PC is created.

        Raises:
            ValidationError: Missing name/platform/description or unknown status.
            NotFound: If the bench does not exist.
        """
        status = self._check_entry(name, platform, description, status)

        def update(tx: Transaction) -> None:
            repo = ServerRepository(tx)
            if not repo.bench_exists(bench_id):
                raise NotFound("Server not found")
            repo.update_bench(bench_id, name, bench_type or None)
            repo.set_platform(bench_id, platform)
            repo.set_bench_pc(bench_id, name, description, status, user or None)

        self.db.transaction(update)
        logger.info(f"Updated server on bench #{bench_id}")
        return self.servers.get_by_bench(bench_id)

    def delete_server(self, bench_id: int) -> None:
        """
        Delete a bench together with its PCs and project overviews.

        Raises:
            NotFound: If the bench does not exist.
            EntityInUse: If other records (e.g. installed software) still
                reference the bench or its PCs.
        """
        try:
            deleted = self.db.transaction(lambda tx: ServerRepository(tx).delete_bench(bench_id))
        except ConstraintViolation as e:
            if e.constraint_kind is not ConstraintKind.FOREIGN_KEY:
                raise
            raise EntityInUse(
                "Failed to delete server: it is still referenced by other records.",
                detail=e.detail,
            ) from e
        if not deleted:
            raise NotFound("Server not found or already deleted")
        logger.info(f"Deleted server on bench #{bench_id}")

    # ── Cards ─────────────────────────────────────────────

    def get_card(self, pc_id: int) -> ServerCard:
        card = self.servers.get_card(pc_id)
        if card is None:
            raise NotFound("Server (pc) not found")
        return card

    def update_card(
        self,
        pc_id: int,
        casual_name: str,
        platform: str,
        pc_info_text: str,
        bench_type: Optional[str] = None,
        user_name: Optional[str] = None,
    ) -> ServerCard:
        """
        Edit a server card. The PC, its bench and the bench's project
        overview change together; the status follows ``card_status``.

        Raises:
            ValidationError: Missing casual name, platform or info text.
            NotFound: If the PC does not exist.
        """
        if _blank(casual_name) or _blank(platform) or _blank(pc_info_text):
            raise ValidationError("Casual Name, Platform, and PC Info Text are required for update")

        def update(tx: Transaction) -> None:
            repo = ServerRepository(tx)
            state = repo.get_pc_state(pc_id)
            if state is None:
                raise NotFound("Server (pc) not found")
            status = card_status(state["status"], user_name)
            repo.update_card(pc_id, casual_name, pc_info_text, status, user_name or None)
            bench_id = state["bench_id"]
            if bench_id is not None:
                repo.rename_bench(bench_id, casual_name, bench_type or None)
                repo.set_platform(bench_id, platform)

        self.db.transaction(update)
        logger.info(f"Updated server card of PC #{pc_id}")
        return self.get_card(pc_id)

    def delete_card(self, pc_id: int) -> None:
        """
        Delete the PC behind a card; its bench is kept.

        Raises:
            NotFound: If the PC does not exist.
            EntityInUse: If software or licenses still reference the PC.
        """
        try:
            deleted = self.servers.delete_card(pc_id)
        except ConstraintViolation as e:
            if e.constraint_kind is not ConstraintKind.FOREIGN_KEY:
                raise
            raise EntityInUse(
                "Failed to delete server (pc): it is still referenced by other records.",
                detail=e.detail,
            ) from e
        if not deleted:
            raise NotFound("Server (pc) not found or already deleted")
        logger.info(f"Deleted server card of PC #{pc_id}")

    # ── Helpers ───────────────────────────────────────────

    @staticmethod
    def _check_entry(name: str, platform: str, description: str, status: Optional[str]) -> str:
        if _blank(name) or _blank(platform) or _blank(description):
            raise ValidationError("Name, Platform (Category), and Info (Description) are required")
        status = status or "online"
        if status not in SERVER_STATUSES:
            raise ValidationError(f"Status must be one of: {', '.join(SERVER_STATUSES)}")
        return status
