"""
services/inventory_service.py
------------------------------
Generic create/read/replace/delete rules shared by every inventory entity
(projects, benches, PCs, VMs, software, licenses, ...).
"""

from typing import Any, Protocol

from db.errors import ConstraintKind, ConstraintViolation, NotFound
from services.errors import EntityInUse
from utils.logger import get_logger

logger = get_logger(__name__)


class InventoryRepository(Protocol):
    """The shape every inventory repository provides."""

    def get_all(self) -> list: ...
    def get_by_id(self, entity_id: int) -> Any: ...
    def add(self, record: Any) -> Any: ...
    def update(self, record: Any) -> bool: ...
    def delete(self, entity_id: int) -> bool: ...


class InventoryService:
    """
    Applies not-found and still-referenced semantics on top of a repository.

    Args:
        repository: Repository for one table.
        label: Human-readable entity name used in messages (e.g. 'Project').
        key: Name of the primary-key attribute on the record (e.g. 'project_id').
    """

    def __init__(self, repository: InventoryRepository, label: str, key: str):
        self.repository = repository
        self.label = label
        self.key = key

    def list_all(self) -> list:
        return self.repository.get_all()

    def get(self, entity_id: int) -> Any:
        """
        Raises:
            NotFound: If no row has this id.
        """
        record = self.repository.get_by_id(entity_id)
        if record is None:
            raise NotFound(f"{self.label} not found")
        return record

    def create(self, record: Any) -> Any:
        """Insert a record and return the stored row."""
        setattr(record, self.key, None)
        return self.repository.add(record)

    def replace(self, entity_id: int, record: Any) -> Any:
        """
        Overwrite every column of an existing row (full-row replace).

        Raises:
            NotFound: If no row has this id.
        """
        setattr(record, self.key, entity_id)
        if not self.repository.update(record):
            raise NotFound(f"{self.label} not found")
        return self.repository.get_by_id(entity_id)

    def remove(self, entity_id: int) -> None:
        """
        Delete a row.

        Raises:
            NotFound: If no row has this id.
            EntityInUse: If other records still reference the row.
        """
        try:
            deleted = self.repository.delete(entity_id)
        except ConstraintViolation as e:
            if e.constraint_kind is not ConstraintKind.FOREIGN_KEY:
                raise
            logger.warning(f"Refused to delete {self.label} #{entity_id}: {e.detail}")
            raise EntityInUse(
                f"Failed to delete {self.label.lower()}: it is still referenced by other records. "
                "Please update or remove associated records first.",
                detail=e.detail,
            ) from e
        if not deleted:
            raise NotFound(f"{self.label} not found or already deleted")
