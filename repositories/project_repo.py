"""
repositories/project_repo.py
-----------------------------
Data access layer for projects.
All SQL queries related to the `projects` table live here.
"""

from typing import Optional

from db.access import Database
from models.project import Project
from utils.logger import get_logger

logger = get_logger(__name__)


class ProjectRepository:
    """Repository for CRUD operations on the projects table."""

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def add(self, project: Project) -> Project:
        """
        Insert a new project.

        Args:
            project: The Project to persist.

        Returns:
            The stored row, re-read by its new id.
        """
        sql = """
            INSERT INTO projects (project_number, project_name)
            VALUES (%s, %s)
            RETURNING project_id;
        """
        project_id = self.db.insert(sql, (project.project_number, project.project_name))
        logger.info(f"Added project '{project.project_name}' #{project_id}")
        return self.get_by_id(project_id)

    # ── READ ──────────────────────────────────────────────

    def get_all(self) -> list[Project]:
        """Get all projects ordered by id."""
        return self.db.query("SELECT * FROM projects ORDER BY project_id;", record=Project)

    def get_by_id(self, project_id: int) -> Optional[Project]:
        """Fetch a single project, or None if it does not exist."""
        return self.db.query_one(
            "SELECT * FROM projects WHERE project_id = %s;", (project_id,), record=Project
        )

    # ── UPDATE ────────────────────────────────────────────

    def update(self, project: Project) -> bool:
        """
        Replace every column of an existing project.

        Returns:
            True if a row was updated, False otherwise.
        """
        sql = """
            UPDATE projects
            SET project_number = %s, project_name = %s
            WHERE project_id = %s;
        """
        return self.db.update(
            sql, (project.project_number, project.project_name, project.project_id)
        ) > 0

    # ── DELETE ────────────────────────────────────────────

    def delete(self, project_id: int) -> bool:
        """Delete a project by ID. Fails if benches still reference it."""
        deleted = self.db.update("DELETE FROM projects WHERE project_id = %s;", (project_id,)) > 0
        if deleted:
            logger.info(f"Deleted project #{project_id}")
        return deleted
