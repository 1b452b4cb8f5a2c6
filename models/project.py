"""
models/project.py
-----------------
Domain model for projects.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Project:
    """
    A customer/internal project that test benches are booked for.

    Attributes:
        project_id: Database primary key (None for new records).
        project_number: Optional project number (e.g., 'P2023-001').
        project_name: Human-readable project name.
    """
    project_name: str
    project_number: Optional[str] = None
    project_id: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.project_number or '-'} | {self.project_name}"
