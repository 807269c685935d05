"""
Entités du domaine
"""

from domain.entities.user import User, normalize_identifier
from domain.entities.project import Project, ProjectStatus
from domain.entities.task import Task

__all__ = [
    "User",
    "normalize_identifier",
    "Project",
    "ProjectStatus",
    "Task"
]
