"""
Entité Project - Modèle métier pour les projets
"""

from datetime import datetime
from typing import List, Optional
from dataclasses import dataclass, field
from enum import Enum


class ProjectStatus(str, Enum):
    """Statut d'un projet"""
    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"

    @classmethod
    def values(cls) -> List[str]:
        return [status.value for status in cls]


@dataclass
class Project:
    """Entité Project du domaine"""
    id: str
    name: str
    description: str
    status: ProjectStatus = ProjectStatus.ACTIVE
    member_ids: List[str] = field(default_factory=list)
    task_ids: List[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    def __post_init__(self):
        self.validate()
        if self.status is None:
            self.status = ProjectStatus.ACTIVE
        elif isinstance(self.status, str):
            self.status = ProjectStatus(self.status)
    
    def validate(self) -> None:
        """Validation de l'entité (aussi rejouée avant chaque sauvegarde)"""
        if not self.name or not self.name.strip():
            raise ValueError("Project name cannot be empty")
        if not self.description or not self.description.strip():
            raise ValueError("Project description cannot be empty")
    
    def has_task(self, task_id: str) -> bool:
        """Vérifie si la tâche est référencée par le projet"""
        return str(task_id) in (str(tid) for tid in self.task_ids)
