"""
Entité Task - Modèle métier pour les tâches
"""

from datetime import datetime
from typing import Optional
from dataclasses import dataclass


@dataclass
class Task:
    """Entité Task du domaine"""
    id: str
    name: str
    description: str
    assigned_to: str
    project_id: str
    start_time: datetime
    end_time: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    def __post_init__(self):
        self.validate()
    
    def validate(self) -> None:
        """Validation de l'entité (aussi rejouée avant chaque sauvegarde)"""
        if not self.name or not self.name.strip():
            raise ValueError("Task name cannot be empty")
        if not self.description or not self.description.strip():
            raise ValueError("Task description cannot be empty")
        if not self.assigned_to:
            raise ValueError("Task must be assigned to a user")
        if not self.project_id:
            raise ValueError("Task must belong to a project")
        if self.start_time is None or self.end_time is None:
            raise ValueError("Task start and end times are required")
    
    def duration_hours(self) -> float:
        """Durée de la tâche en heures, arrondie à deux décimales"""
        seconds = (self.end_time - self.start_time).total_seconds()
        return round(seconds / 3600, 2)
    
    def is_completed(self, now: Optional[datetime] = None) -> bool:
        """Une tâche est terminée quand sa date de fin est passée (calculé, jamais stocké)"""
        now = now or datetime.utcnow()
        return self.end_time < now
