"""
Interface TaskRepository - Définit les opérations d'accès aux données pour Task
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from domain.entities.task import Task


class TaskRepository(ABC):
    """Interface pour le repository des tâches"""
    
    @abstractmethod
    def find_by_id(self, task_id: str) -> Optional[Task]:
        """Trouve une tâche par son ID"""
        pass
    
    @abstractmethod
    def find_by_ids(self, task_ids: List[str]) -> List[Task]:
        """Trouve plusieurs tâches, dans l'ordre des IDs fournis (IDs inconnus ignorés)"""
        pass
    
    @abstractmethod
    def find_by_project(self, project_id: str) -> List[Task]:
        """Trouve les tâches dont la référence projet est project_id"""
        pass
    
    @abstractmethod
    def save(self, task: Task) -> Task:
        """Sauvegarde une tâche (création ou mise à jour)"""
        pass
    
    @abstractmethod
    def delete(self, task_id: str) -> None:
        """Supprime une tâche"""
        pass
    
    @abstractmethod
    def delete_by_assignee(self, user_id: str) -> int:
        """Supprime toutes les tâches assignées à un utilisateur, retourne le nombre supprimé"""
        pass
