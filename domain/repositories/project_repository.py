"""
Interface ProjectRepository - Définit les opérations d'accès aux données pour Project
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from domain.entities.project import Project


class ProjectRepository(ABC):
    """Interface pour le repository des projets"""
    
    @abstractmethod
    def find_by_id(self, project_id: str) -> Optional[Project]:
        """Trouve un projet par son ID"""
        pass
    
    @abstractmethod
    def find_by_ids(self, project_ids: List[str]) -> List[Project]:
        """Trouve plusieurs projets, dans l'ordre des IDs fournis (IDs inconnus ignorés)"""
        pass
    
    @abstractmethod
    def find_by_member(self, user_id: str) -> List[Project]:
        """Trouve tous les projets dont l'utilisateur est membre"""
        pass
    
    @abstractmethod
    def save(self, project: Project) -> Project:
        """Sauvegarde un projet (création ou mise à jour)"""
        pass
    
    @abstractmethod
    def delete(self, project_id: str) -> None:
        """Supprime un projet"""
        pass
