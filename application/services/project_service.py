"""
ProjectService - Service applicatif pour la gestion des projets
"""

import logging
import uuid
from datetime import datetime
from typing import List, Optional, Tuple
from domain.entities.project import Project, ProjectStatus
from domain.entities.task import Task
from domain.exceptions import BadRequestError, NotFoundError
from domain.membership import ensure_member, is_member
from domain.repositories.project_repository import ProjectRepository
from domain.repositories.task_repository import TaskRepository
from domain.repositories.user_repository import UserRepository
from application.relationships import RelationshipGraph

logger = logging.getLogger(__name__)


def reject_blank(**fields: Optional[str]) -> None:
    """BadRequestError si un champ fourni ne contient que des espaces"""
    for label, value in fields.items():
        if value is not None and not str(value).strip():
            raise BadRequestError(f"{label.capitalize()} cannot be empty")


def parse_status(value: Optional[str]) -> ProjectStatus:
    """Convertit une valeur brute en ProjectStatus, BadRequestError sinon"""
    try:
        return ProjectStatus(value)
    except ValueError:
        raise BadRequestError("Invalid status value")


class ProjectService:
    """Service pour la gestion des projets"""
    
    def __init__(
        self,
        project_repository: ProjectRepository,
        user_repository: UserRepository,
        task_repository: TaskRepository,
        relationship_graph: RelationshipGraph
    ):
        self.project_repository = project_repository
        self.user_repository = user_repository
        self.task_repository = task_repository
        self.relationship_graph = relationship_graph
    
    def _get_user(self, user_id: str):
        user = self.user_repository.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
    
    def _get_project(self, project_id: str) -> Project:
        if not project_id:
            raise BadRequestError("Project ID is required")
        project = self.project_repository.find_by_id(project_id)
        if not project:
            raise NotFoundError("Project not found")
        return project
    
    def create_project(self, caller_id: str, name: str, description: str) -> Project:
        """Crée un projet dont le créateur est le premier et seul membre"""
        if not name or not name.strip() or not description or not description.strip():
            raise BadRequestError("All fields are required")
        
        creator = self._get_user(caller_id)
        now = datetime.utcnow()
        project = Project(
            id=str(uuid.uuid4()),
            name=name.strip(),
            description=description.strip(),
            status=ProjectStatus.ACTIVE,
            created_at=now,
            updated_at=now
        )
        
        project = self.relationship_graph.create_project(project, creator)
        logger.info(f"✅ Project '{project.name}' created by '{creator.username}'")
        return project
    
    def get_project(self, caller_id: str, project_id: str) -> Project:
        """Récupère un projet si l'appelant en est membre"""
        project = self._get_project(project_id)
        ensure_member(caller_id, project, "You don't have permission to access this project")
        return project
    
    def get_project_tasks(self, project: Project) -> List[Task]:
        """Résout la liste des tâches référencées par le projet (références orphelines ignorées)"""
        return self.task_repository.find_by_ids(project.task_ids)
    
    def list_member_projects(self, caller_id: str) -> List[Tuple[Project, List[Task]]]:
        """Liste les projets dont l'appelant est membre, avec leurs tâches"""
        user = self._get_user(caller_id)
        projects = self.project_repository.find_by_member(user.id)
        return [(project, self.get_project_tasks(project)) for project in projects]
    
    def list_owned_projects(self, caller_id: str) -> List[Project]:
        """Résout la liste de projets portée par l'utilisateur, dans son ordre"""
        user = self._get_user(caller_id)
        return self.project_repository.find_by_ids(user.project_ids)
    
    def update_project(
        self,
        caller_id: str,
        project_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[str] = None
    ) -> Project:
        """Met à jour les champs fournis d'un projet"""
        if name is None and description is None and status is None:
            raise BadRequestError("At least one field is required for update")
        reject_blank(name=name, description=description, status=status)
        new_status = parse_status(status) if status else None
        
        project = self._get_project(project_id)
        ensure_member(caller_id, project, "You don't have permission to update this project")
        
        if name:
            project.name = name.strip()
        if description:
            project.description = description.strip()
        if new_status:
            project.status = new_status
        project.updated_at = datetime.utcnow()
        
        return self.project_repository.save(project)
    
    def change_status(self, caller_id: str, project_id: str, status: Optional[str]) -> Project:
        """Change le statut d'un projet"""
        if not project_id or not status:
            raise BadRequestError("Project ID and status are required")
        new_status = parse_status(status)
        
        project = self._get_project(project_id)
        ensure_member(caller_id, project, "You don't have permission to update this project status")
        
        project.status = new_status
        project.updated_at = datetime.utcnow()
        project = self.project_repository.save(project)
        logger.info(f"[{project.id}] Status changed to '{new_status.value}'")
        return project
    
    def delete_project(self, caller_id: str, project_id: str) -> None:
        """Supprime un projet et le retire des listes de ses membres"""
        project = self._get_project(project_id)
        ensure_member(caller_id, project, "You don't have permission to delete this project")
        self.relationship_graph.delete_project(project)
    
    def add_member(self, caller_id: str, project_id: str, user_id: str) -> Project:
        """Ajoute un utilisateur aux membres (sans doublon)"""
        if not user_id:
            raise BadRequestError("User ID is required")
        
        project = self._get_project(project_id)
        ensure_member(caller_id, project, "You don't have permission to manage this project's members")
        user = self._get_user(user_id)
        
        return self.relationship_graph.add_member(project, user)
    
    def remove_member(self, caller_id: str, project_id: str, user_id: str) -> Project:
        """Retire un utilisateur des membres"""
        project = self._get_project(project_id)
        ensure_member(caller_id, project, "You don't have permission to manage this project's members")
        
        if not is_member(user_id, project):
            raise NotFoundError("User is not a member of this project")
        
        return self.relationship_graph.remove_member(project, user_id)
