"""
TaskService - Service applicatif pour la gestion des tâches d'un projet
"""

import logging
import uuid
from datetime import datetime
from typing import List, Optional
from domain.entities.project import Project
from domain.entities.task import Task
from domain.exceptions import BadRequestError, NotFoundError
from domain.membership import ensure_member
from domain.repositories.project_repository import ProjectRepository
from domain.repositories.task_repository import TaskRepository
from domain.repositories.user_repository import UserRepository
from application.relationships import RelationshipGraph
from application.services.project_service import reject_blank

logger = logging.getLogger(__name__)


def _check_project_ref(project_id: str, project_ref: Optional[str]) -> None:
    if project_ref is not None and str(project_ref).strip() != str(project_id):
        raise BadRequestError("Project in body does not match the URL")


def _check_time_range(start_time: datetime, end_time: datetime) -> None:
    if end_time < start_time:
        raise BadRequestError("End time must be after start time")


class TaskService:
    """Service pour la gestion des tâches"""
    
    def __init__(
        self,
        task_repository: TaskRepository,
        project_repository: ProjectRepository,
        user_repository: UserRepository,
        relationship_graph: RelationshipGraph
    ):
        self.task_repository = task_repository
        self.project_repository = project_repository
        self.user_repository = user_repository
        self.relationship_graph = relationship_graph
    
    def _get_project(self, project_id: str) -> Project:
        project = self.project_repository.find_by_id(project_id)
        if not project:
            raise NotFoundError("Project not found")
        return project
    
    def _ensure_assignee_exists(self, user_id: str) -> None:
        if not self.user_repository.find_by_id(user_id):
            raise NotFoundError("Assigned user not found")
    
    def _get_project_task(self, project_id: str, task_id: str) -> Task:
        if not task_id:
            raise BadRequestError("Task ID is required")
        task = self.task_repository.find_by_id(task_id)
        # Une tâche d'un autre projet est traitée comme introuvable sous cette route
        if not task or str(task.project_id) != str(project_id):
            raise NotFoundError("Task not found")
        return task
    
    def create_task(
        self,
        caller_id: str,
        project_id: str,
        name: str,
        description: str,
        assigned_to: str,
        start_time: datetime,
        end_time: datetime,
        project_ref: Optional[str] = None
    ) -> Task:
        """Crée une tâche et l'ajoute à la liste des tâches du projet"""
        if not all([name, description, assigned_to, project_id, start_time, end_time]):
            raise BadRequestError("All fields are required")
        reject_blank(name=name, description=description, assignee=assigned_to)
        _check_project_ref(project_id, project_ref)
        _check_time_range(start_time, end_time)
        
        project = self._get_project(project_id)
        ensure_member(caller_id, project, "You don't have permission to create tasks for this project")
        self._ensure_assignee_exists(assigned_to)
        
        now = datetime.utcnow()
        task = Task(
            id=str(uuid.uuid4()),
            name=name.strip(),
            description=description.strip(),
            assigned_to=assigned_to,
            project_id=project.id,
            start_time=start_time,
            end_time=end_time,
            created_at=now,
            updated_at=now
        )
        
        task = self.relationship_graph.add_task(project, task)
        logger.info(f"[{project.id}] Task '{task.name}' created")
        return task
    
    def list_tasks(self, caller_id: str, project_id: str) -> List[Task]:
        """Liste les tâches dont la référence projet est project_id"""
        project = self._get_project(project_id)
        ensure_member(caller_id, project, "You don't have permission to view tasks for this project")
        return self.task_repository.find_by_project(project.id)
    
    def update_task(
        self,
        caller_id: str,
        project_id: str,
        task_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        assigned_to: Optional[str] = None,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        project_ref: Optional[str] = None
    ) -> Task:
        """Met à jour les champs fournis d'une tâche"""
        if all(value is None for value in (name, description, assigned_to, start_time, end_time)):
            raise BadRequestError("At least one field is required for update")
        reject_blank(name=name, description=description, assignee=assigned_to)
        _check_project_ref(project_id, project_ref)
        
        task = self._get_project_task(project_id, task_id)
        project = self._get_project(task.project_id)
        ensure_member(caller_id, project, "You don't have permission to update this task")
        
        if assigned_to:
            self._ensure_assignee_exists(assigned_to)
        _check_time_range(start_time or task.start_time, end_time or task.end_time)
        
        if name:
            task.name = name.strip()
        if description:
            task.description = description.strip()
        if assigned_to:
            task.assigned_to = assigned_to
        if start_time:
            task.start_time = start_time
        if end_time:
            task.end_time = end_time
        task.updated_at = datetime.utcnow()
        
        return self.task_repository.save(task)
    
    def delete_task(self, caller_id: str, project_id: str, task_id: str) -> None:
        """Supprime une tâche et sa référence dans le projet"""
        task = self._get_project_task(project_id, task_id)
        project = self._get_project(task.project_id)
        ensure_member(caller_id, project, "You don't have permission to delete this task")
        
        self.relationship_graph.remove_task(project, task.id)
