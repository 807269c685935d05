"""
Mappers - Conversion entre modèles SQLAlchemy et entités de domaine
"""

from typing import Optional
from infrastructure.database.models import (
    ProjectModel, ProjectMemberModel, ProjectTaskModel, TaskModel, UserModel, UserProjectModel
)
from domain.entities import Project, ProjectStatus, Task, User


class UserMapper:
    """Mapper entre UserModel et User"""
    
    @staticmethod
    def to_domain(model: UserModel) -> User:
        """Convertit un UserModel en entité User"""
        return User(
            id=model.id,
            username=model.username,
            email=model.email,
            full_name=model.full_name,
            hashed_password=model.hashed_password,
            refresh_token=model.refresh_token,
            project_ids=[link.project_id for link in model.projects],
            created_at=model.created_at,
            updated_at=model.updated_at
        )
    
    @staticmethod
    def to_model(user: User, model: Optional[UserModel] = None) -> UserModel:
        """Convertit une entité User en UserModel"""
        if model is None:
            model = UserModel()
        
        model.id = user.id
        model.username = user.username
        model.email = user.email
        model.full_name = user.full_name
        model.hashed_password = user.hashed_password
        model.refresh_token = user.refresh_token
        model.created_at = user.created_at
        model.updated_at = user.updated_at
        
        current = [link.project_id for link in model.projects]
        if current != list(user.project_ids):
            model.projects = [
                UserProjectModel(project_id=project_id, position=i)
                for i, project_id in enumerate(user.project_ids)
            ]
        
        return model


class ProjectMapper:
    """Mapper entre ProjectModel et Project"""
    
    @staticmethod
    def to_domain(model: ProjectModel) -> Project:
        """Convertit un ProjectModel en entité Project"""
        return Project(
            id=model.id,
            name=model.name,
            description=model.description,
            status=ProjectStatus(model.status or ProjectStatus.ACTIVE.value),
            member_ids=[link.user_id for link in model.members],
            task_ids=[link.task_id for link in model.tasks],
            created_at=model.created_at,
            updated_at=model.updated_at
        )
    
    @staticmethod
    def to_model(project: Project, model: Optional[ProjectModel] = None) -> ProjectModel:
        """Convertit une entité Project en ProjectModel"""
        if model is None:
            model = ProjectModel()
        
        model.id = project.id
        model.name = project.name
        model.description = project.description
        model.status = project.status.value
        model.created_at = project.created_at
        model.updated_at = project.updated_at
        
        if [link.user_id for link in model.members] != list(project.member_ids):
            model.members = [
                ProjectMemberModel(user_id=user_id, position=i)
                for i, user_id in enumerate(project.member_ids)
            ]
        if [link.task_id for link in model.tasks] != list(project.task_ids):
            model.tasks = [
                ProjectTaskModel(task_id=task_id, position=i)
                for i, task_id in enumerate(project.task_ids)
            ]
        
        return model


class TaskMapper:
    """Mapper entre TaskModel et Task"""
    
    @staticmethod
    def to_domain(model: TaskModel) -> Task:
        """Convertit un TaskModel en entité Task"""
        return Task(
            id=model.id,
            name=model.name,
            description=model.description,
            assigned_to=model.assigned_to,
            project_id=model.project_id,
            start_time=model.start_time,
            end_time=model.end_time,
            created_at=model.created_at,
            updated_at=model.updated_at
        )
    
    @staticmethod
    def to_model(task: Task, model: Optional[TaskModel] = None) -> TaskModel:
        """Convertit une entité Task en TaskModel"""
        if model is None:
            model = TaskModel()
        
        model.id = task.id
        model.name = task.name
        model.description = task.description
        model.assigned_to = task.assigned_to
        model.project_id = task.project_id
        model.start_time = task.start_time
        model.end_time = task.end_time
        model.created_at = task.created_at
        model.updated_at = task.updated_at
        
        return model
