"""
Implémentations des repositories SQLAlchemy
"""

import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from domain.entities import User, Project, Task
from domain.repositories import (
    UserRepository, ProjectRepository, TaskRepository
)
from infrastructure.database.models import (
    UserModel, ProjectModel, ProjectMemberModel, TaskModel
)
from infrastructure.database.mappers import (
    UserMapper, ProjectMapper, TaskMapper
)

logger = logging.getLogger(__name__)


def _in_given_order(models, ids: List[str], mapper) -> list:
    """Réordonne les modèles selon la liste d'IDs (IDs inconnus ignorés, doublons conservés)"""
    by_id = {model.id: model for model in models}
    return [mapper.to_domain(by_id[str(i)]) for i in ids if str(i) in by_id]


class SQLAlchemyUserRepository(UserRepository):
    """Implémentation SQLAlchemy du UserRepository"""
    
    def __init__(self, session: Session):
        self.session = session
    
    def find_by_id(self, user_id: str) -> Optional[User]:
        """Trouve un utilisateur par son ID"""
        model = self.session.query(UserModel).filter(UserModel.id == str(user_id)).first()
        return UserMapper.to_domain(model) if model else None
    
    def find_by_username(self, username: str) -> Optional[User]:
        """Trouve un utilisateur par son nom d'utilisateur"""
        model = self.session.query(UserModel).filter(UserModel.username == username).first()
        return UserMapper.to_domain(model) if model else None
    
    def find_by_email(self, email: str) -> Optional[User]:
        """Trouve un utilisateur par son email"""
        model = self.session.query(UserModel).filter(UserModel.email == email).first()
        return UserMapper.to_domain(model) if model else None
    
    def find_by_ids(self, user_ids: List[str]) -> List[User]:
        """Trouve plusieurs utilisateurs, dans l'ordre des IDs fournis"""
        if not user_ids:
            return []
        models = self.session.query(UserModel).filter(UserModel.id.in_([str(i) for i in user_ids])).all()
        return _in_given_order(models, user_ids, UserMapper)
    
    def save(self, user: User) -> User:
        """Sauvegarde un utilisateur"""
        # Rien n'est écrit si l'entité modifiée est invalide
        user.validate()
        model = self.session.query(UserModel).filter(UserModel.id == user.id).first()
        
        if model:
            model = UserMapper.to_model(user, model)
        else:
            model = UserMapper.to_model(user)
            self.session.add(model)
        
        try:
            self.session.commit()
            self.session.refresh(model)
            return UserMapper.to_domain(model)
        except Exception as e:
            self.session.rollback()
            logger.error(f"Error saving user: {e}")
            raise
    
    def delete(self, user_id: str) -> None:
        """Supprime un utilisateur"""
        model = self.session.query(UserModel).filter(UserModel.id == str(user_id)).first()
        if model:
            self.session.delete(model)
            self.session.commit()


class SQLAlchemyProjectRepository(ProjectRepository):
    """Implémentation SQLAlchemy du ProjectRepository"""
    
    def __init__(self, session: Session):
        self.session = session
    
    def find_by_id(self, project_id: str) -> Optional[Project]:
        """Trouve un projet par son ID"""
        model = self.session.query(ProjectModel).filter(ProjectModel.id == str(project_id)).first()
        return ProjectMapper.to_domain(model) if model else None
    
    def find_by_ids(self, project_ids: List[str]) -> List[Project]:
        """Trouve plusieurs projets, dans l'ordre des IDs fournis"""
        if not project_ids:
            return []
        models = (
            self.session.query(ProjectModel)
            .filter(ProjectModel.id.in_([str(i) for i in project_ids]))
            .all()
        )
        return _in_given_order(models, project_ids, ProjectMapper)
    
    def find_by_member(self, user_id: str) -> List[Project]:
        """Trouve tous les projets dont l'utilisateur est membre"""
        models = (
            self.session.query(ProjectModel)
            .join(ProjectMemberModel, ProjectMemberModel.project_id == ProjectModel.id)
            .filter(ProjectMemberModel.user_id == str(user_id))
            .order_by(ProjectModel.created_at)
            .distinct()
            .all()
        )
        return [ProjectMapper.to_domain(model) for model in models]
    
    def save(self, project: Project) -> Project:
        """Sauvegarde un projet"""
        # Rien n'est écrit si l'entité modifiée est invalide
        project.validate()
        model = self.session.query(ProjectModel).filter(ProjectModel.id == project.id).first()
        
        if model:
            model = ProjectMapper.to_model(project, model)
        else:
            model = ProjectMapper.to_model(project)
            self.session.add(model)
        
        try:
            self.session.commit()
            self.session.refresh(model)
            return ProjectMapper.to_domain(model)
        except Exception as e:
            self.session.rollback()
            logger.error(f"Error saving project: {e}")
            raise
    
    def delete(self, project_id: str) -> None:
        """Supprime un projet (et ses listes de références)"""
        model = self.session.query(ProjectModel).filter(ProjectModel.id == str(project_id)).first()
        if model:
            self.session.delete(model)
            self.session.commit()


class SQLAlchemyTaskRepository(TaskRepository):
    """Implémentation SQLAlchemy du TaskRepository"""
    
    def __init__(self, session: Session):
        self.session = session
    
    def find_by_id(self, task_id: str) -> Optional[Task]:
        """Trouve une tâche par son ID"""
        model = self.session.query(TaskModel).filter(TaskModel.id == str(task_id)).first()
        return TaskMapper.to_domain(model) if model else None
    
    def find_by_ids(self, task_ids: List[str]) -> List[Task]:
        """Trouve plusieurs tâches, dans l'ordre des IDs fournis"""
        if not task_ids:
            return []
        models = self.session.query(TaskModel).filter(TaskModel.id.in_([str(i) for i in task_ids])).all()
        return _in_given_order(models, task_ids, TaskMapper)
    
    def find_by_project(self, project_id: str) -> List[Task]:
        """Trouve les tâches dont la référence projet est project_id"""
        models = (
            self.session.query(TaskModel)
            .filter(TaskModel.project_id == str(project_id))
            .order_by(TaskModel.created_at)
            .all()
        )
        return [TaskMapper.to_domain(model) for model in models]
    
    def save(self, task: Task) -> Task:
        """Sauvegarde une tâche"""
        # Rien n'est écrit si l'entité modifiée est invalide
        task.validate()
        model = self.session.query(TaskModel).filter(TaskModel.id == task.id).first()
        
        if model:
            model = TaskMapper.to_model(task, model)
        else:
            model = TaskMapper.to_model(task)
            self.session.add(model)
        
        try:
            self.session.commit()
            self.session.refresh(model)
            return TaskMapper.to_domain(model)
        except Exception as e:
            self.session.rollback()
            logger.error(f"Error saving task: {e}")
            raise
    
    def delete(self, task_id: str) -> None:
        """Supprime une tâche"""
        model = self.session.query(TaskModel).filter(TaskModel.id == str(task_id)).first()
        if model:
            self.session.delete(model)
            self.session.commit()
    
    def delete_by_assignee(self, user_id: str) -> int:
        """Supprime toutes les tâches assignées à un utilisateur"""
        try:
            deleted = (
                self.session.query(TaskModel)
                .filter(TaskModel.assigned_to == str(user_id))
                .delete(synchronize_session=False)
            )
            self.session.commit()
            return deleted
        except Exception as e:
            self.session.rollback()
            logger.error(f"Error deleting tasks assigned to '{user_id}': {e}")
            raise
