"""
Dépendances FastAPI pour l'injection de services
"""

from typing import Generator
from sqlalchemy.orm import Session
from fastapi import Depends, Request

from config import Config
from infrastructure.database.session import get_db_session
from infrastructure.database.repositories import (
    SQLAlchemyUserRepository,
    SQLAlchemyProjectRepository,
    SQLAlchemyTaskRepository
)
from infrastructure.export.csv_writer import CsvSummaryWriter
from infrastructure.security.password_hasher import PasswordHasher
from infrastructure.security.jwt_service import JWTService
from application.relationships import RelationshipGraph
from application.services.auth_service import AuthService
from application.services.user_service import UserService
from application.services.project_service import ProjectService
from application.services.task_service import TaskService
from application.services.summary_service import SummaryService


def get_config(request: Request) -> Config:
    """Dépendance pour obtenir la configuration de l'application"""
    return request.app.state.config


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dépendance pour obtenir une session de base de données"""
    yield from get_db_session(request.app.state.session_factory)


def get_user_repository(db: Session = Depends(get_db)) -> SQLAlchemyUserRepository:
    """Dépendance pour obtenir le UserRepository"""
    return SQLAlchemyUserRepository(db)


def get_project_repository(db: Session = Depends(get_db)) -> SQLAlchemyProjectRepository:
    """Dépendance pour obtenir le ProjectRepository"""
    return SQLAlchemyProjectRepository(db)


def get_task_repository(db: Session = Depends(get_db)) -> SQLAlchemyTaskRepository:
    """Dépendance pour obtenir le TaskRepository"""
    return SQLAlchemyTaskRepository(db)


def get_password_hasher(config: Config = Depends(get_config)) -> PasswordHasher:
    """Dépendance pour obtenir le PasswordHasher"""
    return PasswordHasher(rounds=config.bcrypt_rounds)


def get_access_token_service(config: Config = Depends(get_config)) -> JWTService:
    """JWTService des access tokens"""
    return JWTService(
        secret_key=config.access_token_secret,
        algorithm=config.jwt_algorithm,
        expire_minutes=config.access_token_expire_minutes
    )


def get_refresh_token_service(config: Config = Depends(get_config)) -> JWTService:
    """JWTService des refresh tokens (secret distinct)"""
    return JWTService(
        secret_key=config.refresh_token_secret,
        algorithm=config.jwt_algorithm,
        expire_minutes=config.refresh_token_expire_minutes
    )


def get_summary_writer(config: Config = Depends(get_config)) -> CsvSummaryWriter:
    """Dépendance pour obtenir le writer CSV"""
    return CsvSummaryWriter(export_dir=config.export_dir)


def get_relationship_graph(
    user_repository: SQLAlchemyUserRepository = Depends(get_user_repository),
    project_repository: SQLAlchemyProjectRepository = Depends(get_project_repository),
    task_repository: SQLAlchemyTaskRepository = Depends(get_task_repository)
) -> RelationshipGraph:
    """Dépendance pour obtenir le RelationshipGraph"""
    return RelationshipGraph(user_repository, project_repository, task_repository)


def get_auth_service(
    user_repository: SQLAlchemyUserRepository = Depends(get_user_repository),
    access_tokens: JWTService = Depends(get_access_token_service),
    refresh_tokens: JWTService = Depends(get_refresh_token_service)
) -> AuthService:
    """Dépendance pour obtenir le AuthService"""
    return AuthService(user_repository, access_tokens, refresh_tokens)


def get_user_service(
    user_repository: SQLAlchemyUserRepository = Depends(get_user_repository),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    relationship_graph: RelationshipGraph = Depends(get_relationship_graph)
) -> UserService:
    """Dépendance pour obtenir le UserService"""
    return UserService(user_repository, password_hasher, relationship_graph)


def get_project_service(
    project_repository: SQLAlchemyProjectRepository = Depends(get_project_repository),
    user_repository: SQLAlchemyUserRepository = Depends(get_user_repository),
    task_repository: SQLAlchemyTaskRepository = Depends(get_task_repository),
    relationship_graph: RelationshipGraph = Depends(get_relationship_graph)
) -> ProjectService:
    """Dépendance pour obtenir le ProjectService"""
    return ProjectService(project_repository, user_repository, task_repository, relationship_graph)


def get_task_service(
    task_repository: SQLAlchemyTaskRepository = Depends(get_task_repository),
    project_repository: SQLAlchemyProjectRepository = Depends(get_project_repository),
    user_repository: SQLAlchemyUserRepository = Depends(get_user_repository),
    relationship_graph: RelationshipGraph = Depends(get_relationship_graph)
) -> TaskService:
    """Dépendance pour obtenir le TaskService"""
    return TaskService(task_repository, project_repository, user_repository, relationship_graph)


def get_summary_service(
    project_repository: SQLAlchemyProjectRepository = Depends(get_project_repository),
    task_repository: SQLAlchemyTaskRepository = Depends(get_task_repository),
    user_repository: SQLAlchemyUserRepository = Depends(get_user_repository),
    writer: CsvSummaryWriter = Depends(get_summary_writer)
) -> SummaryService:
    """Dépendance pour obtenir le SummaryService"""
    return SummaryService(project_repository, task_repository, user_repository, writer)
