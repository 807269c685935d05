"""
Infrastructure Database - Configuration et repositories SQLAlchemy
"""

from infrastructure.database.session import build_engine, build_session_factory, get_db_session
from infrastructure.database.models import Base, ProjectModel, UserModel, TaskModel
from infrastructure.database.repositories import (
    SQLAlchemyUserRepository,
    SQLAlchemyProjectRepository,
    SQLAlchemyTaskRepository
)
from infrastructure.database.init_db import init_db

__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "get_db_session",
    "init_db",
    "ProjectModel",
    "UserModel",
    "TaskModel",
    "SQLAlchemyUserRepository",
    "SQLAlchemyProjectRepository",
    "SQLAlchemyTaskRepository"
]
