"""
Modèles SQLAlchemy - Tables des utilisateurs, projets, tâches et listes de références
"""

import uuid
import logging
from datetime import datetime
from sqlalchemy import (
    Column, String, Text, Enum, DateTime, Integer, ForeignKey
)
from sqlalchemy.orm import declarative_base, relationship

logger = logging.getLogger(__name__)

Base = declarative_base()


# Listes de références ordonnées.
# Seul le propriétaire de la liste porte une clé étrangère : l'autre côté est
# un identifiant libre, maintenu à la main par RelationshipGraph.

class UserProjectModel(Base):
    """Liste ordonnée des projets d'un utilisateur"""
    __tablename__ = "user_projects"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    project_id = Column(String, index=True, nullable=False)
    position = Column(Integer, nullable=False, default=0)


class ProjectMemberModel(Base):
    """Liste des membres d'un projet"""
    __tablename__ = "project_members"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(String, ForeignKey("projects.id", ondelete="CASCADE"), index=True, nullable=False)
    user_id = Column(String, index=True, nullable=False)
    position = Column(Integer, nullable=False, default=0)


class ProjectTaskModel(Base):
    """Liste ordonnée des tâches d'un projet"""
    __tablename__ = "project_tasks"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(String, ForeignKey("projects.id", ondelete="CASCADE"), index=True, nullable=False)
    task_id = Column(String, index=True, nullable=False)
    position = Column(Integer, nullable=False, default=0)


class UserModel(Base):
    """Modèle SQLAlchemy pour les utilisateurs"""
    __tablename__ = "users"
    
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    refresh_token = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    projects = relationship(
        "UserProjectModel",
        order_by="UserProjectModel.position",
        cascade="all, delete-orphan"
    )


class ProjectModel(Base):
    """Modèle SQLAlchemy pour les projets"""
    __tablename__ = "projects"
    
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    status = Column(
        Enum("active", "completed", "archived", name="project_status"),
        default="active",
        nullable=False,
        index=True
    )
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    members = relationship(
        "ProjectMemberModel",
        order_by="ProjectMemberModel.position",
        cascade="all, delete-orphan"
    )
    tasks = relationship(
        "ProjectTaskModel",
        order_by="ProjectTaskModel.position",
        cascade="all, delete-orphan"
    )


class TaskModel(Base):
    """Modèle SQLAlchemy pour les tâches"""
    __tablename__ = "tasks"
    
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    
    # Références libres (pas de contrainte de clé étrangère)
    assigned_to = Column(String, index=True, nullable=False)
    project_id = Column(String, index=True, nullable=False)
    
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    
    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
