"""
taskboard-api/api/schemas.py
Schémas Pydantic pour la validation et la sérialisation
"""

from typing import Optional, List
from pydantic import BaseModel, Field, field_validator
from datetime import datetime, timezone

from domain.entities import ProjectStatus


def _to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Les dates sont stockées en UTC naïf : une date avec fuseau est convertie"""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class RequestBody(BaseModel):
    """Base des corps de requête : champs inconnus refusés, camelCase ou snake_case acceptés"""

    class Config:
        extra = "forbid"
        populate_by_name = True


# ============================================================================
# UTILISATEURS
# ============================================================================

class RegisterRequest(RequestBody):
    """Schéma pour créer un compte"""
    full_name: Optional[str] = Field(default=None, alias="fullName")
    email: Optional[str] = None
    password: Optional[str] = None
    username: Optional[str] = None


class LoginRequest(RequestBody):
    """Connexion par email ou nom d'utilisateur"""
    email: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None


class RefreshTokenRequest(RequestBody):
    refresh_token: Optional[str] = Field(default=None, alias="refreshToken")


class ChangePasswordRequest(RequestBody):
    old_password: Optional[str] = Field(default=None, alias="oldPassword")
    new_password: Optional[str] = Field(default=None, alias="newPassword")


class UpdateAccountRequest(RequestBody):
    full_name: Optional[str] = Field(default=None, alias="fullName")
    email: Optional[str] = None


class DeleteAccountRequest(RequestBody):
    """Le mot de passe est optionnel ; s'il est fourni il doit être correct"""
    password: Optional[str] = None


class UserResponse(BaseModel):
    """Utilisateur public (sans hash du mot de passe ni refresh token)"""
    id: str
    username: str
    email: str
    full_name: str = Field(serialization_alias="fullName")
    project_ids: List[str] = Field(default_factory=list, serialization_alias="projects")
    created_at: Optional[datetime] = Field(default=None, serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, serialization_alias="updatedAt")

    class Config:
        from_attributes = True


# ============================================================================
# PROJETS
# ============================================================================

class ProjectCreate(RequestBody):
    """Schéma pour créer un projet"""
    name: Optional[str] = None
    description: Optional[str] = None


class ProjectUpdate(RequestBody):
    """Mise à jour partielle : au moins un champ"""
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None


class ProjectStatusUpdate(RequestBody):
    status: Optional[str] = None


class ProjectMemberAdd(RequestBody):
    user_id: Optional[str] = Field(default=None, alias="userId")


class ProjectResponse(BaseModel):
    """Schéma pour retourner un projet (références membres et tâches)"""
    id: str
    name: str
    description: str
    status: ProjectStatus
    member_ids: List[str] = Field(default_factory=list, serialization_alias="members")
    task_ids: List[str] = Field(default_factory=list, serialization_alias="tasks")
    created_at: Optional[datetime] = Field(default=None, serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, serialization_alias="updatedAt")

    class Config:
        from_attributes = True


# ============================================================================
# TÂCHES
# ============================================================================

class TaskCreate(RequestBody):
    """Schéma pour créer une tâche ; le projet vient de l'URL, `project` doit lui correspondre s'il est fourni"""
    name: Optional[str] = None
    description: Optional[str] = None
    assigned_to: Optional[str] = Field(default=None, alias="assignedTo")
    start_time: Optional[datetime] = Field(default=None, alias="startTime")
    end_time: Optional[datetime] = Field(default=None, alias="endTime")
    project: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_times(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _to_naive_utc(value)


class TaskUpdate(TaskCreate):
    """Mise à jour partielle d'une tâche"""


class TaskResponse(BaseModel):
    """Schéma pour retourner une tâche"""
    id: str
    name: str
    description: str
    assigned_to: str = Field(serialization_alias="assignedTo")
    project_id: str = Field(serialization_alias="project")
    start_time: datetime = Field(serialization_alias="startTime")
    end_time: datetime = Field(serialization_alias="endTime")
    created_at: Optional[datetime] = Field(default=None, serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, serialization_alias="updatedAt")

    class Config:
        from_attributes = True


# ============================================================================
# SÉRIALISATION
# ============================================================================

def dump_user(user) -> dict:
    return UserResponse.model_validate(user).model_dump(by_alias=True, mode="json")


def dump_task(task) -> dict:
    return TaskResponse.model_validate(task).model_dump(by_alias=True, mode="json")


def dump_project(project, tasks=None, include_members: bool = True) -> dict:
    """Projet sérialisé ; les tâches résolues remplacent les références si fournies"""
    data = ProjectResponse.model_validate(project).model_dump(by_alias=True, mode="json")
    if tasks is not None:
        data["tasks"] = [dump_task(task) for task in tasks]
    if not include_members:
        data.pop("members", None)
    return data
