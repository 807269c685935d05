"""
taskboard-api/api/endpoints.py
Endpoints de l'API : utilisateurs, projets, tâches et export des résumés
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status

from api import schemas
from api.auth import get_current_user
from api.responses import (
    REFRESH_TOKEN_COOKIE, api_response, clear_auth_cookies, csv_attachment, set_auth_cookies
)
from application.services.auth_service import AuthService
from application.services.project_service import ProjectService
from application.services.summary_service import SummaryService
from application.services.task_service import TaskService
from application.services.user_service import UserService
from config import Config
from domain.entities import User
from infrastructure.dependencies import (
    get_auth_service, get_config, get_project_service, get_summary_service,
    get_task_service, get_user_service
)

logger = logging.getLogger(__name__)

user_router = APIRouter(prefix="/users", tags=["Users"])
project_router = APIRouter(prefix="/projects", tags=["Projects"])
task_router = APIRouter(prefix="/projects/{project_id}/tasks", tags=["Tasks"])
summary_router = APIRouter(prefix="/projects/get-summary", tags=["Summary"])


# ============================================================================
# UTILISATEURS
# ============================================================================

@user_router.post("/register", status_code=status.HTTP_201_CREATED)
def register_user(
    body: schemas.RegisterRequest,
    user_service: UserService = Depends(get_user_service)
):
    """Crée un compte utilisateur"""
    user = user_service.register(
        full_name=body.full_name,
        email=body.email,
        password=body.password,
        username=body.username
    )
    return api_response(schemas.dump_user(user), "User registered successfully", status.HTTP_201_CREATED)


@user_router.post("/login")
def login_user(
    body: schemas.LoginRequest,
    user_service: UserService = Depends(get_user_service),
    auth_service: AuthService = Depends(get_auth_service),
    config: Config = Depends(get_config)
):
    """Connexion par email ou nom d'utilisateur, pose les cookies de session"""
    user = user_service.authenticate(body.password, email=body.email, username=body.username)
    tokens = auth_service.issue_tokens(user)

    response = api_response(
        {
            "user": schemas.dump_user(user),
            "accessToken": tokens.access_token,
            "refreshToken": tokens.refresh_token
        },
        "User logged in successfully"
    )
    set_auth_cookies(response, tokens.access_token, tokens.refresh_token, config)
    return response


@user_router.post("/refresh-token")
def refresh_access_token(
    request: Request,
    body: Optional[schemas.RefreshTokenRequest] = None,
    auth_service: AuthService = Depends(get_auth_service),
    config: Config = Depends(get_config)
):
    """Fait tourner access + refresh token (cookie prioritaire sur le corps)"""
    incoming = request.cookies.get(REFRESH_TOKEN_COOKIE) or (body.refresh_token if body else None)
    tokens = auth_service.refresh(incoming)

    response = api_response(
        {"accessToken": tokens.access_token, "refreshToken": tokens.refresh_token},
        "Access token refreshed"
    )
    set_auth_cookies(response, tokens.access_token, tokens.refresh_token, config)
    return response


@user_router.post("/logout")
def logout_user(
    current_user: User = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
    config: Config = Depends(get_config)
):
    """Efface le refresh token enregistré et les cookies"""
    auth_service.revoke(current_user.id)
    response = api_response({}, "User logged out successfully")
    clear_auth_cookies(response, config)
    return response


@user_router.post("/change-password")
def change_password(
    body: schemas.ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
):
    user_service.change_password(current_user.id, body.old_password, body.new_password)
    return api_response({}, "Password changed successfully")


@user_router.patch("/update-account")
def update_account(
    body: schemas.UpdateAccountRequest,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
):
    user = user_service.update_account(current_user.id, body.full_name, body.email)
    return api_response(schemas.dump_user(user), "Account details updated successfully")


@user_router.get("/current-user")
def get_current_user_details(current_user: User = Depends(get_current_user)):
    return api_response(schemas.dump_user(current_user), "Current user fetched successfully")


@user_router.delete("/delete-account")
def delete_account(
    body: Optional[schemas.DeleteAccountRequest] = None,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
    config: Config = Depends(get_config)
):
    """Supprime le compte : tâches assignées supprimées, retrait des projets"""
    user_service.delete_account(current_user.id, body.password if body else None)
    response = api_response({}, "User account deleted successfully")
    clear_auth_cookies(response, config)
    return response


@user_router.get("/get-user-all-projects")
def get_user_all_projects(
    current_user: User = Depends(get_current_user),
    project_service: ProjectService = Depends(get_project_service)
):
    """Projets référencés par l'utilisateur, dans l'ordre de sa liste"""
    projects = project_service.list_owned_projects(current_user.id)
    return api_response(
        [schemas.dump_project(project, include_members=False) for project in projects],
        "User projects fetched successfully"
    )


# ============================================================================
# EXPORT DES RÉSUMÉS (déclaré avant /projects/{project_id})
# ============================================================================

@summary_router.get("")
def get_all_projects_summary(
    current_user: User = Depends(get_current_user),
    summary_service: SummaryService = Depends(get_summary_service)
):
    """CSV de tous les projets dont l'appelant est membre"""
    export = summary_service.export_user_projects(current_user.id)
    return csv_attachment(export.filename, export.path, summary_service.writer)


@summary_router.get("/{project_id}")
def get_project_summary(
    project_id: str,
    current_user: User = Depends(get_current_user),
    summary_service: SummaryService = Depends(get_summary_service)
):
    """CSV d'un projet"""
    export = summary_service.export_project(current_user.id, project_id)
    return csv_attachment(export.filename, export.path, summary_service.writer)


# ============================================================================
# PROJETS
# ============================================================================

@project_router.post("", status_code=status.HTTP_201_CREATED)
def create_project(
    body: schemas.ProjectCreate,
    current_user: User = Depends(get_current_user),
    project_service: ProjectService = Depends(get_project_service)
):
    """Crée un projet, l'appelant en devient le premier membre"""
    project = project_service.create_project(current_user.id, body.name, body.description)
    return api_response(schemas.dump_project(project), "Project created successfully", status.HTTP_201_CREATED)


@project_router.get("")
def list_projects(
    current_user: User = Depends(get_current_user),
    project_service: ProjectService = Depends(get_project_service)
):
    """Projets dont l'appelant est membre, avec leurs tâches"""
    projects = project_service.list_member_projects(current_user.id)
    return api_response(
        [schemas.dump_project(project, tasks) for project, tasks in projects],
        "Projects fetched successfully"
    )


@project_router.get("/{project_id}")
def get_project(
    project_id: str,
    current_user: User = Depends(get_current_user),
    project_service: ProjectService = Depends(get_project_service)
):
    project = project_service.get_project(current_user.id, project_id)
    tasks = project_service.get_project_tasks(project)
    return api_response(schemas.dump_project(project, tasks), "Project fetched successfully")


@project_router.patch("/{project_id}")
def update_project(
    project_id: str,
    body: schemas.ProjectUpdate,
    current_user: User = Depends(get_current_user),
    project_service: ProjectService = Depends(get_project_service)
):
    project = project_service.update_project(
        current_user.id, project_id,
        name=body.name,
        description=body.description,
        status=body.status
    )
    return api_response(schemas.dump_project(project), "Project updated successfully")


@project_router.delete("/{project_id}")
def delete_project(
    project_id: str,
    current_user: User = Depends(get_current_user),
    project_service: ProjectService = Depends(get_project_service)
):
    """Supprime le projet (les tâches du projet sont conservées)"""
    project_service.delete_project(current_user.id, project_id)
    return api_response({}, "Project deleted successfully")


@project_router.patch("/{project_id}/status")
def change_project_status(
    project_id: str,
    body: schemas.ProjectStatusUpdate,
    current_user: User = Depends(get_current_user),
    project_service: ProjectService = Depends(get_project_service)
):
    project = project_service.change_status(current_user.id, project_id, body.status)
    return api_response(schemas.dump_project(project), "Project status updated successfully")


@project_router.post("/{project_id}/members")
def add_project_member(
    project_id: str,
    body: schemas.ProjectMemberAdd,
    current_user: User = Depends(get_current_user),
    project_service: ProjectService = Depends(get_project_service)
):
    project = project_service.add_member(current_user.id, project_id, body.user_id)
    return api_response(schemas.dump_project(project), "Member added successfully")


@project_router.delete("/{project_id}/members/{user_id}")
def remove_project_member(
    project_id: str,
    user_id: str,
    current_user: User = Depends(get_current_user),
    project_service: ProjectService = Depends(get_project_service)
):
    project = project_service.remove_member(current_user.id, project_id, user_id)
    return api_response(schemas.dump_project(project), "Member removed successfully")


# ============================================================================
# TÂCHES
# ============================================================================

@task_router.post("", status_code=status.HTTP_201_CREATED)
def create_task(
    project_id: str,
    body: schemas.TaskCreate,
    current_user: User = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service)
):
    task = task_service.create_task(
        current_user.id, project_id,
        name=body.name,
        description=body.description,
        assigned_to=body.assigned_to,
        start_time=body.start_time,
        end_time=body.end_time,
        project_ref=body.project
    )
    return api_response(schemas.dump_task(task), "Task created successfully", status.HTTP_201_CREATED)


@task_router.get("")
def list_tasks(
    project_id: str,
    current_user: User = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service)
):
    tasks = task_service.list_tasks(current_user.id, project_id)
    return api_response([schemas.dump_task(task) for task in tasks], "Tasks fetched successfully")


@task_router.patch("/{task_id}")
def update_task(
    project_id: str,
    task_id: str,
    body: schemas.TaskUpdate,
    current_user: User = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service)
):
    task = task_service.update_task(
        current_user.id, project_id, task_id,
        name=body.name,
        description=body.description,
        assigned_to=body.assigned_to,
        start_time=body.start_time,
        end_time=body.end_time,
        project_ref=body.project
    )
    return api_response(schemas.dump_task(task), "Task updated successfully")


@task_router.delete("/{task_id}")
def delete_task(
    project_id: str,
    task_id: str,
    current_user: User = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service)
):
    task_service.delete_task(current_user.id, project_id, task_id)
    return api_response({}, "Task deleted successfully")
