"""
SummaryService - Agrégation Projet x Tâche x Assigné pour l'export CSV
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional
from domain.entities.project import Project
from domain.entities.task import Task
from domain.exceptions import NotFoundError
from domain.membership import ensure_member
from domain.repositories.project_repository import ProjectRepository
from domain.repositories.task_repository import TaskRepository
from domain.repositories.user_repository import UserRepository
from infrastructure.export.csv_writer import CsvSummaryWriter

logger = logging.getLogger(__name__)

SUMMARY_HEADER = [
    ("projectName", "Project Name"),
    ("projectDescription", "Project Description"),
    ("projectStatus", "Project Status"),
    ("projectCreatedAt", "Project Created At"),
    ("projectUsers", "Project Users"),
    ("totalTasks", "Total Tasks"),
    ("completedTasks", "Completed Tasks"),
    ("totalHours", "Total Hours"),
    ("taskName", "Task Name"),
    ("taskDescription", "Task Description"),
    ("taskAssignedTo", "Task Assigned To"),
    ("taskStartTime", "Task Start Time"),
    ("taskEndTime", "Task End Time"),
    ("taskDuration", "Task Duration (hours)"),
]

NO_TASKS = "No tasks"
UNASSIGNED = "Unassigned"


@dataclass
class SummaryExport:
    """Fichier CSV prêt à être streamé"""
    filename: str
    path: Path


def _date(value: Optional[datetime]) -> str:
    return value.date().isoformat() if value else ""


def _timestamp(now: datetime) -> str:
    return now.isoformat(timespec="milliseconds").replace(":", "-") + "Z"


def _safe_filename_part(value: str) -> str:
    return re.sub(r"[^A-Za-z0-9._-]+", "-", value).strip("-") or "project"


class SummaryService:
    """Service d'export des résumés de projets"""
    
    def __init__(
        self,
        project_repository: ProjectRepository,
        task_repository: TaskRepository,
        user_repository: UserRepository,
        writer: CsvSummaryWriter
    ):
        self.project_repository = project_repository
        self.task_repository = task_repository
        self.user_repository = user_repository
        self.writer = writer
    
    def build_rows(self, projects: List[Project], now: Optional[datetime] = None) -> List[Dict[str, object]]:
        """
        Une ligne par tâche, ou une ligne "No tasks" pour un projet sans tâche.

        La colonne "Total Hours" est une somme cumulée des durées des tâches du
        projet vues jusqu'ici : elle n'atteint le total du projet qu'à sa
        dernière ligne.
        """
        now = now or datetime.utcnow()
        rows: List[Dict[str, object]] = []
        
        for project in projects:
            members = self.user_repository.find_by_ids(project.member_ids)
            tasks = self.task_repository.find_by_ids(project.task_ids)
            
            base = {
                "projectName": project.name,
                "projectDescription": project.description,
                "projectStatus": project.status.value,
                "projectCreatedAt": _date(project.created_at),
                "projectUsers": ", ".join(user.full_name for user in members),
            }
            
            if not tasks:
                rows.append({
                    **base,
                    "totalTasks": 0,
                    "completedTasks": 0,
                    "totalHours": 0,
                    "taskName": NO_TASKS,
                    "taskDescription": "",
                    "taskAssignedTo": "",
                    "taskStartTime": "",
                    "taskEndTime": "",
                    "taskDuration": "",
                })
                continue
            
            completed = sum(1 for task in tasks if task.is_completed(now))
            assignees = {
                user.id: user.full_name
                for user in self.user_repository.find_by_ids(list({t.assigned_to for t in tasks}))
            }
            
            running_hours = 0.0
            for task in tasks:
                duration = task.duration_hours()
                running_hours += duration
                rows.append({
                    **base,
                    "totalTasks": len(tasks),
                    "completedTasks": completed,
                    "totalHours": f"{running_hours:.2f}",
                    "taskName": task.name,
                    "taskDescription": task.description,
                    "taskAssignedTo": assignees.get(task.assigned_to, UNASSIGNED),
                    "taskStartTime": _date(task.start_time),
                    "taskEndTime": _date(task.end_time),
                    "taskDuration": f"{duration:.2f}",
                })
        
        return rows
    
    def export_user_projects(self, caller_id: str) -> SummaryExport:
        """Exporte le résumé de tous les projets dont l'appelant est membre"""
        user = self.user_repository.find_by_id(caller_id)
        if not user:
            raise NotFoundError("User not found")
        
        projects = self.project_repository.find_by_member(user.id)
        if not projects:
            raise NotFoundError("No projects found")
        
        now = datetime.utcnow()
        prefix = "all-projects-summary"
        path = self.writer.write(prefix, SUMMARY_HEADER, self.build_rows(projects, now))
        return SummaryExport(filename=f"{prefix}-{_timestamp(now)}.csv", path=path)
    
    def export_project(self, caller_id: str, project_id: str) -> SummaryExport:
        """Exporte le résumé d'un projet dont l'appelant est membre"""
        project = self.project_repository.find_by_id(project_id)
        if not project:
            raise NotFoundError("Project not found")
        ensure_member(caller_id, project, "You don't have permission to access this project's summary")
        
        now = datetime.utcnow()
        prefix = f"project-summary-{_safe_filename_part(project.name)}"
        path = self.writer.write(prefix, SUMMARY_HEADER, self.build_rows([project], now))
        logger.info(f"[{project.id}] Summary exported")
        return SummaryExport(filename=f"{prefix}-{_timestamp(now)}.csv", path=path)
