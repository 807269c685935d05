"""
Services applicatifs
"""

from application.services.user_service import UserService
from application.services.auth_service import AuthService, TokenPair
from application.services.project_service import ProjectService
from application.services.task_service import TaskService
from application.services.summary_service import SummaryService, SummaryExport

__all__ = [
    "UserService",
    "AuthService",
    "TokenPair",
    "ProjectService",
    "TaskService",
    "SummaryService",
    "SummaryExport"
]
