"""
RelationshipGraph - Maintien des références croisées User <-> Project <-> Task

Le store n'impose aucune clé étrangère entre les deux côtés d'une relation :
User.project_ids / Project.member_ids et Project.task_ids / Task.project_id
sont écrits à la main. Toute modification d'une relation passe par ce module,
une méthode par arête (membre, tâche) plus les cascades de création et de
suppression.

Chaque étape est une écriture séparée dans le store, sans transaction
multi-documents : un échec entre deux étapes laisse l'état "après étape N-1".
"""

import logging
from typing import List

from domain.entities import Project, Task, User
from domain.repositories import ProjectRepository, TaskRepository, UserRepository

logger = logging.getLogger(__name__)


def _without(ids: List[str], target: str) -> List[str]:
    target = str(target)
    return [i for i in ids if str(i) != target]


class RelationshipGraph:
    """Point d'entrée unique pour les relations membre et tâche"""

    def __init__(
        self,
        user_repository: UserRepository,
        project_repository: ProjectRepository,
        task_repository: TaskRepository
    ):
        self.user_repository = user_repository
        self.project_repository = project_repository
        self.task_repository = task_repository

    # ------------------------------------------------------------------
    # Membres
    # ------------------------------------------------------------------

    def add_member(self, project: Project, user: User) -> Project:
        """Ajoute l'utilisateur aux membres du projet et le projet à la liste de l'utilisateur"""
        if str(user.id) not in (str(m) for m in project.member_ids):
            project.member_ids.append(user.id)
            project = self.project_repository.save(project)

        if not user.has_project(project.id):
            user.project_ids.append(project.id)
            self.user_repository.save(user)

        logger.info(f"[{project.id}] Member '{user.username}' linked")
        return project

    def remove_member(self, project: Project, user_id: str) -> Project:
        """Retire l'utilisateur des membres du projet et le projet de la liste de l'utilisateur"""
        project.member_ids = _without(project.member_ids, user_id)
        project = self.project_repository.save(project)

        user = self.user_repository.find_by_id(user_id)
        if user and user.has_project(project.id):
            user.project_ids = _without(user.project_ids, project.id)
            self.user_repository.save(user)

        logger.info(f"[{project.id}] Member '{user_id}' unlinked")
        return project

    # ------------------------------------------------------------------
    # Tâches
    # ------------------------------------------------------------------

    def add_task(self, project: Project, task: Task) -> Task:
        """Enregistre la tâche puis l'ajoute à la liste des tâches du projet"""
        task.project_id = project.id
        task = self.task_repository.save(task)

        if not project.has_task(task.id):
            project.task_ids.append(task.id)
            self.project_repository.save(project)

        logger.info(f"[{project.id}] Task '{task.id}' linked")
        return task

    def remove_task(self, project: Project, task_id: str) -> None:
        """Supprime la tâche et retire sa référence de la liste du projet"""
        self.task_repository.delete(task_id)

        if project.has_task(task_id):
            project.task_ids = _without(project.task_ids, task_id)
            self.project_repository.save(project)

        logger.info(f"[{project.id}] Task '{task_id}' unlinked")

    # ------------------------------------------------------------------
    # Cascades
    # ------------------------------------------------------------------

    def create_project(self, project: Project, creator: User) -> Project:
        """Le créateur devient l'unique membre du nouveau projet"""
        project.member_ids = []
        project = self.project_repository.save(project)
        return self.add_member(project, creator)

    def delete_project(self, project: Project) -> None:
        """
        Retire le projet de la liste de chaque membre, puis supprime le projet.
        Les tâches du projet ne sont pas supprimées.
        """
        for member_id in project.member_ids:
            user = self.user_repository.find_by_id(member_id)
            if user is None:
                logger.warning(f"[{project.id}] Member '{member_id}' not found while deleting project")
                continue
            user.project_ids = _without(user.project_ids, project.id)
            self.user_repository.save(user)

        self.project_repository.delete(project.id)
        logger.info(f"[{project.id}] Project deleted ({len(project.member_ids)} member(s) updated)")

    def delete_user(self, user: User) -> None:
        """
        Supprime les tâches assignées à l'utilisateur, le retire de chaque projet
        dont il est membre, puis supprime l'utilisateur.

        La liste des tâches des projets n'est pas modifiée : elle garde les
        références des tâches supprimées.
        """
        deleted = self.task_repository.delete_by_assignee(user.id)
        logger.info(f"[{user.id}] {deleted} assigned task(s) deleted")

        for project in self.project_repository.find_by_member(user.id):
            project.member_ids = _without(project.member_ids, user.id)
            self.project_repository.save(project)
            logger.info(f"[{project.id}] User '{user.username}' removed from members")

        self.user_repository.delete(user.id)
        logger.info(f"[{user.id}] User '{user.username}' deleted")
