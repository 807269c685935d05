"""
Garde d'autorisation par appartenance au projet

L'appartenance est binaire et plate : pas d'admin, pas de rôles. Seule la
liste des membres du projet est consultée, jamais les tâches (être assigné
à une tâche ne donne aucun accès au projet).
"""

from typing import Any, Optional

from domain.entities.project import Project
from domain.exceptions import ForbiddenError


def is_member(caller_id: Any, project: Project) -> bool:
    """Vrai si l'identifiant de l'appelant est égal (en chaîne) à l'une des références membres"""
    if caller_id is None or project is None:
        return False
    caller = str(caller_id)
    return any(str(member_id) == caller for member_id in project.member_ids)


def ensure_member(caller_id: Any, project: Project, message: Optional[str] = None) -> None:
    """Lève ForbiddenError si l'appelant n'est pas membre du projet"""
    if not is_member(caller_id, project):
        raise ForbiddenError(message or "You don't have permission to access this project")
