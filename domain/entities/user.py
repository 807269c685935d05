"""
Entité User - Modèle métier pour les utilisateurs
"""

from datetime import datetime
from typing import List, Optional
from dataclasses import dataclass, field


@dataclass
class User:
    """Entité User du domaine"""
    id: str
    username: str
    email: str
    full_name: str
    hashed_password: str
    refresh_token: Optional[str] = None
    project_ids: List[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    def __post_init__(self):
        """Validation et normalisation de l'entité"""
        self.validate()
        self.username = normalize_identifier(self.username)
        self.email = normalize_identifier(self.email)
        self.full_name = self.full_name.strip()
    
    def validate(self) -> None:
        if not self.username or not self.username.strip():
            raise ValueError("Username cannot be empty")
        if not self.email or not self.email.strip():
            raise ValueError("Email cannot be empty")
        if not self.full_name or not self.full_name.strip():
            raise ValueError("Full name cannot be empty")
        if not self.hashed_password:
            raise ValueError("Hashed password cannot be empty")
    
    def has_project(self, project_id: str) -> bool:
        """Vérifie si le projet figure dans la liste de l'utilisateur"""
        return str(project_id) in (str(pid) for pid in self.project_ids)
    
    def clear_refresh_token(self) -> None:
        """Invalide la session courante"""
        self.refresh_token = None


def normalize_identifier(value: str) -> str:
    """Username et email sont stockés en minuscules, sans espaces autour"""
    return value.strip().lower()
