"""
UserService - Service applicatif pour la gestion des utilisateurs
"""

import logging
import uuid
from datetime import datetime
from typing import Optional
from domain.entities.user import User, normalize_identifier
from domain.exceptions import BadRequestError, ConflictError, NotFoundError, UnauthorizedError
from domain.repositories.user_repository import UserRepository
from application.relationships import RelationshipGraph
from infrastructure.security.password_hasher import PasswordHasher

logger = logging.getLogger(__name__)


def _is_blank(*values) -> bool:
    return any(value is None or not str(value).strip() for value in values)


class UserService:
    """Service pour la gestion des utilisateurs"""
    
    def __init__(
        self,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        relationship_graph: RelationshipGraph
    ):
        self.user_repository = user_repository
        self.password_hasher = password_hasher
        self.relationship_graph = relationship_graph
    
    def register(self, full_name: str, email: str, password: str, username: str) -> User:
        """Crée un nouvel utilisateur"""
        if _is_blank(full_name, email, password, username):
            raise BadRequestError("All fields are required")
        
        email = normalize_identifier(email)
        username = normalize_identifier(username)
        
        # Vérifier si l'utilisateur existe déjà
        if self.user_repository.find_by_email(email) or self.user_repository.find_by_username(username):
            raise ConflictError("User with this email or username already exists")
        
        now = datetime.utcnow()
        user = User(
            id=str(uuid.uuid4()),
            username=username,
            email=email,
            full_name=full_name,
            hashed_password=self.password_hasher.hash(password),
            created_at=now,
            updated_at=now
        )
        
        user = self.user_repository.save(user)
        logger.info(f"User '{user.username}' registered")
        return user
    
    def authenticate(self, password: str, email: Optional[str] = None, username: Optional[str] = None) -> User:
        """Authentifie un utilisateur par email ou nom d'utilisateur"""
        if _is_blank(email) and _is_blank(username):
            raise BadRequestError("Username or email is required")
        if _is_blank(password):
            raise BadRequestError("Password is required")
        
        user = None
        if not _is_blank(email):
            user = self.user_repository.find_by_email(normalize_identifier(email))
        if user is None and not _is_blank(username):
            user = self.user_repository.find_by_username(normalize_identifier(username))
        
        if not user:
            logger.warning(f"Authentication failed: User '{email or username}' not found")
            raise NotFoundError("User not found")
        
        if not self.password_hasher.verify(password, user.hashed_password):
            logger.warning(f"Authentication failed: Invalid password for user '{user.username}'")
            raise UnauthorizedError("Password is incorrect")
        
        logger.info(f"Authentication success: User '{user.username}' authenticated")
        return user
    
    def get_user(self, user_id: str) -> User:
        """Récupère un utilisateur par son ID"""
        user = self.user_repository.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
    
    def change_password(self, user_id: str, old_password: str, new_password: str) -> User:
        """Change le mot de passe après vérification de l'ancien"""
        if _is_blank(old_password, new_password):
            raise BadRequestError("Old and new passwords are required")
        
        user = self.get_user(user_id)
        if not self.password_hasher.verify(old_password, user.hashed_password):
            logger.warning(f"Password change refused for user '{user.username}': invalid old password")
            raise UnauthorizedError("Invalid old password")
        
        user.hashed_password = self.password_hasher.hash(new_password)
        user.updated_at = datetime.utcnow()
        user = self.user_repository.save(user)
        logger.info(f"Password changed for user '{user.username}'")
        return user
    
    def update_account(self, user_id: str, full_name: str, email: str) -> User:
        """Met à jour le nom complet et l'email"""
        if _is_blank(full_name, email):
            raise BadRequestError("All fields are required")
        
        user = self.get_user(user_id)
        email = normalize_identifier(email)
        
        existing = self.user_repository.find_by_email(email)
        if existing and existing.id != user.id:
            raise ConflictError("Email is already used by another account")
        
        user.full_name = full_name.strip()
        user.email = email
        user.updated_at = datetime.utcnow()
        return self.user_repository.save(user)
    
    def delete_account(self, user_id: str, password: Optional[str] = None) -> None:
        """Supprime le compte et ses dépendances (tâches assignées, appartenances)"""
        user = self.get_user(user_id)
        
        # Mot de passe optionnel : vérifié seulement s'il est fourni
        if password and not self.password_hasher.verify(password, user.hashed_password):
            raise UnauthorizedError("Invalid password")
        
        self.relationship_graph.delete_user(user)
