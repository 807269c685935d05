"""
AuthService - Émission, rotation et révocation des tokens
"""

import logging
from dataclasses import dataclass
from typing import Optional
from domain.entities.user import User
from domain.exceptions import InternalServerError, UnauthorizedError
from domain.repositories.user_repository import UserRepository
from infrastructure.security.jwt_service import JWTService

logger = logging.getLogger(__name__)


@dataclass
class TokenPair:
    """Paire access / refresh émise à la connexion"""
    access_token: str
    refresh_token: str


class AuthService:
    """
    Un seul refresh token actif par utilisateur : il est écrasé à chaque
    connexion ou rotation, et effacé à la déconnexion.
    """
    
    def __init__(self, user_repository: UserRepository, access_tokens: JWTService, refresh_tokens: JWTService):
        self.user_repository = user_repository
        self.access_tokens = access_tokens
        self.refresh_tokens = refresh_tokens
    
    def issue_tokens(self, user: User) -> TokenPair:
        """Génère access + refresh token et enregistre le refresh token sur l'utilisateur"""
        try:
            access_token = self.access_tokens.create_token({
                "sub": user.id,
                "email": user.email,
                "username": user.username,
                "full_name": user.full_name
            })
            refresh_token = self.refresh_tokens.create_token({"sub": user.id})
            
            user.refresh_token = refresh_token
            self.user_repository.save(user)
        except Exception as e:
            logger.error(f"Token generation failed for user '{user.id}': {e}", exc_info=True)
            raise InternalServerError("Something went wrong while generating refresh and access tokens")
        
        return TokenPair(access_token=access_token, refresh_token=refresh_token)
    
    def refresh(self, incoming_refresh_token: Optional[str]) -> TokenPair:
        """Vérifie le refresh token présenté et fait tourner les deux tokens"""
        if not incoming_refresh_token:
            raise UnauthorizedError("Unauthorized request")
        
        user_id = self.refresh_tokens.get_subject(incoming_refresh_token)
        if user_id is None:
            raise UnauthorizedError("Invalid refresh token")
        
        user = self.user_repository.find_by_id(user_id)
        if not user:
            raise UnauthorizedError("Invalid refresh token")
        
        if user.refresh_token != incoming_refresh_token:
            logger.warning(f"Refresh token reuse or stale token for user '{user.username}'")
            raise UnauthorizedError("Invalid refresh token")
        
        return self.issue_tokens(user)
    
    def revoke(self, user_id: str) -> None:
        """Efface le refresh token enregistré (sans erreur si aucune session)"""
        user = self.user_repository.find_by_id(user_id)
        if user and user.refresh_token:
            user.clear_refresh_token()
            self.user_repository.save(user)
            logger.info(f"Session revoked for user '{user.username}'")
    
    def resolve_access_token(self, token: Optional[str]) -> User:
        """Retourne l'utilisateur porté par un access token valide"""
        if not token:
            raise UnauthorizedError("Unauthorized request")
        
        try:
            payload = self.access_tokens.decode_token(token)
        except ValueError:
            raise UnauthorizedError("Invalid access token")
        
        user_id = payload.get("sub")
        if user_id is None:
            raise UnauthorizedError("Invalid access token")
        
        user = self.user_repository.find_by_id(user_id)
        if user is None:
            logger.warning(f"JWT invalid: User '{user_id}' not found in DB")
            raise UnauthorizedError("Invalid access token")
        
        return user
