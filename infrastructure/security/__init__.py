"""
Services de sécurité : hachage bcrypt des mots de passe, tokens JWT access / refresh
"""

from infrastructure.security.password_hasher import PasswordHasher
from infrastructure.security.jwt_service import JWTService

__all__ = ["PasswordHasher", "JWTService"]
