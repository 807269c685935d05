"""
taskboard-api/api/auth.py
Dépendance d'authentification (cookie ou header Authorization)
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from api.responses import ACCESS_TOKEN_COOKIE
from application.services.auth_service import AuthService
from domain.entities import User
from infrastructure.dependencies import get_auth_service

logger = logging.getLogger(__name__)

# Header "Authorization: Bearer <token>", facultatif si le cookie est présent
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/users/login", auto_error=False)


def get_current_user(
    request: Request,
    bearer_token: Optional[str] = Depends(oauth2_scheme),
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """
    Dépendance FastAPI : vérifie l'access token et retourne l'utilisateur.
    Le cookie accessToken est prioritaire sur le header Authorization.
    """
    token = request.cookies.get(ACCESS_TOKEN_COOKIE) or bearer_token
    return auth_service.resolve_access_token(token)
