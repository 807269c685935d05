"""
Exceptions du domaine - Erreurs typées portant un code HTTP
"""

from typing import Any, List, Optional


class ApiError(Exception):
    """Erreur applicative convertie en enveloppe d'erreur à la frontière HTTP"""

    status_code: int = 500
    default_message: str = "Something went wrong"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Any]] = None,
                 status_code: Optional[int] = None):
        self.message = message or self.default_message
        self.errors = list(errors or [])
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.status_code}, {self.message!r})"


class BadRequestError(ApiError):
    status_code = 400
    default_message = "Bad request"


class UnauthorizedError(ApiError):
    status_code = 401
    default_message = "Unauthorized request"


class ForbiddenError(ApiError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(ApiError):
    status_code = 409
    default_message = "Resource already exists"


class InternalServerError(ApiError):
    status_code = 500
