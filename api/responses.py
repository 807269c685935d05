"""
taskboard-api/api/responses.py
Enveloppes de réponse JSON et cookies de session
"""

from pathlib import Path
from typing import Any, List, Optional

from fastapi import status
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.background import BackgroundTask

from config import Config
from infrastructure.export.csv_writer import CsvSummaryWriter

ACCESS_TOKEN_COOKIE = "accessToken"
REFRESH_TOKEN_COOKIE = "refreshToken"


def api_response(data: Any = None, message: str = "Success", status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """Enveloppe de succès : {statusCode, data, message, success}"""
    return JSONResponse(
        status_code=status_code,
        content={
            "statusCode": status_code,
            "data": data,
            "message": message,
            "success": status_code < 400
        }
    )


def error_response(status_code: int, message: str, errors: Optional[List[Any]] = None) -> JSONResponse:
    """Enveloppe d'erreur : {statusCode, message, success: false, errors}"""
    return JSONResponse(
        status_code=status_code,
        content={
            "statusCode": status_code,
            "message": message,
            "success": False,
            "errors": list(errors or [])
        }
    )


def set_auth_cookies(response: JSONResponse, access_token: str, refresh_token: str, config: Config) -> None:
    """Pose les deux cookies de session (http-only)"""
    for name, value in ((ACCESS_TOKEN_COOKIE, access_token), (REFRESH_TOKEN_COOKIE, refresh_token)):
        response.set_cookie(
            key=name,
            value=value,
            httponly=True,
            secure=config.cookie_secure,
            samesite="lax"
        )


def clear_auth_cookies(response: JSONResponse, config: Config) -> None:
    for name in (ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE):
        response.delete_cookie(
            key=name,
            httponly=True,
            secure=config.cookie_secure,
            samesite="lax"
        )


def csv_attachment(filename: str, path: Path, writer: CsvSummaryWriter) -> StreamingResponse:
    """
    Pièce jointe CSV streamée depuis le fichier d'export.

    Le fichier est supprimé par le flux lui-même, et par la tâche de fond
    quand le flux n'a jamais démarré (client déconnecté, envoi en échec).
    """
    return StreamingResponse(
        writer.stream(path),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        background=BackgroundTask(writer.remove, path)
    )
