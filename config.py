"""
taskboard-api/config.py
Configuration de l'API (construite une seule fois au démarrage)
"""

import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


class Config:
    """
    Configuration explicite de l'application.

    Les valeurs viennent de l'environnement (ou d'un fichier .env) et peuvent
    être surchargées par mot-clé, ce qui permet aux tests de construire une
    configuration isolée : Config(database_url="sqlite://", bcrypt_rounds=4).
    """

    def __init__(self, **overrides):
        # Base de données
        self.database_url: str = os.getenv("DATABASE_URL", "sqlite:///./taskboard.db")

        # JWT (access + refresh, secrets distincts)
        self.access_token_secret: str = os.getenv("ACCESS_TOKEN_SECRET", "dev-access-secret-change-me")
        self.access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))
        self.refresh_token_secret: str = os.getenv("REFRESH_TOKEN_SECRET", "dev-refresh-secret-change-me")
        self.refresh_token_expire_minutes: int = int(os.getenv("REFRESH_TOKEN_EXPIRE_MINUTES", str(10 * 24 * 60)))
        self.jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")

        # Sécurité
        self.bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "12"))
        self.cookie_secure: bool = _env_bool("COOKIE_SECURE", True)

        # HTTP
        self.api_prefix: str = os.getenv("API_PREFIX", "/api/v1")
        self.cors_origins: List[str] = _env_list("CORS_ORIGIN", "http://localhost:3000")

        # Export CSV (None = répertoire temporaire du système)
        self.export_dir: Optional[str] = os.getenv("EXPORT_DIR") or None

        # Logging
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.log_colored: bool = _env_bool("LOG_COLORED", False)
        self.log_file_enabled: bool = _env_bool("LOG_FILE_ENABLED", False)
        self.log_file_path: str = os.getenv("LOG_FILE_PATH", "logs/taskboard-api.log")

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise AttributeError(f"Unknown config option: {key}")
            setattr(self, key, value)

    def __repr__(self) -> str:
        return f"Config(database_url={self.database_url.split('@')[-1]!r}, api_prefix={self.api_prefix!r})"
