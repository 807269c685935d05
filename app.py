"""
taskboard-api/app.py
Point d'entrée principal de l'API
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import Config
from api.endpoints import project_router, summary_router, task_router, user_router
from api.errors import register_exception_handlers
from infrastructure.database import build_engine, build_session_factory, init_db
from logging_config import setup_logging, setup_colored_logging

SERVICE_NAME = "taskboard-api"
SERVICE_VERSION = "1.0.0"

logger = logging.getLogger("taskboard")


def configure_logging(config: Config) -> logging.Logger:
    """Configure le logging selon la configuration"""
    log_file = config.log_file_path if config.log_file_enabled else None
    if config.log_colored:
        return setup_colored_logging(log_level=config.log_level, log_file=log_file)
    return setup_logging(log_level=config.log_level, log_file=log_file)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Gestion du cycle de vie de l'application"""
    # --- Startup ---
    config: Config = app.state.config
    logger.info(f"🚀 Démarrage de {SERVICE_NAME}")
    logger.info(f"📊 Database: {config.database_url.split('@')[-1]}")
    logger.info(f"📁 Export Directory: {config.export_dir or 'system temp dir'}")

    # Créer les tables manquantes
    init_db(app.state.engine)

    yield

    # --- Shutdown ---
    logger.info(f"🛑 Arrêt de {SERVICE_NAME}")
    app.state.engine.dispose()


def create_app(config: Optional[Config] = None) -> FastAPI:
    """Construit l'application à partir d'une configuration explicite"""
    config = config or Config()

    app = FastAPI(
        title="Taskboard API",
        description="API de gestion de projets et de tâches (utilisateurs, projets, tâches, export CSV)",
        version=SERVICE_VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Stocker la config et la base dans app.state pour accès dans les dépendances
    app.state.config = config
    app.state.engine = build_engine(config.database_url)
    app.state.session_factory = build_session_factory(app.state.engine)

    # Configuration CORS (cookies de session autorisés)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Les routes d'export passent avant /projects/{project_id}
    app.include_router(user_router, prefix=config.api_prefix)
    app.include_router(summary_router, prefix=config.api_prefix)
    app.include_router(project_router, prefix=config.api_prefix)
    app.include_router(task_router, prefix=config.api_prefix)

    @app.get("/", tags=["Root"])
    def root():
        """Page d'accueil de l'API"""
        return {
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "status": "operational",
            "documentation": "/docs"
        }

    @app.get("/health", tags=["System"])
    def health_check():
        """Endpoint de santé pour les orchestrateurs (Kubernetes, Docker, etc.)"""
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "database": app.state.engine.dialect.name
        }

    return app


app_config = Config()
configure_logging(app_config)
app = create_app(app_config)

if __name__ == "__main__":
    import uvicorn
    from logging_config import get_uvicorn_log_config

    log_config = get_uvicorn_log_config(log_level=app_config.log_level)

    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_config=log_config
    )
