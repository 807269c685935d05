"""
Configuration de la session de base de données SQLAlchemy
"""

from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


def build_engine(database_url: str) -> Engine:
    """Crée le moteur de base de données (SQLite ou PostgreSQL)"""
    if database_url.startswith("sqlite"):
        # Les requêtes FastAPI synchrones tournent dans un pool de threads
        connect_args = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # Base en mémoire : une seule connexion partagée
            return create_engine(database_url, connect_args=connect_args, poolclass=StaticPool)
        return create_engine(database_url, connect_args=connect_args)
    
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    """Crée la session factory liée au moteur"""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db_session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """Ouvre une session et la ferme en fin d'utilisation"""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()
