"""
Initialisation de la base de données
"""

import logging
from sqlalchemy.engine import Engine
from infrastructure.database.models import Base

logger = logging.getLogger(__name__)


def init_db(engine: Engine) -> None:
    """Crée les tables manquantes (pas de migration)"""
    Base.metadata.create_all(bind=engine)
    logger.info("✅ Tables de base de données créées")
