"""
taskboard-api/logging_config.py
Configuration du logging
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Les modules de l'application loggent sous leur nom de package
APP_LOGGERS = ["api", "application", "domain", "infrastructure", "taskboard"]
SERVER_LOGGERS = ["uvicorn", "uvicorn.access", "uvicorn.error"]


class ColoredFormatter(logging.Formatter):
    """Formatter avec couleurs pour le terminal"""

    COLORS = {
        'DEBUG': '\033[0;36m',    # Cyan
        'INFO': '\033[0;32m',     # Vert
        'WARNING': '\033[0;33m',  # Jaune
        'ERROR': '\033[0;31m',    # Rouge
        'CRITICAL': '\033[1;31m', # Rouge gras
    }
    RESET = '\033[0m'

    def format(self, record):
        # Copie : le record est partagé avec le handler fichier
        record = logging.makeLogRecord(record.__dict__)
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.RESET}"
        return super().format(record)


def _build_handlers(level: int, console_formatter: logging.Formatter, log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(console_formatter)
    handlers.append(console_handler)

    # Handler fichier (optionnel, jamais coloré)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        handlers.append(file_handler)

    return handlers


def _configure(log_level: str, console_formatter: logging.Formatter, log_file: Optional[str]) -> int:
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    handlers = _build_handlers(numeric_level, console_formatter, log_file)

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
        force=True
    )

    for logger_name in SERVER_LOGGERS:
        log = logging.getLogger(logger_name)
        log.setLevel(numeric_level)
        log.handlers.clear()
        for handler in handlers:
            log.addHandler(handler)
        log.propagate = False

    # Les loggers applicatifs passent par le root
    for logger_name in APP_LOGGERS:
        logging.getLogger(logger_name).setLevel(numeric_level)

    # Réduire la verbosité de SQLAlchemy et watchfiles
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("watchfiles").setLevel(logging.WARNING)

    return numeric_level


def setup_logging(log_level: str = "INFO", log_file: str = None) -> logging.Logger:
    """Configure le logging standard"""
    _configure(log_level, logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT), log_file)
    logger = logging.getLogger("taskboard")
    logger.info("✅ Logging configured")
    return logger


def setup_colored_logging(log_level: str = "INFO", log_file: str = None) -> logging.Logger:
    """Configure le logging avec couleurs (console uniquement)"""
    _configure(log_level, ColoredFormatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT), log_file)
    logger = logging.getLogger("taskboard")
    logger.info("✅ Colored logging configured")
    return logger


def get_uvicorn_log_config(log_level: str = "INFO") -> dict:
    """Configuration de logging pour Uvicorn"""
    level = log_level.upper()
    server_loggers = {
        name: {"handlers": ["default"], "level": level, "propagate": False}
        for name in SERVER_LOGGERS
    }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": LOG_FORMAT,
                "datefmt": LOG_DATE_FORMAT,
            },
        },
        "handlers": {
            "default": {
                "formatter": "default",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            **server_loggers,
            "watchfiles": {
                "handlers": ["default"],
                "level": "WARNING",
                "propagate": False
            },
        },
    }
