import logging.config
import sys
from typing import Optional

from panelgen.core.config import settings

# third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("sqlalchemy.engine", "httpx", "google_genai", "openai")


def configure_logging(level: Optional[str] = None):
    """Console output for everything, plus a rotating file that only collects errors."""
    level = (level or settings.LOG_LEVEL).upper()

    handlers = {
        "console": {
            "level": level,
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "stream": sys.stdout,
        },
        "errors": {
            "level": "ERROR",
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "standard",
            "filename": settings.LOG_FILE,
            "maxBytes": 5 * 1024 * 1024,
            "backupCount": 3,
            "delay": True, # no file until the first error
        },
    }

    loggers = {
        "": {"handlers": ["console", "errors"], "level": level},
    }
    for name in QUIET_LOGGERS:
        loggers[name] = {"handlers": ["console"], "level": "WARNING", "propagate": False}

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": handlers,
        "loggers": loggers,
    })
