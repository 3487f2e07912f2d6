import logging
import logging.config

from friend_api.config import settings

_configured = False


def build_logging_config() -> dict:
    """Build the dictConfig used by the whole application"""
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
        },
    }
    if settings.LOG_FILE:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "default",
            "filename": settings.LOG_FILE,
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": settings.LOG_FORMAT,
                "datefmt": settings.LOG_DATE_FORMAT,
            },
        },
        "handlers": handlers,
        "root": {
            "handlers": list(handlers),
            "level": settings.LOG_LEVEL,
        },
        "loggers": {
            "pymongo": {"level": "WARNING"},
            "motor": {"level": "WARNING"},
        },
    }


def setup_logging() -> None:
    global _configured
    if _configured:
        return
    logging.config.dictConfig(build_logging_config())
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a module logger, configuring logging on first use"""
    setup_logging()
    return logging.getLogger(name)
