import logging
import os

LOG_LEVEL_VARIABLE = "ENVBIND_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a package logger; its level comes from ``ENVBIND_LOG_LEVEL`` (WARNING if unset)."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(_configured_level())
    return logger


def _configured_level() -> int:
    level = logging.getLevelName(os.getenv(LOG_LEVEL_VARIABLE, "WARNING").strip().upper())
    return level if isinstance(level, int) else logging.WARNING
