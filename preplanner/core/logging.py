import logging

from preplanner.core.config import settings

FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Namespaced logger (preplanner.<name>) with a single stream handler."""
    logger = logging.getLogger(f"preplanner.{name}")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(FORMAT))
        logger.addHandler(handler)
        logger.setLevel(settings.LOG_LEVEL.upper())
        logger.propagate = False
    return logger


"""
Logging setup and it configures:
- Log format
- Log level (LOG_LEVEL setting, INFO by default)
- Output destination (stderr)

The main purpose:
Standardized application logging.
"""
