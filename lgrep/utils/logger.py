"""Logging setup shared by the library and the command line."""

import logging
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "lgrep"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Return a configured logger (creates handlers only once per name).

    Records go to stderr so that search results written to stdout stay
    machine readable.
    """
    from lgrep.utils.config import settings

    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    effective_level = getattr(logging, (level or settings.log_level).upper(), logging.WARNING)
    logger.setLevel(effective_level)
    logger.propagate = False

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    # Optional file handler
    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(fh)

    return logger


def set_level(level: str) -> None:
    """Change the level of every lgrep logger created so far."""
    effective_level = getattr(logging, level.upper(), logging.WARNING)
    for name, logger in logging.root.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and (
            name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + ".")
        ):
            logger.setLevel(effective_level)
