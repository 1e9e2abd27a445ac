import logging
import sys
from logging.handlers import RotatingFileHandler
from . import settings

CONSOLE_FORMAT = "%(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _console_handler(level: int | str) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _file_handler(level: int | str) -> logging.Handler:
    log_file = settings.LOG_FILE
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_file,
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def setup_logger(name: str = None, log_level: int | str = None) -> logging.Logger:
    """
    Configures `name` (the root logger by default) for a report run: short
    messages on stdout, timestamped lines in the rotating analytics log.
    Calling it again only updates the level.
    """
    logger = logging.getLogger(name)
    level = log_level or settings.LOG_LEVEL
    logger.setLevel(level)

    if logger.handlers:
        return logger

    logger.addHandler(_console_handler(level))
    logger.addHandler(_file_handler(level))
    return logger
