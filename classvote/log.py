"""Logging configuration.

Records emitted while a ballot is being handled carry the voter's name in
``extra["voter"]`` (see classvote.votes); everything else shows "-".
"""

import sys

from loguru import logger

from classvote.settings import LOG_DIR, LOG_LEVEL

# Loggers whose records go to the log file
PROJECT_MODULES = ("classvote", "api")

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | "
    "<cyan>{extra[voter]}</cyan> | <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {extra[voter]} | {name}:{function}:{line} | {message}"


def is_project_record(record) -> bool:
    """Whether a log record comes from this project rather than a library."""
    name = record["name"] or ""
    return name.split(".")[0] in PROJECT_MODULES


def setup_logging(level: str = LOG_LEVEL, to_file: bool = False):
    """Send logs to stderr and, optionally, to a daily vote log file."""
    logger.remove()
    logger.configure(extra={"voter": "-"})

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if to_file:
        LOG_DIR.mkdir(exist_ok=True)
        logger.add(
            LOG_DIR / "votes_{time:YYYY-MM-DD}.log",
            format=FILE_FORMAT,
            filter=is_project_record,
            level="DEBUG",
            rotation="00:00",
            retention="30 days",
            compression="gz",
        )
        logger.info("Logging votes to {}", LOG_DIR)

    return logger
