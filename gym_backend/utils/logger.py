"""Loguru setup shared by the API, the CLI and the services."""

import sys
from typing import Optional

from loguru import logger
from gym_backend.config import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} - {message}"


def setup_logger(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    json_output: Optional[bool] = None,
):
    """
    Replace loguru's default sink with the configured ones.

    Arguments default to LOG_LEVEL, LOG_FILE and LOG_JSON. An empty ``log_file``
    disables the file sink.
    """
    level = (level or settings.log_level).upper()
    log_file = settings.log_file if log_file is None else log_file
    json_output = settings.log_json if json_output is None else json_output

    logger.remove()
    if json_output:
        logger.add(sys.stdout, level=level, serialize=True)
    else:
        logger.add(sys.stdout, level=level, format=CONSOLE_FORMAT, colorize=True)

    if log_file:
        logger.add(
            log_file,
            level=level,
            format=FILE_FORMAT,
            rotation="10 MB",
            retention="30 days",
            compression="zip",
        )

    return logger


logger = setup_logger()
