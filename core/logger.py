# -*- coding: utf-8 -*-

import sys
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> <level>{level: <7}</level> "
    "<cyan>{name}</cyan> {message} <dim>{extra}</dim>"
)


def setup_logger(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Console sink on stderr; --log-file adds a plain-text copy (rotated at 5 MB)."""
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level.upper(), colorize=True)
    if log_file:
        logger.add(
            log_file,
            format="{time:YYYY-MM-DD HH:mm:ss} {level: <7} {name}:{line} {message} {extra}",
            level=level.upper(),
            rotation="5 MB",
        )
    logger.debug("Logging ready", level=level, log_file=log_file)
