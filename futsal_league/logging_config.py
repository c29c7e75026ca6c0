"""Logging setup for the futsal league scorer.

Every module logs through ``logging.getLogger('futsal_league.<module>')``;
setup_logging() attaches handlers to the shared ``futsal_league`` parent.
"""

import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = 'futsal_league'

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
CONSOLE_FORMAT = '%(levelname)s: %(message)s'


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f'Unknown log level: {level}')
    return resolved


def setup_logging(
    log_dir: Optional[Path] = None,
    level: int | str = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Configure the package logger.

    Calling it again replaces the handlers from the previous call. Console
    output goes to stderr and the file handler appends to
    ``futsal_league_YYYYMMDD.log`` in ``log_dir``.

    Args:
        log_dir: Directory for log files (default: ./logs)
        level: Level as a number or a name such as 'DEBUG'
        log_to_file: Whether to write a log file
        log_to_console: Whether to log to stderr

    Returns:
        The configured 'futsal_league' logger
    """
    level = _resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = []
    if log_to_file:
        log_dir = Path(log_dir or 'logs')
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(
            log_dir / f'{PACKAGE_LOGGER}_{date.today():%Y%m%d}.log', encoding='utf-8'
        )
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        handlers.append(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        handlers.append(console_handler)

    for handler in handlers:
        handler.setLevel(level)
        logger.addHandler(handler)

    logger.debug(f'Logging configured at {logging.getLevelName(level)}')
    return logger


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Logger for ``name``; a child of the package logger when dotted under it."""
    return logging.getLogger(name)
