"""
Logging Configuration
Sets up the package logger for the command line and GUI entry points.
"""
import logging
import os
import sys
from typing import Optional, Union

from .core.constants import ENV_LOG_LEVEL


def resolve_level(level: Optional[Union[int, str]] = None) -> int:
    """Explicit level first, then the environment, then WARNING."""
    if level is None:
        level = os.environ.get(ENV_LOG_LEVEL, "WARNING")
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: Optional[Union[int, str]] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'shafttorsion' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG or "debug"); defaults to
            $SHAFTTORSION_LOG_LEVEL, then WARNING.
        log_file: Optional path to save logs to a file.
    """
    lvl = resolve_level(level)
    logger = logging.getLogger("shafttorsion")
    logger.setLevel(lvl)

    # Check if handlers already exist to avoid duplicate logs on re-entry
    if logger.hasHandlers():
        for h in list(logger.handlers):
            h.close()
        logger.handlers.clear()

    # stderr keeps stdout clean for the report
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(lvl)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(lvl)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
