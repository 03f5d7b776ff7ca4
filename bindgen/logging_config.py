"""
Logging setup for bindgen.

All modules obtain their logger through get_logger() so that output is
grouped under the "bindgen" namespace and can be configured in one place.
"""

import logging
from typing import Optional

from rich.logging import RichHandler

ROOT_LOGGER_NAME = "bindgen"

_configured = False


def setup_logging(level: int = logging.INFO, console=None) -> logging.Logger:
    """
    Install a rich handler on the bindgen root logger.

    Args:
        level: Logging level for the bindgen namespace
        console: Optional rich Console to log to

    Returns:
        The configured root logger
    """
    global _configured

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    if not _configured:
        handler = RichHandler(console=console, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        _configured = True

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger nested under the bindgen namespace."""
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
