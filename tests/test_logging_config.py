"""
Tests for logger naming and rich handler setup.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from bindgen.logging_config import get_logger, setup_logging


def test_loggers_nest_under_package():
    assert get_logger().name == "bindgen"
    assert get_logger("bindgen.core.generator").name == "bindgen.core.generator"
    assert get_logger("plugins.qt").name == "bindgen.plugins.qt"


def test_setup_installs_single_rich_handler():
    console = Console(record=True)
    logger = setup_logging(logging.DEBUG, console=console)
    setup_logging(logging.DEBUG, console=console)

    handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
    assert len(handlers) == 1
    assert logger.level == logging.DEBUG
