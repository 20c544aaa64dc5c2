"""Tests for rich console logging setup."""

import io
import logging

from rich.console import Console
from rich.logging import RichHandler

from repo_inspector.utils.rich_logging import PACKAGE_LOGGER, setup_rich_logging


def _console():
    buffer = io.StringIO()
    return Console(file=buffer, width=200), buffer


class TestSetupRichLogging:
    def test_installs_single_rich_handler(self):
        console, _ = _console()

        setup_rich_logging(console=console)
        logger = setup_rich_logging(console=console)

        assert logger.name == PACKAGE_LOGGER
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)
        assert logger.propagate is False

    def test_verbose_lowers_level_to_info(self):
        console, _ = _console()

        logger = setup_rich_logging(log_level="WARNING", verbose=True, console=console)

        assert logger.level == logging.INFO

    def test_debug_level_kept_when_verbose(self):
        console, _ = _console()

        logger = setup_rich_logging(log_level="DEBUG", verbose=True, console=console)

        assert logger.level == logging.DEBUG

    def test_repository_prefix(self):
        console, buffer = _console()
        setup_rich_logging(log_level="INFO", repository="octo/demo@main", console=console)

        logging.getLogger(f"{PACKAGE_LOGGER}.analyzers.base").info("Found 3 source files")

        assert "[octo/demo@main] Found 3 source files" in buffer.getvalue()

    def test_below_level_is_suppressed(self):
        console, buffer = _console()
        setup_rich_logging(log_level="WARNING", console=console)

        logging.getLogger(f"{PACKAGE_LOGGER}.crawler").info("progress")

        assert "progress" not in buffer.getvalue()
