"""Rich console logging for the command line tools."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "repo_inspector"


class RepositoryContextFilter(logging.Filter):
    """Prefix records with the ``owner/repo@branch`` being analyzed."""

    def __init__(self, repository: Optional[str] = None):
        super().__init__()
        self.repository = repository

    def filter(self, record: logging.LogRecord) -> bool:
        if self.repository and not getattr(record, "_repo_prefixed", False):
            record.msg = f"[{self.repository}] {record.msg}"
            record._repo_prefixed = True
        return True


def setup_rich_logging(
    log_level: str = "WARNING",
    verbose: bool = False,
    repository: Optional[str] = None,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Install a RichHandler on the package logger.

    Logs go to stderr so machine-readable output on stdout (``--json``)
    stays clean.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        verbose: Force INFO level when the configured level is quieter
        repository: Optional ``owner/repo@branch`` label added to messages
        console: Console to log to (defaults to a stderr console)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = getattr(logging, log_level.upper(), logging.WARNING)
    if verbose:
        level = min(level, logging.INFO)
    logger.setLevel(level)

    # Close existing handlers before clearing (repeated CLI invocations in tests)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    handler.addFilter(RepositoryContextFilter(repository))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
