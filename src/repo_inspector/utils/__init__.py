"""Shared utility functions for repo-inspector."""

from .rich_logging import setup_rich_logging
from .validators import validate_branch_name, validate_owner, validate_repo_name

__all__ = [
    "setup_rich_logging",
    "validate_branch_name",
    "validate_owner",
    "validate_repo_name",
]
