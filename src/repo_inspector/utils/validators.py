"""Validation utilities for repository owners, names and branch refs."""

import re


def validate_owner(owner: str) -> str:
    """
    Validate a GitHub user or organization login.

    Raises:
        ValueError: If the login is empty or malformed
    """
    if not owner:
        raise ValueError("Repository owner cannot be empty")

    if not re.match(r'^[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,38})$', owner):
        raise ValueError(f"Invalid repository owner: {owner}")

    return owner


def validate_repo_name(repo: str) -> str:
    """
    Validate a repository name (the part after ``owner/``).

    Raises:
        ValueError: If the name is empty, malformed or a path traversal
    """
    if not repo:
        raise ValueError("Repository name cannot be empty")

    if not re.match(r'^[a-zA-Z0-9_.-]+$', repo):
        raise ValueError(f"Invalid repository name: {repo}")

    if repo in (".", ".."):
        raise ValueError(f"Invalid repository name: {repo}")

    if len(repo) > 100:
        raise ValueError("Repository name too long")

    return repo


def validate_branch_name(branch_name: str) -> str:
    """
    Validate a git branch or tag ref.

    Raises:
        ValueError: If branch name is invalid
    """
    if not branch_name:
        raise ValueError("Branch name cannot be empty")

    if not re.match(r'^[a-zA-Z0-9/._-]+$', branch_name):
        raise ValueError(f"Invalid branch name: {branch_name}")

    if branch_name.startswith('/') or branch_name.endswith('/'):
        raise ValueError("Branch name cannot start or end with /")

    if '..' in branch_name or '@{' in branch_name:
        raise ValueError("Branch name contains invalid sequence")

    if len(branch_name) > 255:
        raise ValueError("Branch name too long")

    return branch_name
