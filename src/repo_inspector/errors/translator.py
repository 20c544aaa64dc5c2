"""Translate technical errors to user-friendly messages."""

import re
from dataclasses import dataclass
from typing import List, Optional

from .exceptions import (
    GitHubAPIError,
    GitHubNotFoundError,
    InspectorError,
    MissingCredentialError,
    RateLimitError,
)

MISSING_TOKEN = r"MissingCredentialError|token is required"
RATE_LIMITED = r"RateLimitError|rate.*limit|429"
BAD_CREDENTIALS = r"401|Bad credentials"
NOT_FOUND = r"GitHubNotFoundError|404|Not Found"
UNREACHABLE = r"connection.*refused|connection.*timeout|network.*unreachable|Max retries exceeded"


@dataclass
class UserFriendlyError:
    """User-friendly error representation."""
    original_error: Exception
    title: str
    explanation: str
    actions: List[str]
    documentation: Optional[str] = None
    show_technical: bool = False


class ErrorTranslator:
    """Translate technical errors to user-friendly messages."""

    ERROR_PATTERNS = {
        MISSING_TOKEN: {
            "title": "GitHub token is required",
            "explanation": "The analyzers read repository contents through the GitHub API and need a personal access token.",
            "actions": [
                "Use --token flag: repo-inspector lint analyze --token YOUR_TOKEN",
                "Set environment: export GITHUB_TOKEN=YOUR_TOKEN",
                "Create .env file with: GITHUB_TOKEN=YOUR_TOKEN",
            ],
            "documentation": "https://github.com/settings/tokens",
        },

        # Must precede the generic 401/403 pattern below
        RATE_LIMITED: {
            "title": "GitHub API rate limit exceeded",
            "explanation": "Too many requests were made to GitHub. The budget refills when the rate limit window resets.",
            "actions": [
                "Wait a bit and try again",
                "Lower --max-files to analyze fewer files per run",
                "Use an authenticated token for a higher limit",
            ],
        },

        BAD_CREDENTIALS: {
            "title": "GitHub authentication failed",
            "explanation": "Your GitHub personal access token is invalid or lacks required permissions.",
            "actions": [
                "Generate new token: https://github.com/settings/tokens (needs 'repo' scope for private repos)",
                "Check token hasn't expired",
            ],
        },

        NOT_FOUND: {
            "title": "Repository or branch not found",
            "explanation": "GitHub could not find the repository, branch or path. Private repositories also report 404 without access.",
            "actions": [
                "Check --owner, --repo and --branch spelling",
                "Verify the token can read the repository",
            ],
        },

        UNREACHABLE: {
            "title": "Cannot connect to GitHub",
            "explanation": "Unable to reach the GitHub API. This could be a network issue or service outage.",
            "actions": [
                "Check your internet connection",
                "Verify github.base_url in configuration",
                "Try again in a few minutes",
            ],
        },
    }

    @staticmethod
    def _root_cause(error: Exception) -> Exception:
        """Follow ``raise ... from`` links down to the innermost repo-inspector error."""
        while isinstance(error.__cause__, InspectorError):
            error = error.__cause__
        return error

    @staticmethod
    def _classify(error: InspectorError) -> Optional[str]:
        # Type and status only; message text is never consulted
        if isinstance(error, MissingCredentialError):
            return MISSING_TOKEN
        if isinstance(error, RateLimitError):
            return RATE_LIMITED
        if isinstance(error, GitHubNotFoundError):
            return NOT_FOUND
        if isinstance(error, GitHubAPIError):
            if error.status == 429:
                return RATE_LIMITED
            if error.status == 401:
                return BAD_CREDENTIALS
            if isinstance(error.__cause__, OSError):
                return UNREACHABLE
        return None

    def _match(self, error: Exception) -> Optional[str]:
        root = self._root_cause(error)
        if isinstance(root, InspectorError):
            return self._classify(root)

        full_error = f"{type(root).__name__}: {root}"
        for pattern in self.ERROR_PATTERNS:
            if re.search(pattern, full_error, re.IGNORECASE):
                return pattern
        return None

    def translate(self, error: Exception) -> UserFriendlyError:
        """Convert exception to user-friendly format."""
        pattern = self._match(error)
        if pattern is not None:
            translation = self.ERROR_PATTERNS[pattern]
            return UserFriendlyError(
                original_error=error,
                title=translation["title"],
                explanation=translation["explanation"],
                actions=translation["actions"],
                documentation=translation.get("documentation"),
                show_technical=False,
            )

        return UserFriendlyError(
            original_error=error,
            title="Unexpected error",
            explanation=str(error),
            actions=[
                "Re-run with --verbose for details",
            ],
            show_technical=True,
        )

    def format_for_cli(self, friendly_error: UserFriendlyError) -> str:
        """Format error for CLI display (rich markup)."""
        output = f"[bold red]{friendly_error.title}[/]\n\n"
        output += f"{friendly_error.explanation}\n\n"

        output += "[bold]How to fix:[/]\n"
        for i, action in enumerate(friendly_error.actions, 1):
            output += f"  {i}. {action}\n"

        if friendly_error.documentation:
            output += f"\n[dim]Learn more: {friendly_error.documentation}[/]"

        if friendly_error.show_technical:
            output += f"\n\n[dim]Technical details:[/]\n[dim]{friendly_error.original_error}[/]"

        return output
