"""Exception hierarchy for repository analysis."""

from typing import Optional


class InspectorError(Exception):
    """Base class for all repo-inspector errors."""


class MissingCredentialError(InspectorError):
    """No GitHub token could be resolved; raised before any network call."""

    def __init__(self, message: str = "GitHub token is required"):
        super().__init__(message)


class GitHubAPIError(InspectorError):
    """A GitHub REST call failed with a non-2xx response or transport error."""

    def __init__(self, message: str, status: Optional[int] = None, path: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.path = path


class GitHubNotFoundError(GitHubAPIError):
    """The requested repository, ref or path does not exist (HTTP 404)."""


class RateLimitError(GitHubAPIError):
    """GitHub rejected the request for exceeding the rate limit.

    ``reset_at`` is the epoch second at which GitHub reported the budget
    would refill, when it was available.
    """

    def __init__(self, message: str, reset_at: Optional[float] = None, path: Optional[str] = None):
        super().__init__(message, status=403, path=path)
        self.reset_at = reset_at


class AnalysisError(InspectorError):
    """An analysis run could not complete."""
