"""Error types and user-friendly translation."""

from .exceptions import (
    AnalysisError,
    GitHubAPIError,
    GitHubNotFoundError,
    InspectorError,
    MissingCredentialError,
    RateLimitError,
)
from .translator import ErrorTranslator, UserFriendlyError

__all__ = [
    "AnalysisError",
    "GitHubAPIError",
    "GitHubNotFoundError",
    "InspectorError",
    "MissingCredentialError",
    "RateLimitError",
    "ErrorTranslator",
    "UserFriendlyError",
]
