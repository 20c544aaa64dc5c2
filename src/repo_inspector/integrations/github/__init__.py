"""GitHub REST integration: rate-limited client and tree crawler."""

from .client import CheckAnnotation, ContentEntry, GitHubClient
from .crawler import RepositoryCrawler

__all__ = [
    "CheckAnnotation",
    "ContentEntry",
    "GitHubClient",
    "RepositoryCrawler",
]
