"""Recursive repository tree crawler over the GitHub contents API."""

import logging
from typing import Iterable, List, Optional, Sequence

from ...errors import GitHubAPIError, RateLimitError
from .client import GitHubClient

logger = logging.getLogger(__name__)

DEFAULT_SKIP_DIRS = ("node_modules",)


class RepositoryCrawler:
    """Enumerate file paths under a repository ref, depth first.

    Hidden directories (leading ``.``) and dependency caches are never
    descended into. Files are filtered by name suffix only; the crawler lists
    directories and never reads file content.
    """

    def __init__(self, client: GitHubClient, skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS):
        self.client = client
        self.skip_dirs = frozenset(skip_dirs)

    def _should_descend(self, name: str) -> bool:
        return not name.startswith(".") and name not in self.skip_dirs

    @staticmethod
    def _matches(name: str, allowed_extensions: Optional[Sequence[str]]) -> bool:
        if allowed_extensions is None:
            return True
        return any(name.endswith(ext) for ext in allowed_extensions)

    def list_files(
        self,
        owner: str,
        repo: str,
        ref: str,
        root_path: str = "",
        allowed_extensions: Optional[Sequence[str]] = None,
    ) -> List[str]:
        """List matching file paths under ``root_path``.

        Args:
            owner: Repository owner
            repo: Repository name
            ref: Branch, tag or commit SHA
            root_path: Directory to start from ("" = repository root)
            allowed_extensions: Filename suffixes to keep (None keeps every file)

        Returns:
            Paths in traversal order: a directory's files and subtrees in the
            order the API listed them

        Raises:
            GitHubAPIError: If the root directory itself cannot be listed
        """
        entries = self.client.list_directory(owner, repo, root_path, ref)
        files: List[str] = []
        self._collect(owner, repo, ref, entries, allowed_extensions, files)
        return files

    def _collect(self, owner, repo, ref, entries, allowed_extensions, files: List[str]) -> None:
        for entry in entries:
            if entry.type == "file":
                if self._matches(entry.name, allowed_extensions):
                    files.append(entry.path)
            elif entry.type == "dir" and self._should_descend(entry.name):
                try:
                    children = self.client.list_directory(owner, repo, entry.path, ref)
                except RateLimitError:
                    raise
                except GitHubAPIError as e:
                    logger.error(f"Error getting source files from {entry.path}: {e}")
                    continue
                self._collect(owner, repo, ref, children, allowed_extensions, files)
