"""Shared test fixtures for unit tests."""

from typing import Dict, Iterable, List, Optional

import pytest

from repo_inspector.errors import GitHubNotFoundError
from repo_inspector.integrations.github.client import CheckAnnotation, ContentEntry


class FakeGitHub:
    """In-memory stand-in for GitHubClient.

    The tree is derived from file paths; directories exist implicitly.
    ``failures`` maps a path to the exception raised when it is listed or
    fetched. Every call is recorded in ``calls`` as ``(op, path)``.
    """

    def __init__(
        self,
        files: Dict[str, str],
        failures: Optional[Dict[str, Exception]] = None,
        annotations: Iterable[CheckAnnotation] = (),
        annotation_error: Optional[Exception] = None,
    ):
        self.files = dict(files)
        self.failures = dict(failures or {})
        self.annotations = list(annotations)
        self.annotation_error = annotation_error
        self.calls: List[tuple] = []

    def list_directory(self, owner, repo, path, ref) -> List[ContentEntry]:
        self.calls.append(("list", path))
        if path in self.failures:
            raise self.failures[path]
        if path in self.files:
            return [ContentEntry(name=path.rsplit("/", 1)[-1], path=path, type="file")]

        prefix = f"{path}/" if path else ""
        children: Dict[str, ContentEntry] = {}
        for file_path in self.files:
            if not file_path.startswith(prefix):
                continue
            head, sep, _ = file_path[len(prefix):].partition("/")
            child = prefix + head
            children.setdefault(
                child, ContentEntry(name=head, path=child, type="dir" if sep else "file")
            )

        if path and not children:
            raise GitHubNotFoundError(f"Not found: {path}", status=404, path=path)
        return list(children.values())

    def get_file_text(self, owner, repo, path, ref) -> Optional[str]:
        self.calls.append(("get", path))
        if path in self.failures:
            raise self.failures[path]
        if path not in self.files:
            raise GitHubNotFoundError(f"Not found: {path}", status=404, path=path)
        return self.files[path]

    def path_exists(self, owner, repo, path, ref) -> bool:
        try:
            self.list_directory(owner, repo, path, ref)
        except GitHubNotFoundError:
            return False
        return True

    def list_check_run_annotations(self, owner, repo, ref, conclusions=("failure", "neutral")):
        self.calls.append(("annotations", ref))
        if self.annotation_error is not None:
            raise self.annotation_error
        return list(self.annotations)

    def fetched(self) -> List[str]:
        return [path for op, path in self.calls if op == "get"]

    def listed(self) -> List[str]:
        return [path for op, path in self.calls if op == "list"]


@pytest.fixture
def fake_github():
    """Factory for FakeGitHub clients."""
    return FakeGitHub
