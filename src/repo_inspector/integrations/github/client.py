"""Rate-limited GitHub client for repository content reads."""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, TypeVar

from github import Auth, Github, GithubException, RateLimitExceededException, UnknownObjectException
from github.Repository import Repository

from ...core.config import DEFAULT_GITHUB_API
from ...errors import GitHubAPIError, GitHubNotFoundError, RateLimitError
from ...safeguards.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ContentEntry:
    """One item of a directory listing."""
    name: str
    path: str
    type: str  # "file" | "dir" | "symlink" | "submodule"


@dataclass(frozen=True)
class CheckAnnotation:
    """A CI check-run annotation attached to a commit."""
    path: str
    start_line: int
    start_column: int
    annotation_level: str  # "notice" | "warning" | "failure"
    message: str
    title: str = ""


def _header(headers: Optional[dict], name: str) -> Optional[str]:
    if not headers:
        return None
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


class GitHubClient:
    """GitHub API client for repository content reads.

    Every call goes through ``_call``, which waits on the rate limiter,
    records the request, and feeds the response's rate-limit state back.
    """

    def __init__(
        self,
        token: Optional[str],
        rate_limiter: Optional[RateLimiter] = None,
        base_url: str = DEFAULT_GITHUB_API,
        max_retry_wait: float = 300.0,
        sleep: Callable[[float], None] = time.sleep,
        wall_clock: Callable[[], float] = time.time,
        gh: Optional[Github] = None,
    ):
        self.rate_limiter = rate_limiter or RateLimiter()
        self.max_retry_wait = max_retry_wait
        self._sleep = sleep
        self._wall_clock = wall_clock
        # retry=None: rate-limit retries are handled here, once, bounded
        self.gh = gh or Github(
            auth=Auth.Token(token) if token else None,
            base_url=base_url,
            retry=None,
        )
        self._repos: dict[str, Repository] = {}

    def _repo(self, owner: str, repo: str) -> Repository:
        full_name = f"{owner}/{repo}"
        if full_name not in self._repos:
            self._repos[full_name] = self.gh.get_repo(full_name, lazy=True)
        return self._repos[full_name]

    def _sync_rate_limit(self) -> None:
        """Copy the rate-limit headers of the last response into the limiter."""
        try:
            remaining, _limit = self.gh.rate_limiting
            reset = self.gh.rate_limiting_resettime
        except GithubException as e:
            # Servers without rate limiting (some Enterprise installs) reject the lookup
            logger.debug(f"Rate limit state unavailable: {e}")
            return
        self.rate_limiter.apply_server_feedback(
            remaining=remaining if remaining >= 0 else None,
            reset_epoch=reset or None,
        )

    def _sync_from_headers(self, error: GithubException) -> None:
        remaining = _header(error.headers, "x-ratelimit-remaining")
        self.rate_limiter.apply_server_feedback(
            remaining=int(remaining) if remaining is not None and remaining.isdigit() else None,
            reset_epoch=self._reset_epoch(error),
        )

    def _await_slot(self, path: str) -> None:
        delay = self.rate_limiter.time_until_next_slot()
        if delay > self.max_retry_wait:
            raise RateLimitError(
                f"Local rate limit budget exhausted for {delay:.0f}s",
                path=path,
            )
        self.rate_limiter.wait_for_slot(self._sleep)

    def _call(self, fn: Callable[[], T], path: str) -> T:
        """Run one GitHub request with rate limiting and a single bounded retry."""
        self._await_slot(path)
        self.rate_limiter.record_request()
        try:
            try:
                result = fn()
            except RateLimitExceededException as e:
                self._sync_from_headers(e)
                wait = self._retry_wait(e)
                if wait is None:
                    raise RateLimitError(
                        f"GitHub rate limit exceeded for {path}",
                        reset_at=self._reset_epoch(e),
                        path=path,
                    ) from e

                logger.warning(f"Rate limited. Waiting {wait:.0f} seconds before retrying {path}...")
                self._sleep(wait)
                self.rate_limiter.record_request()
                try:
                    result = fn()
                except RateLimitExceededException as retry_error:
                    self._sync_from_headers(retry_error)
                    raise RateLimitError(
                        f"GitHub rate limit exceeded for {path} after retry",
                        reset_at=self._reset_epoch(retry_error),
                        path=path,
                    ) from retry_error
        except UnknownObjectException as e:
            raise GitHubNotFoundError(f"Not found: {path}", status=404, path=path) from e
        except GithubException as e:
            raise GitHubAPIError(
                f"GitHub API error {e.status} for {path}: {e.data}",
                status=e.status,
                path=path,
            ) from e
        except OSError as e:
            # requests' ConnectionError/Timeout are OSError subclasses
            raise GitHubAPIError(f"Request failed for {path}: {e}", path=path) from e

        self._sync_rate_limit()
        return result

    @staticmethod
    def _reset_epoch(error: GithubException) -> Optional[float]:
        reset = _header(error.headers, "x-ratelimit-reset")
        try:
            return float(reset) if reset is not None else None
        except ValueError:
            return None

    def _retry_wait(self, error: GithubException) -> Optional[float]:
        """Seconds to wait before the single retry, or None to give up."""
        reset = self._reset_epoch(error)
        if reset is None:
            return None
        wait = reset - self._wall_clock()
        if 0 < wait <= self.max_retry_wait:
            return wait
        return None

    def list_directory(self, owner: str, repo: str, path: str, ref: str) -> List[ContentEntry]:
        """List one directory. A file path yields a single entry."""
        repository = self._repo(owner, repo)
        contents = self._call(lambda: repository.get_contents(path, ref=ref), path or "/")
        if not isinstance(contents, list):
            contents = [contents]
        return [ContentEntry(name=c.name, path=c.path, type=c.type) for c in contents]

    def get_file_text(self, owner: str, repo: str, path: str, ref: str) -> Optional[str]:
        """Fetch and decode a file. Returns None when ``path`` is a directory."""
        repository = self._repo(owner, repo)
        content = self._call(lambda: repository.get_contents(path, ref=ref), path)
        if isinstance(content, list):
            return None
        return content.decoded_content.decode("utf-8", errors="replace")

    def path_exists(self, owner: str, repo: str, path: str, ref: str) -> bool:
        """Check whether a path exists. 404 is False; other failures propagate."""
        try:
            self.list_directory(owner, repo, path, ref)
        except GitHubNotFoundError:
            return False
        return True

    def list_check_run_annotations(
        self,
        owner: str,
        repo: str,
        ref: str,
        conclusions: Iterable[str] = ("failure", "neutral"),
    ) -> List[CheckAnnotation]:
        """Collect annotations from check runs on ``ref`` with matching conclusions.

        A run whose annotations cannot be fetched is skipped; rate limiting
        still aborts the whole collection.
        """
        repository = self._repo(owner, repo)
        wanted = set(conclusions)
        commit = self._call(lambda: repository.get_commit(ref), f"commit@{ref}")
        # Paginated: each list() counts as one request even past the first page
        check_runs = self._call(lambda: list(commit.get_check_runs()), f"check-runs@{ref}")

        annotations: List[CheckAnnotation] = []
        for check_run in check_runs:
            if check_run.conclusion not in wanted:
                continue
            path = f"check-run/{check_run.id}/annotations"
            try:
                raw = self._call(lambda: list(check_run.get_annotations()), path)
            except RateLimitError:
                raise
            except GitHubAPIError as e:
                logger.warning(f"Skipping annotations of check run {check_run.id}: {e}")
                continue
            for a in raw:
                annotations.append(CheckAnnotation(
                    path=a.path,
                    start_line=a.start_line or 0,
                    start_column=a.start_column or 0,
                    annotation_level=a.annotation_level or "",
                    message=a.message or "",
                    title=a.title or "",
                ))
        return annotations
