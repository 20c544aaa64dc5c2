"""Tests for the rate-limited GitHub client."""

import time
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from github import GithubException, RateLimitExceededException, UnknownObjectException

from repo_inspector.errors import GitHubAPIError, GitHubNotFoundError, RateLimitError
from repo_inspector.integrations.github.client import CheckAnnotation, ContentEntry, GitHubClient
from repo_inspector.safeguards.rate_limiter import RateLimiter


def _content(name, path, type="file", decoded=b""):
    return SimpleNamespace(name=name, path=path, type=type, decoded_content=decoded)


def _rate_limited(reset_in=None):
    headers = {"x-ratelimit-remaining": "0"}
    if reset_in is not None:
        headers["x-ratelimit-reset"] = str(int(time.time() + reset_in))
    return RateLimitExceededException(403, {"message": "API rate limit exceeded"}, headers)


@pytest.fixture
def gh():
    gh = MagicMock()
    gh.rate_limiting = (59, 60)
    gh.rate_limiting_resettime = 0
    return gh


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def client(gh, sleeps):
    limiter = RateLimiter(min_interval=0.0)
    return GitHubClient("token", rate_limiter=limiter, sleep=sleeps.append, gh=gh)


@pytest.fixture
def repo(gh):
    return gh.get_repo.return_value


class TestContentReads:
    def test_list_directory_maps_entries(self, client, gh, repo):
        repo.get_contents.return_value = [
            _content("a.js", "src/a.js"),
            _content("lib", "src/lib", type="dir"),
        ]

        entries = client.list_directory("octo", "demo", "src", "main")

        assert entries == [
            ContentEntry(name="a.js", path="src/a.js", type="file"),
            ContentEntry(name="lib", path="src/lib", type="dir"),
        ]
        gh.get_repo.assert_called_once_with("octo/demo", lazy=True)
        repo.get_contents.assert_called_once_with("src", ref="main")

    def test_repository_handle_is_cached(self, client, gh, repo):
        repo.get_contents.return_value = []

        client.list_directory("octo", "demo", "", "main")
        client.list_directory("octo", "demo", "src", "main")

        assert gh.get_repo.call_count == 1

    def test_get_file_text_decodes_utf8(self, client, repo):
        repo.get_contents.return_value = _content("a.js", "a.js", decoded="console.log('é')\n".encode())

        assert client.get_file_text("octo", "demo", "a.js", "main") == "console.log('é')\n"

    def test_get_file_text_returns_none_for_directory(self, client, repo):
        repo.get_contents.return_value = [_content("a.js", "src/a.js")]

        assert client.get_file_text("octo", "demo", "src", "main") is None

    def test_successful_call_syncs_limiter_with_server(self, client, repo):
        repo.get_contents.return_value = []

        client.list_directory("octo", "demo", "", "main")

        # 60 - 59 remaining
        assert client.rate_limiter.request_count == 1


class TestErrors:
    def test_not_found_raises_not_found_error(self, client, repo):
        repo.get_contents.side_effect = UnknownObjectException(404, {"message": "Not Found"}, {})

        with pytest.raises(GitHubNotFoundError) as exc_info:
            client.list_directory("octo", "demo", "missing", "main")

        assert exc_info.value.status == 404
        assert exc_info.value.path == "missing"

    def test_path_exists_false_on_404(self, client, repo):
        repo.get_contents.side_effect = UnknownObjectException(404, {"message": "Not Found"}, {})

        assert client.path_exists("octo", "demo", "tsconfig.json", "main") is False

    def test_path_exists_true(self, client, repo):
        repo.get_contents.return_value = _content("tsconfig.json", "tsconfig.json")

        assert client.path_exists("octo", "demo", "tsconfig.json", "main") is True

    def test_server_error_carries_status(self, client, repo):
        repo.get_contents.side_effect = GithubException(500, {"message": "boom"}, {})

        with pytest.raises(GitHubAPIError) as exc_info:
            client.list_directory("octo", "demo", "src", "main")

        assert exc_info.value.status == 500
        assert not isinstance(exc_info.value, GitHubNotFoundError)

    def test_path_exists_propagates_non_404_errors(self, client, repo):
        repo.get_contents.side_effect = GithubException(500, {"message": "boom"}, {})

        with pytest.raises(GitHubAPIError):
            client.path_exists("octo", "demo", "go.mod", "main")

    def test_network_error_wrapped(self, client, repo):
        repo.get_contents.side_effect = ConnectionError("connection refused")

        with pytest.raises(GitHubAPIError, match="connection refused"):
            client.get_file_text("octo", "demo", "a.js", "main")


class TestRateLimitRetry:
    def test_retries_once_after_reset(self, client, repo, sleeps):
        entry = _content("a.js", "a.js")
        repo.get_contents.side_effect = [_rate_limited(reset_in=30), [entry]]

        entries = client.list_directory("octo", "demo", "", "main")

        assert [e.path for e in entries] == ["a.js"]
        assert repo.get_contents.call_count == 2
        assert len(sleeps) == 1
        assert 0 < sleeps[0] <= 30

    def test_second_rate_limit_raises(self, client, repo, sleeps):
        repo.get_contents.side_effect = [_rate_limited(reset_in=30), _rate_limited(reset_in=30)]

        with pytest.raises(RateLimitError):
            client.list_directory("octo", "demo", "", "main")

        assert repo.get_contents.call_count == 2
        assert len(sleeps) == 1

    def test_no_retry_without_reset_header(self, client, repo, sleeps):
        repo.get_contents.side_effect = _rate_limited()

        with pytest.raises(RateLimitError):
            client.list_directory("octo", "demo", "", "main")

        assert repo.get_contents.call_count == 1
        assert sleeps == []

    def test_no_retry_when_reset_is_too_far(self, client, repo, sleeps):
        repo.get_contents.side_effect = _rate_limited(reset_in=3600)

        with pytest.raises(RateLimitError) as exc_info:
            client.list_directory("octo", "demo", "", "main")

        assert exc_info.value.reset_at is not None
        assert sleeps == []

    def test_rate_limit_error_is_api_error(self, client, repo):
        repo.get_contents.side_effect = _rate_limited()

        with pytest.raises(GitHubAPIError):
            client.list_directory("octo", "demo", "", "main")

    def test_retry_wait_uses_injected_wall_clock(self, gh, repo, sleeps):
        now = lambda: 1000.0
        limiter = RateLimiter(min_interval=0.0, wall_clock=now)
        client = GitHubClient("token", rate_limiter=limiter, sleep=sleeps.append, wall_clock=now, gh=gh)
        headers = {"x-ratelimit-remaining": "0", "x-ratelimit-reset": "1030"}
        repo.get_contents.side_effect = [
            RateLimitExceededException(403, {"message": "API rate limit exceeded"}, headers),
            [_content("a.js", "a.js")],
        ]

        client.list_directory("octo", "demo", "", "main")

        assert sleeps == [30.0]

    def test_exhausted_local_budget_fails_fast(self, gh, sleeps):
        gh.rate_limiting = (-1, -1)
        limiter = RateLimiter(max_requests=1, window_seconds=600.0, min_interval=0.0)
        client = GitHubClient("token", rate_limiter=limiter, max_retry_wait=300.0, sleep=sleeps.append, gh=gh)
        gh.get_repo.return_value.get_contents.return_value = []

        client.list_directory("octo", "demo", "", "main")
        with pytest.raises(RateLimitError):
            client.list_directory("octo", "demo", "src", "main")

        assert sleeps == []


class TestCheckRunAnnotations:
    def test_collects_annotations_from_failed_runs(self, client, repo):
        annotation = SimpleNamespace(
            path="src/a.ts",
            start_line=3,
            start_column=5,
            annotation_level="failure",
            message="TS2322: Type 'string' is not assignable to type 'number'",
            title="tsc",
        )
        failed = MagicMock(conclusion="failure", id=1)
        failed.get_annotations.return_value = [annotation]
        passed = MagicMock(conclusion="success", id=2)
        repo.get_commit.return_value.get_check_runs.return_value = [failed, passed]

        annotations = client.list_check_run_annotations("octo", "demo", "main")

        assert annotations == [CheckAnnotation(
            path="src/a.ts",
            start_line=3,
            start_column=5,
            annotation_level="failure",
            message="TS2322: Type 'string' is not assignable to type 'number'",
            title="tsc",
        )]
        repo.get_commit.assert_called_once_with("main")
        passed.get_annotations.assert_not_called()

    def test_failed_run_fetch_keeps_other_annotations(self, client, repo):
        annotation = SimpleNamespace(
            path="src/a.ts",
            start_line=1,
            start_column=1,
            annotation_level="failure",
            message="TS2304: Cannot find name 'foo'",
            title="",
        )
        first = MagicMock(conclusion="failure", id=1)
        first.get_annotations.return_value = [annotation]
        second = MagicMock(conclusion="failure", id=2)
        second.get_annotations.side_effect = GithubException(500, {"message": "boom"}, {})
        repo.get_commit.return_value.get_check_runs.return_value = [first, second]

        annotations = client.list_check_run_annotations("octo", "demo", "main")

        assert [a.message for a in annotations] == ["TS2304: Cannot find name 'foo'"]
        second.get_annotations.assert_called_once()

    def test_rate_limit_on_run_fetch_aborts(self, client, repo):
        first = MagicMock(conclusion="failure", id=1)
        first.get_annotations.side_effect = _rate_limited()
        second = MagicMock(conclusion="failure", id=2)
        repo.get_commit.return_value.get_check_runs.return_value = [first, second]

        with pytest.raises(RateLimitError):
            client.list_check_run_annotations("octo", "demo", "main")

        second.get_annotations.assert_not_called()

    def test_commit_and_check_runs_count_as_separate_requests(self, gh, repo, sleeps):
        gh.rate_limiting = (-1, -1)
        client = GitHubClient("token", rate_limiter=RateLimiter(min_interval=0.0), sleep=sleeps.append, gh=gh)
        failed = MagicMock(conclusion="failure", id=1)
        failed.get_annotations.return_value = []
        passed = MagicMock(conclusion="success", id=2)
        repo.get_commit.return_value.get_check_runs.return_value = [failed, passed]

        client.list_check_run_annotations("octo", "demo", "main")

        # commit, check runs, annotations of the failed run
        assert client.rate_limiter.request_count == 3
