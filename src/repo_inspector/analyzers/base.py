"""Analysis orchestration: crawl, scan, aggregate.

Runs are strictly sequential: one remote call at a time, files in crawler
order, issues in per-file scan order. Failures are fail-soft per file and
fail-fast at the top level (the root listing).
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Tuple

from ..analysis.aggregator import IssueSummary, aggregate
from ..analysis.issues import Issue, Severity
from ..errors import AnalysisError, GitHubAPIError, RateLimitError
from ..integrations.github.client import GitHubClient
from ..integrations.github.crawler import DEFAULT_SKIP_DIRS, RepositoryCrawler
from ..scanners.base import LineScanner

logger = logging.getLogger(__name__)


@dataclass
class AnalysisReport:
    """Complete analysis result for one repository ref."""
    repository: str
    branch: str
    kind: str
    issues: List[Issue]
    summary: IssueSummary
    files_discovered: int
    files_analyzed: int
    timestamp: str
    language: Optional[str] = None
    config_files: List[str] = field(default_factory=list)
    security_score: Optional[int] = None

    @property
    def total_errors(self) -> int:
        return self.summary.count(Severity.ERROR)

    @property
    def total_warnings(self) -> int:
        return self.summary.count(Severity.WARNING)

    @property
    def total_info(self) -> int:
        return self.summary.count(Severity.INFO)

    @property
    def critical_count(self) -> int:
        return self.summary.count(Severity.CRITICAL)

    @property
    def blocking_issues(self) -> bool:
        """Check if there are blocking (critical) issues."""
        return self.critical_count > 0

    def issues_with(self, severity: Severity) -> List[Issue]:
        return [i for i in self.issues if i.severity == severity]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "repository": self.repository,
            "branch": self.branch,
            "kind": self.kind,
            "language": self.language,
            "config_files": list(self.config_files),
            "files_discovered": self.files_discovered,
            "files_analyzed": self.files_analyzed,
            "total_issues": self.summary.total,
            "security_score": self.security_score,
            "summary": self.summary.to_dict(),
            "issues": [i.to_dict() for i in self.issues],
            "timestamp": self.timestamp,
        }


class RepositoryAnalyzer:
    """Sequential crawl -> scan -> aggregate pipeline over one repository.

    Subclasses pick the rule tables, the file extensions to crawl, and the
    marker files that identify the project's language or tooling.
    """

    kind = "custom"
    # (path, language) checked in order; the first existing path wins
    marker_files: Tuple[Tuple[str, Optional[str]], ...] = ()
    collect_all_markers = False
    severities: Tuple[Severity, ...] = ()

    def __init__(
        self,
        client: GitHubClient,
        scanners: Sequence[LineScanner] = (),
        extensions: Optional[Sequence[str]] = None,
        max_files: Optional[int] = 50,
        skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
    ):
        """
        Args:
            client: Rate-limited GitHub client shared by every call in the run
            scanners: Rule tables applied to each file
            extensions: Filename suffixes to crawl (None = every file)
            max_files: Upper bound on files fetched and scanned (None = all)
            skip_dirs: Directory names never descended into
        """
        self.client = client
        self.crawler = RepositoryCrawler(client, skip_dirs=skip_dirs)
        self.scanners = tuple(scanners)
        self.extensions = tuple(extensions) if extensions is not None else None
        self.max_files = max_files

    def detect_language(self, owner: str, repo: str, branch: str) -> Tuple[Optional[str], List[str]]:
        """Check marker files in priority order.

        Returns:
            (language of the first marker found, marker paths found)
        """
        language: Optional[str] = None
        found: List[str] = []
        for path, marker_language in self.marker_files:
            if not self._exists(owner, repo, path, branch):
                continue
            found.append(path)
            if language is None:
                language = marker_language
            if not self.collect_all_markers:
                break
        return language, found

    def _exists(self, owner: str, repo: str, path: str, branch: str) -> bool:
        try:
            return self.client.path_exists(owner, repo, path, branch)
        except RateLimitError:
            raise
        except GitHubAPIError as e:
            logger.warning(f"Could not check {path}: {e}")
            return False

    def source_extensions(self, language: Optional[str]) -> Optional[Sequence[str]]:
        return self.extensions

    def analyze_file(self, owner: str, repo: str, path: str, branch: str, language: Optional[str]) -> List[Issue]:
        """Fetch and scan one file. Any fetch failure yields zero issues."""
        scanners = [s for s in self.scanners if s.applies_to(language)]
        if not scanners:
            return []

        try:
            text = self.client.get_file_text(owner, repo, path, branch)
        except RateLimitError:
            raise
        except Exception as e:
            logger.error(f"Error analyzing file {path}: {e}")
            return []

        if text is None:
            return []

        issues: List[Issue] = []
        for scanner in scanners:
            issues.extend(scanner.scan(text, path))
        return issues

    def extra_issues(self, owner: str, repo: str, branch: str, language: Optional[str]) -> List[Issue]:
        """Repository-level issues beyond per-file scanning."""
        return []

    def build_report(self, report: AnalysisReport) -> AnalysisReport:
        """Final hook to decorate the report (scores, metadata)."""
        return report

    def analyze_repository(self, owner: str, repo: str, branch: str = "main") -> AnalysisReport:
        """Run the full pipeline and return an aggregated report.

        Raises:
            AnalysisError: If the repository root cannot be listed or GitHub
                keeps rejecting requests for exceeding the rate limit
        """
        repository = f"{owner}/{repo}"
        try:
            language, config_files = self.detect_language(owner, repo, branch)
            extensions = self.source_extensions(language)

            source_files = self.crawler.list_files(
                owner, repo, branch, allowed_extensions=extensions,
            )
            files_to_analyze = (
                source_files if self.max_files is None else source_files[:self.max_files]
            )
            logger.info(
                f"Found {len(source_files)} source files, "
                f"analyzing first {len(files_to_analyze)}..."
            )

            issues: List[Issue] = []
            for path in files_to_analyze:
                issues.extend(self.analyze_file(owner, repo, path, branch, language))

            issues.extend(self.extra_issues(owner, repo, branch, language))
        except GitHubAPIError as e:
            raise AnalysisError(f"Failed to analyze repository {repository}: {e}") from e

        report = AnalysisReport(
            repository=repository,
            branch=branch,
            kind=self.kind,
            issues=issues,
            summary=aggregate(issues, severities=self.severities),
            files_discovered=len(source_files),
            files_analyzed=len(files_to_analyze),
            timestamp=datetime.now(timezone.utc).isoformat(),
            language=language,
            config_files=config_files,
        )
        return self.build_report(report)
