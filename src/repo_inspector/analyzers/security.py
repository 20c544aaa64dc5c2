"""Security analyzer."""

import logging
from typing import List, Optional

from ..analysis.aggregator import IssueSummary
from ..analysis.issues import Issue, Severity
from ..scanners.security import SECURITY_SCANNER
from .base import AnalysisReport, RepositoryAnalyzer

logger = logging.getLogger(__name__)

SECURITY_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx", ".py", ".java", ".go", ".php", ".rb")

SECRET_FILES = (".env", ".env.local", "config.json", "secrets.json")

# Points deducted per issue of each severity
SCORE_PENALTIES = {
    Severity.CRITICAL: 20,
    Severity.HIGH: 10,
    Severity.MEDIUM: 5,
    Severity.LOW: 2,
}


def calculate_security_score(summary: IssueSummary) -> int:
    """Score from 100 down to 0, clamped."""
    score = 100
    for severity, penalty in SCORE_PENALTIES.items():
        score -= summary.count(severity) * penalty
    return max(0, min(100, score))


class SecurityAnalyzer(RepositoryAnalyzer):
    """Scan sources for injection sinks, hardcoded secrets and weak primitives.

    Also flags well-known secret files committed at the repository root and
    scores the repository 0-100.
    """

    kind = "security"
    severities = (
        Severity.CRITICAL,
        Severity.HIGH,
        Severity.MEDIUM,
        Severity.LOW,
        Severity.INFO,
    )

    def __init__(self, client, **kwargs):
        kwargs.setdefault("extensions", SECURITY_EXTENSIONS)
        super().__init__(client, scanners=(SECURITY_SCANNER,), **kwargs)

    def extra_issues(self, owner: str, repo: str, branch: str, language: Optional[str]) -> List[Issue]:
        issues: List[Issue] = []
        for path in SECRET_FILES:
            if not self._exists(owner, repo, path, branch):
                continue
            logger.info(f"Secret file {path} is committed to the repository")
            issues.append(Issue(
                file_path=path,
                line=0,
                column=0,
                severity=Severity.CRITICAL,
                rule_id="exposed-secrets",
                message="Exposed Secret File",
                category="exposed-secrets",
                title="Exposed Secret File",
                description=f"Secret file {path} is committed to repository",
                cwe="CWE-540",
                recommendation="Remove secret files from repository and add to .gitignore",
            ))
        return issues

    def build_report(self, report: AnalysisReport) -> AnalysisReport:
        report.security_score = calculate_security_score(report.summary)
        return report
