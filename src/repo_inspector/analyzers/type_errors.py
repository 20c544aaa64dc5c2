"""Type-error analyzer."""

import logging
from typing import List, Optional, Sequence

from ..analysis.issues import Issue, Severity
from ..errors import RateLimitError
from ..scanners.check_runs import annotations_to_issues
from ..scanners.type_safety import TYPE_SCANNER
from .base import RepositoryAnalyzer

logger = logging.getLogger(__name__)

# Checked in this order; the first marker present decides the language
LANGUAGE_MARKERS = (
    ("tsconfig.json", "typescript"),
    ("pyproject.toml", "python"),
    ("pom.xml", "java"),
    ("go.mod", "go"),
    ("package.json", "javascript"),
)

EXTENSIONS_BY_LANGUAGE = {
    "typescript": (".ts", ".tsx"),
    "javascript": (".js", ".jsx"),
    "python": (".py",),
    "java": (".java",),
    "go": (".go",),
}

FALLBACK_EXTENSIONS = (".ts", ".js", ".py")


class TypeErrorAnalyzer(RepositoryAnalyzer):
    """Detect the project language, then flag type-safety escape hatches.

    With ``ci_annotations`` enabled, type errors reported by CI check runs on
    the branch are merged in as well (best effort).
    """

    kind = "types"
    marker_files = LANGUAGE_MARKERS
    severities = (Severity.ERROR, Severity.WARNING)

    def __init__(self, client, ci_annotations: bool = True, **kwargs):
        super().__init__(client, scanners=(TYPE_SCANNER,), **kwargs)
        self.ci_annotations = ci_annotations

    def source_extensions(self, language: Optional[str]) -> Sequence[str]:
        return EXTENSIONS_BY_LANGUAGE.get(language, FALLBACK_EXTENSIONS)

    def extra_issues(self, owner: str, repo: str, branch: str, language: Optional[str]) -> List[Issue]:
        if not self.ci_annotations:
            return []

        try:
            annotations = self.client.list_check_run_annotations(owner, repo, branch)
        except RateLimitError:
            raise
        except Exception as e:
            logger.error(f"CI annotation analysis error: {e}")
            return []

        issues = annotations_to_issues(annotations)
        logger.info(f"{len(issues)} type errors found in {len(annotations)} CI annotations")
        return issues
