"""Lint analyzer."""

from ..analysis.issues import Severity
from ..scanners.lint import LINT_SCANNER
from .base import RepositoryAnalyzer

LINT_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx", ".vue", ".py", ".java", ".go")

LINT_CONFIG_FILES = (
    ".eslintrc",
    ".eslintrc.js",
    ".eslintrc.json",
    ".eslintrc.yml",
    "eslint.config.js",
    ".prettierrc",
    ".prettierrc.js",
    ".prettierrc.json",
)


class LintAnalyzer(RepositoryAnalyzer):
    """Flag leftover debugging statements and legacy style in source files.

    Lint configuration files are recorded for the report; they do not change
    which rules run.
    """

    kind = "lint"
    marker_files = tuple((path, None) for path in LINT_CONFIG_FILES)
    collect_all_markers = True
    severities = (Severity.ERROR, Severity.WARNING, Severity.INFO)

    def __init__(self, client, **kwargs):
        kwargs.setdefault("extensions", LINT_EXTENSIONS)
        super().__init__(client, scanners=(LINT_SCANNER,), **kwargs)
