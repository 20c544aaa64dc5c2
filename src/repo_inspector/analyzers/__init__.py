"""Repository analyzers: one entry point per analysis kind."""

from .base import AnalysisReport, RepositoryAnalyzer
from .lint import LintAnalyzer
from .security import SecurityAnalyzer, calculate_security_score
from .type_errors import TypeErrorAnalyzer

__all__ = [
    "AnalysisReport",
    "RepositoryAnalyzer",
    "LintAnalyzer",
    "SecurityAnalyzer",
    "TypeErrorAnalyzer",
    "calculate_security_score",
]
