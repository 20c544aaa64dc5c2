"""Issue records produced by the line scanners."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

REDACTED = "[REDACTED]"


class Severity(str, Enum):
    """Issue severity level.

    Lint and type scanners use error/warning/info; the security scanner uses
    critical/high/medium/low.
    """
    CRITICAL = "critical"  # Security vulnerabilities
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        """Sort key, most severe first."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.CRITICAL: 0,
    Severity.ERROR: 1,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
    Severity.WARNING: 2,
    Severity.LOW: 3,
    Severity.INFO: 4,
}


@dataclass(frozen=True)
class Issue:
    """A single flagged line in one file."""
    file_path: str
    line: int  # 1-based; 0 for file-level issues
    column: int  # 1-based; 0 when the rule has no meaningful position
    severity: Severity
    rule_id: str  # e.g. "no-console", "sql-injection", "TS2571"
    message: str
    source: str = ""
    category: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    cwe: Optional[str] = None
    recommendation: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "file_path": self.file_path,
            "line": self.line,
            "column": self.column,
            "severity": self.severity.value,
            "rule_id": self.rule_id,
            "message": self.message,
            "source": self.source,
            "category": self.category,
            "title": self.title,
            "description": self.description,
            "cwe": self.cwe,
            "recommendation": self.recommendation,
        }
