"""Issue aggregation: fold a flat issue list into count summaries.

Counts are keyed by file, rule, category and severity. The fold is pure and
order independent; only the insertion order of keys (and therefore tie
order in ``top_n``) follows the input order.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .issues import Issue, Severity


@dataclass
class IssueSummary:
    """Count summaries for one analysis run."""
    by_file: Dict[str, int] = field(default_factory=dict)
    by_rule: Dict[str, int] = field(default_factory=dict)
    by_category: Dict[str, int] = field(default_factory=dict)
    by_severity: Dict[str, int] = field(default_factory=dict)
    total: int = 0

    def count(self, severity: Severity) -> int:
        return self.by_severity.get(severity.value, 0)

    @property
    def severity_summary(self) -> str:
        """Human-readable severity summary, most severe first."""
        ordered = sorted(
            ((Severity(name), n) for name, n in self.by_severity.items() if n > 0),
            key=lambda item: item[0].rank,
        )
        parts = [f"{n} {sev.value}" for sev, n in ordered]
        return ", ".join(parts) if parts else "no issues"

    def to_dict(self) -> dict:
        return {
            "by_file": dict(self.by_file),
            "by_rule": dict(self.by_rule),
            "by_category": dict(self.by_category),
            "by_severity": dict(self.by_severity),
            "total": self.total,
        }


def aggregate(
    issues: Iterable[Issue],
    severities: Iterable[Severity] = (),
) -> IssueSummary:
    """Fold issues into per-file, per-rule, per-category and per-severity counts.

    Args:
        issues: Issue records from any number of files
        severities: Severity levels to pre-seed with zero so they always
            appear in ``by_severity``

    Returns:
        IssueSummary whose ``by_severity`` values sum to the number of issues
    """
    by_file: Counter = Counter()
    by_rule: Counter = Counter()
    by_category: Counter = Counter()
    by_severity: Dict[str, int] = {s.value: 0 for s in severities}

    total = 0
    for issue in issues:
        total += 1
        by_file[issue.file_path] += 1
        by_rule[issue.rule_id] += 1
        by_category[issue.category or issue.rule_id] += 1
        by_severity[issue.severity.value] = by_severity.get(issue.severity.value, 0) + 1

    return IssueSummary(
        by_file=dict(by_file),
        by_rule=dict(by_rule),
        by_category=dict(by_category),
        by_severity=by_severity,
        total=total,
    )


def top_n(counts: Dict[str, int], n: Optional[int] = None) -> List[Tuple[str, int]]:
    """Entries by descending count.

    Ties keep the mapping's insertion order (first seen first); no secondary
    key is applied.
    """
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return ranked if n is None else ranked[:n]
