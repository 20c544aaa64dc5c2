"""Issue records and aggregation."""

from .aggregator import IssueSummary, aggregate, top_n
from .issues import REDACTED, Issue, Severity

__all__ = [
    "REDACTED",
    "Issue",
    "IssueSummary",
    "Severity",
    "aggregate",
    "top_n",
]
