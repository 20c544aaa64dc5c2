"""Table-driven, line-oriented content scanning.

A scanner is a static list of rules evaluated against every line of a file.
There is no AST and no cross-line context: each line is tested on its own,
rules in table order, and every match yields one issue.
"""

import re
from dataclasses import dataclass
from typing import Callable, FrozenSet, List, Optional, Pattern, Sequence

from ..analysis.issues import REDACTED, Issue, Severity

ColumnFn = Callable[[str, "re.Match[str]"], int]


@dataclass(frozen=True)
class Rule:
    """One line-level predicate and the issue it produces.

    The column is 1-based: the start of the named group ``at`` when the
    pattern defines one, else the start of the match, unless ``column``
    overrides it.
    """
    rule_id: str
    pattern: Pattern[str]
    severity: Severity
    message: str
    category: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    cwe: Optional[str] = None
    recommendation: Optional[str] = None
    exclude: Optional[Pattern[str]] = None  # line is exempt when this matches
    redact: bool = False  # never echo the offending line
    keep_whitespace: bool = False  # report the untrimmed line as source
    column: Optional[ColumnFn] = None

    def match(self, line: str) -> Optional["re.Match[str]"]:
        m = self.pattern.search(line)
        if m is None:
            return None
        if self.exclude is not None and self.exclude.search(line):
            return None
        return m

    def locate(self, line: str, m: "re.Match[str]") -> int:
        if self.column is not None:
            return self.column(line, m)
        if "at" in m.re.groupindex:
            return m.start("at") + 1
        return m.start() + 1

    def source_for(self, line: str) -> str:
        if self.redact:
            return REDACTED
        return line if self.keep_whitespace else line.strip()


class LineScanner:
    """Evaluate a rule table against file text."""

    def __init__(
        self,
        name: str,
        rules: Sequence[Rule],
        languages: Optional[FrozenSet[str]] = None,
    ):
        """
        Args:
            name: Scanner name used in logs
            rules: Rule table, evaluated in order for every line
            languages: Languages the rules are meaningful for (None = any)
        """
        self.name = name
        self.rules = tuple(rules)
        self.languages = languages

    def applies_to(self, language: Optional[str]) -> bool:
        return self.languages is None or language in self.languages

    def scan(self, text: str, file_path: str) -> List[Issue]:
        """Produce issues in (line, rule-table) order."""
        issues: List[Issue] = []
        for index, raw in enumerate(text.split("\n")):
            line = raw[:-1] if raw.endswith("\r") else raw
            for rule in self.rules:
                m = rule.match(line)
                if m is None:
                    continue
                issues.append(Issue(
                    file_path=file_path,
                    line=index + 1,
                    column=rule.locate(line, m),
                    severity=rule.severity,
                    rule_id=rule.rule_id,
                    message=rule.message,
                    source=rule.source_for(line),
                    category=rule.category,
                    title=rule.title,
                    description=rule.description,
                    cwe=rule.cwe,
                    recommendation=rule.recommendation,
                ))
        return issues
