"""Lint rules: leftover debugging and legacy style."""

import re

from ..analysis.issues import Severity
from .base import LineScanner, Rule

LINT_RULES = (
    Rule(
        rule_id="no-console",
        pattern=re.compile(r"console\.log"),
        severity=Severity.WARNING,
        message="Unexpected console statement",
        category="best-practices",
    ),
    Rule(
        rule_id="no-debugger",
        pattern=re.compile(r"debugger"),
        severity=Severity.ERROR,
        message="Unexpected debugger statement",
        category="best-practices",
    ),
    Rule(
        rule_id="no-trailing-spaces",
        pattern=re.compile(r"[ \t]$"),
        severity=Severity.INFO,
        message="Trailing whitespace",
        category="style",
        keep_whitespace=True,
        column=lambda line, m: len(line),
    ),
    Rule(
        rule_id="no-var",
        pattern=re.compile(r"\b(?P<at>var)\s+"),
        severity=Severity.WARNING,
        message="Unexpected var, use let or const instead",
        category="best-practices",
    ),
)

LINT_SCANNER = LineScanner("lint", LINT_RULES)
