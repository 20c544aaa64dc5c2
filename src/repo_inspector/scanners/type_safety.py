"""Type-safety rules for TypeScript and JavaScript sources."""

import re

from ..analysis.issues import Severity
from .base import LineScanner, Rule

TYPE_RULES = (
    Rule(
        rule_id="TS2571",
        pattern=re.compile(r":\s*(?P<at>any)\b"),
        severity=Severity.WARNING,
        message="Unexpected any. Specify a different type",
        category="type-annotation",
    ),
    # Column 0: the whole declaration is at fault, not one token
    Rule(
        rule_id="TS7006",
        pattern=re.compile(r"function\s+\w+\s*\([^)]*\)\s*\{"),
        exclude=re.compile(r":"),
        severity=Severity.WARNING,
        message="Parameter implicitly has an any type",
        category="implicit-any",
        column=lambda line, m: 0,
    ),
    Rule(
        rule_id="TS2322",
        pattern=re.compile(r"!\.|!\["),
        severity=Severity.WARNING,
        message="Forbidden non-null assertion",
        category="non-null-assertion",
    ),
)

TYPE_SCANNER = LineScanner(
    "types",
    TYPE_RULES,
    languages=frozenset({"typescript", "javascript"}),
)
