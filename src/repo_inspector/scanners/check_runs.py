"""Type errors harvested from CI check-run annotations.

Annotation messages are free text written by whatever tool the CI ran, so
deciding "this is a type error" is a phrase heuristic. It is best effort:
false positives (any message mentioning "type") and misses (type checkers
with unusual wording) are both expected.
"""

import re
from typing import Iterable, List

from ..analysis.issues import Issue, Severity
from ..integrations.github.client import CheckAnnotation

TYPE_ERROR_PHRASES = (
    re.compile(r"type", re.IGNORECASE),
    re.compile(r"cannot find name", re.IGNORECASE),
    re.compile(r"property.*does not exist", re.IGNORECASE),
    re.compile(r"is not assignable to", re.IGNORECASE),
    re.compile(r"expected.*arguments", re.IGNORECASE),
    re.compile(r"undefined.*not.*object", re.IGNORECASE),
)

_ERROR_CODE = re.compile(r"TS(\d+)|error (\w+)", re.IGNORECASE)

UNKNOWN_CODE = "UNKNOWN"


def is_type_error(message: str) -> bool:
    return any(p.search(message) for p in TYPE_ERROR_PHRASES)


def extract_error_code(message: str) -> str:
    """``TS2345`` or ``error X`` from the message, else UNKNOWN."""
    m = _ERROR_CODE.search(message)
    return m.group(0) if m else UNKNOWN_CODE


def annotations_to_issues(annotations: Iterable[CheckAnnotation]) -> List[Issue]:
    """Keep annotations that read like type errors, in the order given."""
    issues: List[Issue] = []
    for annotation in annotations:
        if not is_type_error(annotation.message):
            continue
        issues.append(Issue(
            file_path=annotation.path,
            line=annotation.start_line,
            column=annotation.start_column,
            severity=Severity.ERROR if annotation.annotation_level == "failure" else Severity.WARNING,
            rule_id=extract_error_code(annotation.message),
            message=annotation.message,
            source=annotation.title,
            category="type-check",
        ))
    return issues
