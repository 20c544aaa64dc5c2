"""Line-oriented content scanners and their rule tables."""

from .base import LineScanner, Rule
from .lint import LINT_RULES, LINT_SCANNER
from .security import SECURITY_RULES, SECURITY_SCANNER
from .type_safety import TYPE_RULES, TYPE_SCANNER

__all__ = [
    "LineScanner",
    "Rule",
    "LINT_RULES",
    "LINT_SCANNER",
    "SECURITY_RULES",
    "SECURITY_SCANNER",
    "TYPE_RULES",
    "TYPE_SCANNER",
]
